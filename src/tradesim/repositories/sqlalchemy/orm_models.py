"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Numeric,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from tradesim.core.precision import STORAGE_SCALE, fits_scale
from tradesim.repositories.sqlalchemy.database import Base
from tradesim.domain.models.enums import TradeSide


class ExactDecimal(TypeDecorator):
    """
    Decimal column stored without rounding.

    NUMERIC(28, STORAGE_SCALE) where the backend has a real decimal type;
    text on SQLite, whose NUMERIC affinity would round through REAL.
    Binding a value finer than STORAGE_SCALE raises instead of rounding.
    """

    impl = Numeric(precision=28, scale=STORAGE_SCALE)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(40))
        return dialect.type_descriptor(Numeric(precision=28, scale=STORAGE_SCALE))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(value)
        if not fits_scale(value):
            raise ValueError(f"Value exceeds {STORAGE_SCALE} decimal places: {value}")
        return str(value) if dialect.name == "sqlite" else value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value))


class AccountORM(Base):
    """SQLAlchemy model for the simulator account."""

    __tablename__ = "accounts"

    account_id = Column(Integer, primary_key=True, autoincrement=False)
    balance = Column(ExactDecimal(), nullable=False, default=Decimal("0"))

    holdings = relationship(
        "HoldingORM",
        back_populates="account",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    transactions = relationship("TransactionORM", back_populates="account")


class HoldingORM(Base):
    """SQLAlchemy model for a held quantity of one symbol."""

    __tablename__ = "holdings"

    account_id = Column(Integer, ForeignKey("accounts.account_id"), primary_key=True)
    symbol = Column(String(32), primary_key=True)
    quantity = Column(ExactDecimal(), nullable=False)

    account = relationship("AccountORM", back_populates="holdings")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    symbol = Column(String(32), nullable=False)
    amount = Column(ExactDecimal(), nullable=False)
    unit_price = Column(ExactDecimal(), nullable=False)
    total_value = Column(ExactDecimal(), nullable=False)
    side = Column(SqlEnum(TradeSide), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    account = relationship("AccountORM", back_populates="transactions")
