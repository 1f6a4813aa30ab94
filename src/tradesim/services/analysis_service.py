"""Analysis service for profit/loss and portfolio valuation."""

from decimal import Decimal

from tradesim.domain.models import TradeSide
from tradesim.domain.views import PositionView, PortfolioView
from tradesim.services.ledger_service import LedgerService
from tradesim.services.trading_engine import TradingEngine


class AnalysisService:
    """
    Read-only reporting over the ledger.

    Nothing is maintained incrementally; every call recomputes from the
    current ledger state.
    """

    def __init__(
        self,
        ledger: LedgerService,
        trading_engine: TradingEngine,
    ):
        self._ledger = ledger
        self._engine = trading_engine

    def profit_loss(self) -> dict[str, Decimal]:
        """
        Realized profit/loss per symbol.

        Formula: Σ(SELL total_value) - Σ(BUY total_value), for every symbol
        bought at least once. Symbols appear in order of first trade.
        """
        bought: dict[str, Decimal] = {}
        sold: dict[str, Decimal] = {}

        for txn in self._ledger.get_history():
            bucket = bought if txn.side == TradeSide.BUY else sold
            bucket[txn.symbol] = bucket.get(txn.symbol, Decimal("0")) + txn.total_value

        return {
            symbol: sold.get(symbol, Decimal("0")) - total_bought
            for symbol, total_bought in bought.items()
        }

    def portfolio(self) -> PortfolioView:
        """
        Cash plus holdings valued at current prices.

        Holdings without a current price are listed without a value and
        left out of total_value.
        """
        account = self._ledger.get_account()

        positions: list[PositionView] = []
        total_value = account.balance
        for symbol, quantity in account.holdings.items():
            price = self._engine.resolve_price(symbol)
            if price is None:
                positions.append(PositionView(symbol=symbol, quantity=quantity))
                continue
            market_value = quantity * price
            total_value += market_value
            positions.append(
                PositionView(
                    symbol=symbol,
                    quantity=quantity,
                    last_price=price,
                    market_value=market_value,
                )
            )

        # Sort by market value descending, unpriced last
        positions.sort(key=lambda p: p.market_value if p.market_value is not None else Decimal("-1"), reverse=True)

        return PortfolioView(
            cash_balance=account.balance,
            positions=positions,
            total_value=total_value,
        )
