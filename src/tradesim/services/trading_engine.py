"""Trading engine: simulated buys and sells against live prices."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_UP
from typing import Optional, Union

from tradesim.core.precision import STORAGE_SCALE, QUANTUM, fits_scale, to_scale
from tradesim.core.timezone import now_utc
from tradesim.domain.models import Transaction, TradeSide, TradeErrorKind
from tradesim.domain.views import TradeResult
from tradesim.services.ledger_service import LedgerService
from tradesim.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

AmountLike = Union[Decimal, int, str, float]


def _fmt(value: Decimal) -> str:
    """Plain notation without storage padding: 5000.0000000000 -> 5000."""
    return f"{value.normalize():f}"


def resolve_price_key(
    symbol: str,
    prices: dict[str, Decimal],
    quote_currency: str = "USD",
) -> Optional[str]:
    """
    Map a user-supplied symbol to the key it trades under.

    The symbol itself wins if it is priced, otherwise ``SYMBOL/USD`` is
    tried. No case folding or fuzzy matching: "BTC" and "BTC/USD" reach
    the same instrument, "btc" does not.
    """
    if symbol in prices:
        return symbol
    qualified = f"{symbol}/{quote_currency}"
    if qualified in prices:
        return qualified
    return None


class TradingEngine:
    """
    Executes buy and sell requests against the single ledger.

    Rejections come back as TradeResult values with a TradeErrorKind and
    leave the ledger untouched. Storage faults (for example a missing
    account) still raise.
    """

    def __init__(
        self,
        ledger: LedgerService,
        price_cache: PriceCache,
        quote_currency: str = "USD",
    ):
        self._ledger = ledger
        self._prices = price_cache
        self._quote_currency = quote_currency

    def get_prices(self) -> dict[str, Decimal]:
        """Current price snapshot (symbol -> price)."""
        return self._prices.snapshot()

    def resolve_price(self, symbol: str) -> Optional[Decimal]:
        """Return the current price for symbol under the resolution rule, or None."""
        prices = self._prices.snapshot()
        key = resolve_price_key(symbol, prices, self._quote_currency)
        return prices[key] if key else None

    def buy(self, symbol: str, amount: AmountLike) -> TradeResult:
        """Buy amount of symbol at the current price, paying from the balance."""
        quantity, rejection = self._validate_amount(amount)
        if rejection is not None:
            return rejection

        with self._ledger.locked():
            price = self._execution_price(symbol)
            if price is None:
                return self._reject(
                    TradeErrorKind.SYMBOL_UNAVAILABLE,
                    f"Cryptocurrency not available: {symbol}",
                )

            balance = self._ledger.get_balance()
            if price * quantity > balance:
                return self._reject(
                    TradeErrorKind.INSUFFICIENT_FUNDS,
                    f"Insufficient funds. Your balance is ${_fmt(balance)}",
                )

            # Balance sits on the storage grid, so rounding up cannot pass it
            cost = to_scale(price * quantity, ROUND_UP)
            transaction = self._ledger.apply_trade(
                Transaction(
                    symbol=symbol,
                    amount=quantity,
                    unit_price=price,
                    total_value=cost,
                    side=TradeSide.BUY,
                    timestamp=now_utc(),
                )
            )

        message = f"Successfully bought {_fmt(quantity)} {symbol} for ${_fmt(cost)}"
        logger.info(message)
        return TradeResult.executed(transaction, message)

    def sell(self, symbol: str, amount: AmountLike) -> TradeResult:
        """Sell amount of a held symbol at the current price, crediting the balance."""
        quantity, rejection = self._validate_amount(amount)
        if rejection is not None:
            return rejection

        with self._ledger.locked():
            held = self._ledger.get_account().quantity_of(symbol)
            if held < quantity:
                return self._reject(
                    TradeErrorKind.INSUFFICIENT_HOLDINGS,
                    f"Insufficient holdings of {symbol}",
                )

            price = self._execution_price(symbol)
            if price is None:
                return self._reject(
                    TradeErrorKind.SYMBOL_UNAVAILABLE,
                    f"Cryptocurrency not available: {symbol}",
                )

            revenue = to_scale(price * quantity, ROUND_DOWN)
            if revenue <= 0:
                return self._reject(
                    TradeErrorKind.INVALID_AMOUNT,
                    f"Trade value is below ${_fmt(QUANTUM)}",
                )

            transaction = self._ledger.apply_trade(
                Transaction(
                    symbol=symbol,
                    amount=quantity,
                    unit_price=price,
                    total_value=revenue,
                    side=TradeSide.SELL,
                    timestamp=now_utc(),
                )
            )

        message = f"Successfully sold {_fmt(quantity)} {symbol} for ${_fmt(revenue)}"
        logger.info(message)
        return TradeResult.executed(transaction, message)

    def reset(self) -> str:
        """Reset the account and return a confirmation message."""
        self._ledger.reset()
        return f"Account has been reset to the initial balance of ${_fmt(self._ledger.initial_balance)}"

    def _execution_price(self, symbol: str) -> Optional[Decimal]:
        """Resolved price rounded to the storage grid, or None if unusable."""
        price = self.resolve_price(symbol)
        if price is None:
            return None
        price = to_scale(price)
        return price if price > 0 else None

    def _validate_amount(
        self,
        amount: AmountLike,
    ) -> tuple[Optional[Decimal], Optional[TradeResult]]:
        """Return (quantity, None) for a usable amount, else (None, rejection)."""
        quantity = self._parse_amount(amount)
        if quantity is None:
            return None, self._reject(TradeErrorKind.INVALID_AMOUNT, "Amount must be greater than 0")
        if not fits_scale(quantity):
            return None, self._reject(
                TradeErrorKind.INVALID_AMOUNT,
                f"Amount must have at most {STORAGE_SCALE} decimal places",
            )
        return quantity, None

    @staticmethod
    def _parse_amount(amount: AmountLike) -> Optional[Decimal]:
        """Return amount as a positive finite Decimal, or None."""
        if isinstance(amount, bool):
            return None
        try:
            quantity = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            return None
        if not quantity.is_finite() or quantity <= 0:
            return None
        return quantity

    @staticmethod
    def _reject(error: TradeErrorKind, message: str) -> TradeResult:
        logger.info("Trade rejected (%s): %s", error.value, message)
        return TradeResult.rejected(error, message)
