"""Fixed storage scale for money and quantities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN

# Decimal places kept for every balance, quantity, price and total
STORAGE_SCALE = 10
QUANTUM = Decimal(1).scaleb(-STORAGE_SCALE)


def fits_scale(value: Decimal) -> bool:
    """True if value is representable at STORAGE_SCALE without rounding."""
    try:
        return value == value.quantize(QUANTUM)
    except InvalidOperation:
        # Too many digits for the decimal context
        return False


def to_scale(value: Decimal, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """Round value to STORAGE_SCALE decimal places."""
    return value.quantize(QUANTUM, rounding=rounding)
