import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up (0.5 -> 1, 62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def to_fixed(value: float, digits: int = 1) -> str:
    """Fixed-point text with halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
