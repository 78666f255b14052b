"""Display rounding helpers."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round the exact binary value half away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_percent(value: float) -> int:
    """Round a percentage to the nearest integer, halves up."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))
