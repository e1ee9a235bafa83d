"""Shared score type: every score in the system lives on a 0-100 scale."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import AfterValidator


def clamp_score(value: float) -> float:
    """Clamp a numeric score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going away from zero (4.5 -> 5, 6.25 -> 6.3).

    The shortest repr of the float is rounded, so 0.3 * 15 counts as 4.5.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


Score = Annotated[float, AfterValidator(clamp_score)]
