"""Clamping guards applied at every arithmetic step of the pricing engine."""
import math
from typing import Any


def to_number(value: Any) -> float:
    """
    Read a value as a finite number.

    Anything that is not a real int/float (strings, None, bools, NaN,
    infinities) reads as 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def non_negative(value: Any) -> float:
    """Clamp a value to a floor of 0."""
    return max(0.0, to_number(value))


def at_least_one(value: Any) -> float:
    """Clamp a quantity to a floor of 1."""
    return max(1, to_number(value))
