import math
from numbers import Real
from typing import Any


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans and numeric strings are not numbers here."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


__all__ = ["is_finite_number"]
