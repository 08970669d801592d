"""formulab core module."""

import math
from numbers import Real

from formulab.core.fields import FieldKind, FieldRegistry, UnknownFieldError


def as_finite(value: object) -> float | None:
    """Return *value* as a float if it is a finite real number, else ``None``.

    Booleans and strings are not treated as numbers.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


__all__ = [
    "as_finite",
    "FieldKind",
    "FieldRegistry",
    "UnknownFieldError",
]
