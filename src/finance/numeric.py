from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from finance.errors import InvalidInputError


def require_finite(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from exc
    if math.isnan(number) or math.isinf(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


def require_non_negative(name: str, value: Any) -> float:
    number = require_finite(name, value)
    if number < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {number}")
    return number


def require_positive(name: str, value: Any) -> float:
    number = require_finite(name, value)
    if number <= 0:
        raise InvalidInputError(f"{name} must be > 0, got {number}")
    return number


def round_currency(value: float) -> int:
    """Round half away from zero to a whole currency unit (Python's round() is half-to-even)."""
    return int(Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
