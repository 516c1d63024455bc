"""Fail-soft field normalization shared by `Match` and `Request`.

Every helper here maps arbitrary input to either a valid stored value or a default. None of them
raise.
"""

from __future__ import annotations

import numbers
from decimal import Decimal
from typing import Any


def is_real_number(value: Any) -> bool:
    """Return True for real numbers (including `Decimal`) other than NaN.

    `bool` is not treated as a number.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return not value.is_nan()
    if not isinstance(value, numbers.Real):
        return False
    # NaN is the only value not equal to itself.
    return value == value


def optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def clamp_probability(value: Any) -> float:
    """Clamp a probability into `[0.0, 1.0]`; non-numbers (and NaN) become `1.0`."""

    if not is_real_number(value):
        return 1.0
    if value < 0:
        return 0.0
    if value > 1:
        return 1.0
    return float(value)


def normalize_request_id(value: Any) -> str | None:
    """Return a string id: strings as-is, numbers in string form, anything else `None`.

    Integral floats render without a fractional part (`42.0` -> `"42"`).
    """

    if isinstance(value, str):
        return value
    if not is_real_number(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return str(value)
    except ValueError:
        # int-to-str conversion limit (sys.get_int_max_str_digits)
        return None


def normalize_locales(value: Any) -> list[str]:
    """Return the string locales of a list/tuple in first-seen order, without duplicates."""

    if not isinstance(value, (list, tuple)):
        return []
    return list(dict.fromkeys(item for item in value if isinstance(item, str)))
