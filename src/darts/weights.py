"""
Exact-decimal weight parsing and extraction.

Weights are never handled as binary floats: strings and integers are parsed
directly, floats go through their shortest repr so that ``0.1`` becomes
``Decimal("0.1")`` rather than ``0.1000000000000000055511151231257827``.
"""

import numbers
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

import numpy as np


def to_decimal(value: Any) -> Decimal:
    """Convert a weight literal to a finite Decimal.

    numpy scalars are accepted: integers exactly, floats through their
    shortest repr like Python floats.

    Raises:
        ValueError: if the value is not a decimal literal or is NaN/infinite.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (float, np.floating)):
        result = Decimal(str(value))
    elif isinstance(value, numbers.Integral):
        result = Decimal(int(value))
    else:
        if isinstance(value, str):
            value = value.strip()
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValueError(f"weight {value!r} is not a decimal number") from exc
    if not result.is_finite():
        raise ValueError(f"weight {value!r} is not finite")
    return result


def pair_weight(item: Any) -> Any:
    """Weight of a ``(key, weight)`` pair: always the second element."""
    _key, weight = item
    return weight


def field_weight(rate_key: str) -> Callable[[Any], Any]:
    """Accessor reading `rate_key` from a mapping or an object attribute."""

    def accessor(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item[rate_key]
        return getattr(item, rate_key)

    return accessor


def default_weight_accessor(rate_key: str = "rate") -> Callable[[Any], Any]:
    """Shape-based accessor: pairs use their second element, records `rate_key`.

    Two-element tuples and lists (as loaded from JSON) are pairs. Named
    tuples are records, not pairs.
    """
    from_field = field_weight(rate_key)

    def accessor(item: Any) -> Any:
        if (
            isinstance(item, (tuple, list))
            and len(item) == 2
            and not hasattr(item, "_fields")
        ):
            return pair_weight(item)
        return from_field(item)

    return accessor
