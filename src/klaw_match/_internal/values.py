"""Value predicates shared by the container algebras."""

from __future__ import annotations

import math
from typing import Any

__all__ = ['is_nullish', 'same_value']


def is_nullish(value: Any) -> bool:
    """Return True for None and float NaN."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def same_value(a: Any, b: Any) -> bool:
    """Identity, then equality.

    An equality check that raises, or whose outcome has no truth value
    (element-wise array comparison), counts as not the same.
    """
    if a is b:
        return True
    try:
        return bool(a == b)
    except Exception:  # noqa: BLE001
        return False
