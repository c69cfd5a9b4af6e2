"""Invoke caller-supplied handlers with or without a value.

Branch handlers, catch-alls and fallbacks are commonly written both ways,
``lambda v: ...`` and ``lambda: ...``. The value is passed only when the
callable can take a positional argument.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

__all__ = ['call_with_value']

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def call_with_value[U](fn: Callable[..., U], value: Any) -> U:
    """Call ``fn(value)`` if ``fn`` accepts an argument, else ``fn()``."""
    if _accepts_argument(fn):
        return fn(value)
    return fn()


def _accepts_argument(fn: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # builtins without introspectable signatures
        return True
    return any(param.kind in _POSITIONAL for param in signature.parameters.values())
