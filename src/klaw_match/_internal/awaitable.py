"""Immediate-or-deferred value normalization.

Every transformation that runs a caller-supplied function may receive either a
plain value or an awaitable back. This module is the single place where the two
are told apart and folded into one awaitable shape, so callers can ``await``
the outcome of ``map``/``and_then``/``or_else`` without caring which one the
function produced.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any, TypeIs

__all__ = ['Ready', 'is_awaitable', 'resolve', 'then']


def is_awaitable(value: object) -> TypeIs[Awaitable[Any]]:
    """Return True if ``value`` can be awaited.

    Checked structurally: coroutines, futures and any object defining
    ``__await__`` all qualify.
    """
    return inspect.isawaitable(value)


class Ready[T]:
    """An awaitable that is already resolved.

    Awaiting a Ready never suspends and may be repeated any number of times,
    unlike a coroutine object.

    Examples:
        >>> import asyncio
        >>> async def main():
        ...     ready = Ready(42)
        ...     return await ready, await ready
        >>> asyncio.run(main())
        (42, 42)
    """

    __slots__ = ('value',)

    def __init__(self, value: T) -> None:
        self.value = value

    def __await__(self) -> Generator[Any, Any, T]:
        yield from ()
        return self.value

    def __repr__(self) -> str:
        return f'Ready({self.value!r})'


def resolve[T](value: T | Awaitable[T]) -> Awaitable[T]:
    """Normalize a value or an awaitable into an awaitable."""
    if is_awaitable(value):
        return value
    return Ready(value)


def then[T, U](value: T | Awaitable[T], f: Callable[[T], U]) -> Awaitable[U]:
    """Apply ``f`` once ``value`` is available.

    A plain value is handed to ``f`` right away and the outcome wrapped in a
    :class:`Ready`. An awaitable is chained: ``f`` runs when the returned
    coroutine is awaited. Exceptions raised by ``f`` are not intercepted.
    """
    if is_awaitable(value):
        return _chain(value, f)
    return Ready(f(value))


async def _chain[T, U](awaitable: Awaitable[T], f: Callable[[T], U]) -> U:
    return f(await awaitable)
