"""@capture_option and @capture_result decorators for catching exceptions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

from klaw_match._internal.capture import capture
from klaw_match.option import Present, absent
from klaw_match.result import Failure, Success, to_error

__all__ = ['capture_option', 'capture_result']


def capture_option(
    func: Callable[..., Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that returns Present(value) on success and Absent on exception.

    Can be used with or without arguments:
        @capture_option
        def parse(raw): ...

        @capture_option(exceptions=(ValueError,))
        def parse_int(raw): ...

    ``async def`` functions return an awaitable Option.

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to the
            configured capture types.

    Returns:
        A wrapped function that returns an Option instead of raising.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        return capture(wrapped, args, kwargs, Present, lambda _exc: absent, exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper


def capture_result(
    func: Callable[..., Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that returns Success(value) on success and Failure(exc) on exception.

    Example:
        ```python
        @capture_result
        def divide(a: int, b: int) -> float:
            return a / b

        divide(10, 2)
        # Success(5.0)
        divide(10, 0)
        # Failure(ZeroDivisionError('division by zero'))
        ```

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to the
            configured capture types.

    Returns:
        A wrapped function that returns a Result instead of raising.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        return capture(wrapped, args, kwargs, Success, lambda exc: Failure(to_error(exc)), exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper
