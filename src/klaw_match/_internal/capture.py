"""Exception capture behind ``option.safe``, ``result.safe`` and the decorators."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from klaw_match._config import get_config
from klaw_match._internal.awaitable import is_awaitable
from klaw_match._logging import get_logger

__all__ = ['capture']

logger = get_logger(__name__)


def capture[R](
    target: Any,
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    on_value: Callable[[Any], R],
    on_error: Callable[[BaseException], R],
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> R | Awaitable[R]:
    """Run ``target`` and fold its outcome into a container.

    ``target`` is an awaitable, a callable invoked with ``args``/``kwargs``, or
    an already computed value. Exceptions of the ``exceptions`` types (the
    configured capture types by default) go to ``on_error``; anything else
    propagates. An awaitable outcome produces a coroutine that captures
    exceptions raised while awaiting.
    """
    catch = exceptions if exceptions is not None else get_config().capture

    if is_awaitable(target):
        return _capture_awaitable(target, on_value, on_error, catch)
    if not callable(target):
        return on_value(target)

    try:
        value = target(*args, **kwargs)
    except catch as exc:
        _log_captured(exc)
        return on_error(exc)

    if is_awaitable(value):
        return _capture_awaitable(value, on_value, on_error, catch)
    return on_value(value)


async def _capture_awaitable[R](
    awaitable: Awaitable[Any],
    on_value: Callable[[Any], R],
    on_error: Callable[[BaseException], R],
    catch: tuple[type[BaseException], ...],
) -> R:
    try:
        value = await awaitable
    except catch as exc:
        _log_captured(exc)
        return on_error(exc)
    return on_value(value)


def _log_captured(exc: BaseException) -> None:
    logger.debug('safe.captured', error_type=type(exc).__name__, error=str(exc))
