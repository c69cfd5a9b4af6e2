"""Logging for klaw-match.

The library logs through structlog loggers bound to the stdlib ``klaw_match``
logger hierarchy and filtered by its level, so it stays silent until the
application enables it. Events, all at debug level:

    safe.captured    an exception was folded into ``absent`` or a Failure
                     (``error_type``, ``error``)
    match.fallback   no branch matched and the fallback ran
                     (``mode``, ``custom``)

Hooks registered with :func:`add_log_hook` receive a copy of every event dict
that passes the level filter, whether or not a handler renders it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from contextlib import suppress
from typing import IO, Any

import structlog

__all__ = [
    'LOGGER_NAME',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

LOGGER_NAME = 'klaw_match'

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []


def add_log_hook(hook: LogHook) -> None:
    """Call ``hook`` with each library event that passes the level filter."""
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    _log_hooks.clear()


def _dispatch_to_hooks(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in tuple(_log_hooks):
        # a raising hook never affects the call that logged
        with suppress(Exception):
            hook(dict(event_dict))
    return event_dict


_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    _dispatch_to_hooks,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger over the stdlib logger ``name``.

    Library modules pass ``__name__``, which places them under the
    ``klaw_match`` logger.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAME),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Render library events to ``stream`` (stderr by default).

    Only the ``klaw_match`` logger is touched: its level is set, its handler
    replaced and propagation to the root logger turned off. Calling it again
    reconfigures the same logger.

    Args:
        level: Logging level name ("DEBUG", "INFO", ...).
        json_output: One JSON object per line if True, console rendering otherwise.
        stream: Text stream to write to.

    Returns:
        The configured stdlib logger.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.TimeStamper(fmt='iso'),
                renderer,
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers[:] = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger
