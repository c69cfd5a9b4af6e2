"""Process-wide configuration: MatchConfig, init and get_config."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_match._logging import configure_logging

__all__ = [
    'MatchConfig',
    'get_config',
    'init',
]

_LOG_LEVEL_ENV = 'KLAW_MATCH_LOG_LEVEL'
_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for klaw-match.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_output: Render logs as JSON instead of colored console output.
        capture: Exception types converted into values by ``safe``.
    """

    log_level: str | None = None
    json_output: bool = True
    capture: tuple[type[BaseException], ...] = (Exception,)


# Global configuration (set by init())
_config: MatchConfig | None = None


def _detect_log_level() -> str | None:
    """Read the log level from the KLAW_MATCH_LOG_LEVEL environment variable."""
    env_level = os.environ.get(_LOG_LEVEL_ENV, '').strip().upper()
    if not env_level:
        return None
    if env_level not in _LEVELS:
        logging.warning("Unknown %s value '%s', defaulting to INFO", _LOG_LEVEL_ENV, env_level)
        return 'INFO'
    return env_level


def _validate_capture(capture: tuple[type[BaseException], ...]) -> tuple[type[BaseException], ...]:
    if not isinstance(capture, tuple) or not capture:
        msg = f'capture must be a non-empty tuple of exception types, got {capture!r}'
        raise TypeError(msg)
    for exc_type in capture:
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            msg = f'capture entries must be exception types, got {exc_type!r}'
            raise TypeError(msg)
    return capture


def init(
    log_level: str | None = None,
    *,
    json_output: bool = True,
    capture: tuple[type[BaseException], ...] | None = None,
) -> MatchConfig:
    """Initialize klaw-match with the given configuration.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). Read from
            KLAW_MATCH_LOG_LEVEL if None; None there too means silent.
        json_output: Emit JSON logs when logging is configured.
        capture: Exception types that ``safe`` converts into values.
            Defaults to (Exception,).

    Returns:
        The MatchConfig that was set.

    Raises:
        TypeError: If capture is not a non-empty tuple of exception types.

    Example:
        ```python
        from klaw_match import init

        init(log_level="DEBUG", json_output=False)
        init(capture=(ValueError, KeyError))
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level if log_level is not None else _detect_log_level()
    resolved_capture = _validate_capture(capture) if capture is not None else (Exception,)

    _config = MatchConfig(
        log_level=resolved_level,
        json_output=json_output,
        capture=resolved_capture,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=json_output)

    return _config


def get_config() -> MatchConfig:
    """Get the current configuration, initializing defaults on first use."""
    if _config is None:
        return init()
    return _config
