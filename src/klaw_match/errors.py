"""Error types raised by the container algebras and the matching engine."""

from __future__ import annotations

from typing import Any

__all__ = [
    'CapturedError',
    'KlawMatchError',
    'NoMatchError',
    'UnwrapError',
]


class KlawMatchError(Exception):
    """Base class for every error raised by klaw-match."""


# --- Unwrapping ---


class UnwrapError(KlawMatchError):
    """A container was unwrapped while holding the unexpected variant.

    Raised by ``expect``/``unwrap``/``expect_err``/``unwrap_err``. Never
    caught inside the library.
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or 'Failed to unwrap')


# --- Matching ---


class NoMatchError(KlawMatchError):
    """No branch matched and no catch-all was given."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        super().__init__('No matching branch found')


# --- Capturing ---


class CapturedError(KlawMatchError):
    """Generic error wrapping a captured value that is not an exception."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(str(value))
