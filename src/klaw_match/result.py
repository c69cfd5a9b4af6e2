"""Result type: Success[T] | Failure[E], with a namespaced function algebra.

Mirrors :mod:`klaw_match.option`, with an error payload on the negative
branch instead of a bare absence.

Example:
    ```python
    from klaw_match import result

    res = result.safe(int, 'x')  # Failure(ValueError(...))
    result.unwrap_or(res, 0)  # 0
    await result.map_err(res, str)  # Failure("invalid literal for int() ...")
    ```

The combinators that may switch to an alternate Result (``and_``, ``or_``,
``and_then``, ``or_else``) let that alternate carry a different error type;
the error type of the outcome is the union of both.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, TypeIs, overload

import msgspec

from klaw_match._internal.awaitable import Ready, resolve, then
from klaw_match._internal.call import call_with_value
from klaw_match._internal.capture import capture
from klaw_match._internal.values import is_nullish, same_value
from klaw_match._internal.variant import Variant
from klaw_match.errors import CapturedError, UnwrapError

if TYPE_CHECKING:
    from klaw_match.option import Option

__all__ = [
    'Failure',
    'Result',
    'Success',
    'and_',
    'and_then',
    'err',
    'expect',
    'expect_err',
    'failure',
    'flatten',
    'into',
    'is_',
    'is_failure',
    'is_result',
    'is_success',
    'iter',
    'map',
    'map_err',
    'map_or',
    'non_nullable',
    'ok',
    'or_',
    'or_else',
    'safe',
    'success',
    'to_error',
    'unwrap',
    'unwrap_err',
    'unwrap_or',
    'unwrap_or_else',
]


class Success[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Success(5)
        Success(5)
    """

    value: T
    variant: ClassVar[Variant] = Variant.OK

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __repr__(self) -> str:
        return f'Success({self.value!r})'


class Failure[E](msgspec.Struct, frozen=True, gc=False):
    """Failure variant of Result containing an error of type E.

    The error is usually an exception but any value is accepted.
    """

    error: E
    variant: ClassVar[Variant] = Variant.ERR

    def __iter__(self) -> Iterator[Any]:
        yield from ()

    def __repr__(self) -> str:
        return f'Failure({self.error!r})'


type Result[T, E] = Success[T] | Failure[E]


# --- Construction & variant tests ---


def success[T](value: T) -> Success[T]:
    """Wrap a value in Success."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Wrap an error in Failure."""
    return Failure(error)


def is_result(value: object) -> TypeIs[Result[Any, Any]]:
    """Return True if ``value`` is a Success or Failure container."""
    return isinstance(value, (Success, Failure))


def is_success[T, E](res: Result[T, E]) -> TypeIs[Success[T]]:
    """Return True if the result is a Success."""
    return res.variant is Variant.OK


def is_failure[T, E](res: Result[T, E]) -> TypeIs[Failure[E]]:
    """Return True if the result is a Failure."""
    return res.variant is Variant.ERR


# --- Extraction ---


def unwrap_or[T, E, U](res: Result[T, E], default: U) -> T | U:
    """Return the success value or ``default``."""
    return res.value if is_success(res) else default


def unwrap_or_else[T, E, U](res: Result[T, E], fn: Callable[..., U | Awaitable[U]]) -> Awaitable[T | U]:
    """Resolve to the success value, or to one computed from the failure.

    ``fn`` receives the error if it takes an argument and may be ``async``.
    The outcome is always awaitable.
    """
    if is_success(res):
        return Ready(res.value)
    return resolve(call_with_value(fn, res.error))


def expect[T, E](res: Result[T, E], message: str) -> T:
    """Return the success value.

    Raises:
        UnwrapError: If the result is a Failure, carrying ``message``. An
            exception held by the Failure is chained as the cause.
    """
    if is_success(res):
        return res.value
    cause = res.error if isinstance(res.error, BaseException) else None
    raise UnwrapError(message) from cause


def unwrap[T, E](res: Result[T, E]) -> T:
    """Return the success value, raising UnwrapError for a Failure."""
    return expect(res, 'Failed to unwrap Result (found Err)')


def expect_err[T, E](res: Result[T, E], message: str | None = None) -> E:
    """Return the error held by a Failure.

    Raises:
        UnwrapError: If the result is a Success.
    """
    if is_failure(res):
        return res.error
    raise UnwrapError(message)


def unwrap_err[T, E](res: Result[T, E]) -> E:
    """Return the error, raising UnwrapError for a Success."""
    return expect_err(res, 'Failed to unwrapErr Result (found Ok)')


def into[T, E, U](res: Result[T, E], default: U | None = None) -> T | U | None:
    """Return the success value, or ``default`` (None unless given)."""
    return res.value if is_success(res) else default


def iter[T, E](res: Result[T, E]) -> Iterator[T]:
    """Iterate over the success value: one element for Success, none for Failure."""
    if is_success(res):
        yield res.value


def is_[T, E](res: Result[T, E], other: object) -> bool:
    """Return True if both results are Successes with identical or equal values."""
    return (
        is_success(res)
        and is_result(other)
        and is_success(other)
        and same_value(res.value, other.value)
    )


def ok[T, E](res: Result[T, E]) -> Option[T]:
    """Convert to an Option of the success value, discarding the error."""
    from klaw_match.option import Present, absent

    return Present(res.value) if is_success(res) else absent


def err[T, E](res: Result[T, E]) -> Option[E]:
    """Convert to an Option of the error, discarding the success value."""
    from klaw_match.option import Present, absent

    return Present(res.error) if is_failure(res) else absent


# --- Transformation ---


def map[T, E, U](res: Result[T, E], fn: Callable[[T], U | Awaitable[U]]) -> Awaitable[Result[U, E]]:
    """Apply ``fn`` to the success value and wrap the outcome in Success.

    Failures pass through without calling ``fn``. The outcome is always
    awaitable.
    """
    if is_failure(res):
        return Ready(res)
    return then(fn(res.value), Success)


def map_or[T, E, U, V](res: Result[T, E], default: V, fn: Callable[[T], U | Awaitable[U]]) -> Awaitable[U | V]:
    """Apply ``fn`` to the success value, or resolve to ``default`` for a Failure."""
    if is_failure(res):
        return Ready(default)
    return resolve(fn(res.value))


def map_err[T, E, F](res: Result[T, E], fn: Callable[[E], F | Awaitable[F]]) -> Awaitable[Result[T, F]]:
    """Apply ``fn`` to the error, leaving a Success untouched.

    ``fn`` is never called for a Success. The outcome is always awaitable.
    """
    if is_success(res):
        return Ready(res)
    return then(fn(res.error), Failure)


def and_then[T, E, U, F](
    res: Result[T, E], fn: Callable[[T], Result[U, F] | Awaitable[Result[U, F]]]
) -> Awaitable[Result[U, E | F]]:
    """Chain a computation that itself returns a Result.

    A Failure short-circuits without calling ``fn``.
    """
    if is_failure(res):
        return Ready(res)
    return resolve(fn(res.value))


def or_else[T, E, U, F](
    res: Result[T, E], fn: Callable[..., Result[U, F] | Awaitable[Result[U, F]]]
) -> Awaitable[Result[T | U, F]]:
    """Keep a Success, or recover from a Failure with ``fn``.

    ``fn`` receives the error if it takes an argument.
    """
    if is_success(res):
        return Ready(res)
    return resolve(call_with_value(fn, res.error))


def and_[T, E, U, F](res: Result[T, E], other: Result[U, F]) -> Result[U, E | F]:
    """Return ``other`` if ``res`` is a Success, else ``res``."""
    return other if is_success(res) else res


def or_[T, E, U, F](res: Result[T, E], other: Result[U, F]) -> Result[T | U, F]:
    """Return ``res`` if it is a Success, else ``other``."""
    return res if is_success(res) else other


def flatten[T, E](res: Result[Result[T, E], E]) -> Result[T, E]:
    """Remove one level of nesting from ``Result[Result[T, E], E]``."""
    return res.value if is_success(res) else res


# --- Safe invocation ---


def to_error(raw: Any) -> BaseException:
    """Normalize a captured value into an exception.

    Exceptions are returned unchanged; anything else is wrapped in a
    CapturedError carrying ``str(raw)``.
    """
    if isinstance(raw, BaseException):
        return raw
    return CapturedError(raw)


@overload
def safe[T](target: Awaitable[T], /) -> Awaitable[Result[T, BaseException]]: ...
@overload
def safe[T](
    target: Callable[..., Awaitable[T]], /, *args: Any, **kwargs: Any
) -> Awaitable[Result[T, BaseException]]: ...
@overload
def safe[T](target: Callable[..., T], /, *args: Any, **kwargs: Any) -> Result[T, BaseException]: ...
def safe(target: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Call ``target(*args, **kwargs)`` (or await ``target``) and capture failure.

    Example:
        ```python
        result.safe(int, '42')  # Success(42)
        result.safe(int, 'x')  # Failure(ValueError("invalid literal ..."))
        await result.safe(fetch_user(1))  # Success(user) or Failure(exc)
        ```
    """
    return capture(target, args, kwargs, Success, _to_failure)


def _to_failure(exc: BaseException) -> Failure[BaseException]:
    return Failure(to_error(exc))


def non_nullable[T](value: T | None) -> Result[T, None]:
    """Return Success(value) unless ``value`` is None or NaN, then Failure(None)."""
    return Failure(None) if is_nullish(value) else Success(value)
