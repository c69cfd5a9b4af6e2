"""Option type: Present[T] | Absent, with a namespaced function algebra.

An Option is either ``Present(value)`` or the shared ``absent`` singleton.
Operations are plain functions taking the container first, meant to be used
through the module namespace:

Example:
    ```python
    from klaw_match import option

    opt = option.present(21)
    option.unwrap_or(opt, 0)  # 21
    await option.map(opt, lambda x: x * 2)  # Present(42)

    option.non_nullable(None)  # Absent
    option.safe(int, 'nope')  # Absent
    ```

Functions that run a caller-supplied transformation (``map``, ``map_or``,
``and_then``, ``or_else``) always return an awaitable, whether the function is
synchronous or ``async``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, TypeIs, overload

import msgspec

from klaw_match._internal.awaitable import Ready, resolve, then
from klaw_match._internal.capture import capture
from klaw_match._internal.values import is_nullish, same_value
from klaw_match._internal.variant import Variant
from klaw_match.errors import UnwrapError

if TYPE_CHECKING:
    from klaw_match.result import Result

__all__ = [
    'AbsentType',
    'Option',
    'Present',
    'absent',
    'and_',
    'and_then',
    'expect',
    'filter',
    'flatten',
    'into',
    'is_',
    'is_absent',
    'is_option',
    'is_present',
    'iter',
    'map',
    'map_or',
    'non_nullable',
    'ok_or',
    'or_',
    'or_else',
    'present',
    'safe',
    'unwrap',
    'unwrap_or',
    'unwrap_or_else',
]


class Present[T](msgspec.Struct, frozen=True, gc=False):
    """Present variant of Option containing a value of type T.

    Examples:
        >>> Present(42)
        Present(42)
        >>> list(Present(42))
        [42]
    """

    value: T
    variant: ClassVar[Variant] = Variant.SOME

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __repr__(self) -> str:
        return f'Present({self.value!r})'


class AbsentType(msgspec.Struct, frozen=True, gc=False):
    """Absent variant of Option representing the lack of a value.

    Use the ``absent`` singleton instead of instantiating directly.
    """

    variant: ClassVar[Variant] = Variant.NONE

    def __iter__(self) -> Iterator[Any]:
        yield from ()

    def __repr__(self) -> str:
        return 'Absent'


absent: AbsentType = AbsentType()
"""Singleton instance representing the absence of a value."""

type Option[T] = Present[T] | AbsentType


# --- Construction & variant tests ---


def present[T](value: T) -> Present[T]:
    """Wrap a value in Present."""
    return Present(value)


def is_option(value: object) -> TypeIs[Option[Any]]:
    """Return True if ``value`` is a Present or Absent container."""
    return isinstance(value, (Present, AbsentType))


def is_present[T](opt: Option[T]) -> TypeIs[Present[T]]:
    """Return True if the option holds a value."""
    return opt.variant is Variant.SOME


def is_absent[T](opt: Option[T]) -> TypeIs[AbsentType]:
    """Return True if the option is Absent."""
    return opt.variant is Variant.NONE


# --- Extraction ---


def unwrap_or[T, U](opt: Option[T], default: U) -> T | U:
    """Return the contained value or ``default``.

    Args:
        opt: The option to unwrap.
        default: Value returned when the option is Absent.

    Returns:
        The contained value if Present, otherwise ``default``.
    """
    return opt.value if is_present(opt) else default


def unwrap_or_else[T, U](opt: Option[T], fn: Callable[[], U | Awaitable[U]]) -> T | U | Awaitable[U]:
    """Return the contained value or compute one with ``fn``.

    ``fn`` is only called for Absent. When it is ``async`` its awaitable is
    returned as is, for the caller to await.
    """
    return opt.value if is_present(opt) else fn()


def expect[T](opt: Option[T], message: str) -> T:
    """Return the contained value.

    Raises:
        UnwrapError: If the option is Absent, carrying ``message``.
    """
    if is_present(opt):
        return opt.value
    raise UnwrapError(message)


def unwrap[T](opt: Option[T]) -> T:
    """Return the contained value, raising UnwrapError for Absent."""
    return expect(opt, 'Failed to unwrap Option (found None)')


def into[T, U](opt: Option[T], default: U | None = None) -> T | U | None:
    """Return the contained value, or ``default`` (None unless given)."""
    return opt.value if is_present(opt) else default


def iter[T](opt: Option[T]) -> Iterator[T]:
    """Iterate over the contained value: one element if Present, none if Absent.

    Each call returns a fresh iterator.
    """
    if is_present(opt):
        yield opt.value


def is_[T](opt: Option[T], other: object) -> bool:
    """Return True if both options are Present with identical or equal values."""
    return (
        is_present(opt)
        and is_option(other)
        and is_present(other)
        and same_value(opt.value, other.value)
    )


# --- Transformation ---


def map[T, U](opt: Option[T], fn: Callable[[T], U | Awaitable[U]]) -> Awaitable[Option[U]]:
    """Apply ``fn`` to the contained value and wrap the outcome in Present.

    ``fn`` may be synchronous or ``async``; the outcome is always awaitable.
    For Absent, ``fn`` is never called.

    Args:
        opt: The option to transform.
        fn: Function applied to the value if Present.

    Returns:
        An awaitable resolving to Present(fn(value)), or to Absent.
    """
    if is_absent(opt):
        return Ready(opt)
    return then(fn(opt.value), Present)


def map_or[T, U, V](opt: Option[T], default: V, fn: Callable[[T], U | Awaitable[U]]) -> Awaitable[U | V]:
    """Apply ``fn`` to the contained value, or resolve to ``default`` for Absent."""
    if is_absent(opt):
        return Ready(default)
    return resolve(fn(opt.value))


def and_then[T, U](opt: Option[T], fn: Callable[[T], Option[U] | Awaitable[Option[U]]]) -> Awaitable[Option[U]]:
    """Chain a computation that itself returns an Option.

    Also known as flatmap or bind. Absent short-circuits without calling ``fn``.
    """
    if is_absent(opt):
        return Ready(opt)
    return resolve(fn(opt.value))


def or_else[T, U](opt: Option[T], fn: Callable[[], Option[U] | Awaitable[Option[U]]]) -> Awaitable[Option[T | U]]:
    """Keep a Present option, or recover from Absent with ``fn()``."""
    if is_present(opt):
        return Ready(opt)
    return resolve(fn())


def and_[T, U](opt: Option[T], other: Option[U]) -> Option[U]:
    """Return ``other`` if ``opt`` is Present, else ``opt`` (Absent).

    The value held by ``opt`` is discarded.
    """
    return other if is_present(opt) else opt


def or_[T, U](opt: Option[T], other: Option[U]) -> Option[T | U]:
    """Return ``opt`` if Present, else ``other``."""
    return opt if is_present(opt) else other


def flatten[T](opt: Option[Option[T]]) -> Option[T]:
    """Remove one level of nesting from ``Option[Option[T]]``.

    Examples:
        >>> flatten(Present(Present(1)))
        Present(1)
        >>> flatten(Present(absent))
        Absent
    """
    return opt.value if is_present(opt) else opt


def filter[T](opt: Option[T], predicate: Callable[[T], bool]) -> Option[T]:
    """Keep the option only if its value satisfies ``predicate``."""
    if is_present(opt) and predicate(opt.value):
        return opt
    return absent


def ok_or[T, E](opt: Option[T], error: E) -> Result[T, E]:
    """Convert to a Result: Success(value), or Failure(error) for Absent."""
    from klaw_match.result import Failure, Success

    return Success(opt.value) if is_present(opt) else Failure(error)


# --- Safe invocation ---


@overload
def safe[T](target: Awaitable[T], /) -> Awaitable[Option[T]]: ...
@overload
def safe[T](target: Callable[..., Awaitable[T]], /, *args: Any, **kwargs: Any) -> Awaitable[Option[T]]: ...
@overload
def safe[T](target: Callable[..., T], /, *args: Any, **kwargs: Any) -> Option[T]: ...
def safe(target: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Call ``target(*args, **kwargs)`` (or await ``target``) and capture failure as Absent.

    The captured exception is discarded: an Option has no error channel. Use
    ``result.safe`` to keep it.

    Example:
        ```python
        option.safe(int, '42')  # Present(42)
        option.safe(int, 'x')  # Absent
        await option.safe(fetch_user(1))  # Present(user) or Absent
        ```
    """
    return capture(target, args, kwargs, Present, _discard)


def _discard(_exc: BaseException) -> AbsentType:
    return absent


def non_nullable[T](value: T | None) -> Option[T]:
    """Return Present(value) unless ``value`` is None or NaN."""
    return absent if is_nullish(value) else Present(value)
