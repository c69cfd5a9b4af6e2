"""Structural pattern matching over plain values, Options and Results.

``match(value, patterns, fallback=None)`` selects a branch by the shape of
``value`` and returns what the branch produces. ``patterns`` is either an
ordered list of branches or a keyed branch set.

Ordered branches are ``(pattern, handler)`` pairs tried first to last; the
first matching pattern wins. A handler is called with the value, anything
that is not callable is returned as is. A bare callable in the list is a
default branch:

    match(n, [
        (lambda v: v > 10, 'big'),
        (lambda v: v > 0, 'small'),
        lambda: 'other',
    ])

A pattern is a predicate, a class (``isinstance``), a literal, a mapping of
field patterns (extra fields on the value are ignored), a list/tuple of
positional patterns, or a container pattern such as ``success(_)`` which
matches any Success.

A keyed branch set dispatches on the variant of an Option or Result:

    match(res, {'Ok': lambda v: v * 2, 'Err': lambda e: -1})
    match(opt, {'Some': lambda v: f'got {v}', '_': lambda: 'none'})

A handler under a variant key receives the payload. A nested set under a
variant key refines the same value, so its predicates see the container:

    match(res, {'Ok': [(success(lambda v: v > 3), 'big'), 'small']})

With nothing matched and no catch-all, ``fallback`` is called; the default
fallback raises NoMatchError. Exceptions raised by predicates and handlers
propagate unchanged. Handlers returning awaitables are not awaited.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from numbers import Number
from typing import Any

from klaw_match._internal.call import call_with_value
from klaw_match._internal.values import same_value
from klaw_match._internal.variant import Variant
from klaw_match._logging import get_logger
from klaw_match.errors import NoMatchError
from klaw_match.option import is_option
from klaw_match.result import is_result

__all__ = ['Branch', 'KeyedBranches', 'check_branch_match', 'match', '_']

logger = get_logger(__name__)

type Branch[U] = tuple[Any, U | Callable[..., U]] | list[Any]
type KeyedBranches[U] = Mapping[str, Any]

_MISSING: Any = object()
_CATCH_ALL = '_'


def _(*_args: Any, **_kwargs: Any) -> bool:
    """Wildcard: matches anything.

    Usable as a catch-all pattern, or as the payload of a container pattern
    (``success(_)``) to match a variant regardless of its payload.
    """
    return True


def match[U](
    value: Any,
    patterns: Sequence[Branch[U] | Callable[..., U]] | KeyedBranches[U],
    fallback: Callable[..., U] | None = None,
) -> U:
    """Select the branch matching ``value`` and return what it produces.

    Args:
        value: The value to inspect.
        patterns: Ordered branches (list or tuple) or a keyed branch set
            (mapping with ``Some``/``None``/``Ok``/``Err``/``_`` keys).
        fallback: Called when nothing matches. Defaults to raising
            NoMatchError.

    Returns:
        The handler's return value or the branch literal.

    Raises:
        NoMatchError: If nothing matches and no fallback is given.
        TypeError: If ``patterns`` is neither a sequence nor a mapping.
    """
    if isinstance(patterns, (list, tuple)):
        return _match_ordered(value, patterns, fallback)
    if isinstance(patterns, Mapping):
        return _match_keyed(value, patterns, fallback)
    msg = f'patterns must be a list, tuple or mapping, got {type(patterns).__name__}'
    raise TypeError(msg)


def _match_ordered[U](value: Any, patterns: Sequence[Any], fallback: Callable[..., U] | None) -> U:
    for branch in patterns:
        if _is_branch(branch):
            pattern, outcome = branch
            if check_branch_match(pattern, value):
                return _produce(outcome, value)
        else:
            # default branch
            return _produce(branch, value)
    return _fall_back(value, fallback, mode='ordered')


def _match_keyed[U](value: Any, patterns: Mapping[str, Any], fallback: Callable[..., U] | None) -> U:
    variant = _variant_of(value)
    selected = patterns.get(variant.value, _MISSING) if variant is not None else _MISSING

    if selected is not _MISSING:
        if isinstance(selected, (Mapping, list, tuple)):
            # refine the same value with the nested set
            return match(value, selected, fallback)
        return _produce(selected, _payload(value))

    if _CATCH_ALL in patterns:
        return _produce(patterns[_CATCH_ALL], value)
    return _fall_back(value, fallback, mode='keyed')


def _fall_back[U](value: Any, fallback: Callable[..., U] | None, *, mode: str) -> U:
    logger.debug('match.fallback', mode=mode, custom=fallback is not None)
    if fallback is None:
        raise NoMatchError(value)
    return call_with_value(fallback, value)


def _produce(outcome: Any, value: Any) -> Any:
    return call_with_value(outcome, value) if callable(outcome) else outcome


def _is_branch(candidate: Any) -> bool:
    return isinstance(candidate, (list, tuple)) and len(candidate) == 2


# --- Structural test ---


def check_branch_match(pattern: Any, value: Any) -> bool:
    """Test ``value`` against ``pattern`` recursively.

    Checks in order: identity, container patterns (same variant, payload
    matched recursively), classes, predicates, equality, mapping patterns
    (every key must be present and match), sequence patterns (positional,
    the value may be longer). Any other combination is no match.
    """
    if pattern is value:
        return True

    pattern_variant = _variant_of(pattern)
    if pattern_variant is not None:
        if _variant_of(value) is not pattern_variant:
            return False
        if pattern_variant is Variant.NONE:
            return True
        return check_branch_match(_payload(pattern), _payload(value))

    if isinstance(pattern, type):
        return isinstance(value, pattern)
    if callable(pattern):
        return bool(pattern(value))
    if same_value(pattern, value):
        return True
    if isinstance(pattern, Mapping):
        return not _is_scalar(value) and _match_fields(pattern, value)
    if isinstance(pattern, (list, tuple)) and _is_sequence(value):
        return len(value) >= len(pattern) and all(
            check_branch_match(sub, item) for sub, item in zip(pattern, value, strict=False)
        )
    return False


def _match_fields(pattern: Mapping[Any, Any], value: Any) -> bool:
    for key, sub in pattern.items():
        field = _field(value, key)
        if field is _MISSING or not check_branch_match(sub, field):
            return False
    return True


def _field(value: Any, key: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)
    if not isinstance(key, str):
        return _MISSING
    try:
        return getattr(value, key, _MISSING)
    except Exception:  # noqa: BLE001
        # property raised
        return _MISSING


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (Number, str, bytes, bytearray))


def _variant_of(value: Any) -> Variant | None:
    if is_option(value) or is_result(value):
        return value.variant
    return None


def _payload(container: Any) -> Any:
    if container.variant is Variant.ERR:
        return container.error
    if container.variant is Variant.NONE:
        return container
    return container.value
