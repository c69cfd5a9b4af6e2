"""Tests for the pattern-matching engine."""

from dataclasses import dataclass

import pytest

from klaw_match import NoMatchError, _, absent, check_branch_match, failure, match, present, result, success


@dataclass
class User:
    name: str
    age: int
    role: str = 'member'


class TestOrderedMatching:
    """Tests for ordered branch lists."""

    def test_first_match_wins(self):
        """Branches are tried in order."""
        branches = [
            (lambda v: v > 10, 'big'),
            (lambda v: v > 0, 'small'),
            lambda: 'other',
        ]
        assert match(5, branches) == 'small'
        assert match(50, branches) == 'big'
        assert match(-1, branches) == 'other'

    def test_list_branches(self):
        """Branches may be written as two-element lists."""
        assert match(5, [[lambda v: v > 10, 'big'], [lambda v: v > 0, 'small']]) == 'small'

    def test_handler_receives_value(self):
        """A callable outcome is called with the matched value."""
        assert match(4, [(lambda v: v % 2 == 0, lambda v: v // 2)]) == 2

    def test_handler_without_argument(self):
        """Handlers may ignore the value."""
        assert match(4, [(4, lambda: 'four')]) == 'four'

    def test_default_receives_value(self):
        """A bare default handler gets the value when it takes one."""
        assert match(3, [(lambda v: v > 10, 'big'), lambda v: v * 100]) == 300

    def test_default_literal(self):
        """A bare non-callable element is returned as the default."""
        assert match(-5, [(lambda v: v > 0, 'positive'), 'other']) == 'other'

    def test_literal_patterns(self):
        """Literals match by equality."""
        branches = [('a', 1), ('b', 2), (None, 3)]
        assert match('b', branches) == 2
        assert match(None, branches) == 3

    def test_class_patterns(self):
        """Classes match by isinstance."""
        branches = [(str, 'text'), (int, 'number'), (_, 'anything')]
        assert match('x', branches) == 'text'
        assert match(3, branches) == 'number'
        assert match(3.5, branches) == 'anything'

    def test_wildcard_pattern(self):
        """_ matches anything."""
        assert match(object(), [(_, 'caught')]) == 'caught'

    def test_no_match_raises(self):
        """Without a default the engine raises NoMatchError."""
        with pytest.raises(NoMatchError, match='No matching branch found') as exc_info:
            match(5, [(lambda v: v > 100, 'x')])
        assert exc_info.value.value == 5

    def test_custom_fallback(self):
        """A custom fallback replaces the error."""
        assert match(5, [(lambda v: v > 100, 'x')], lambda: 'fallback') == 'fallback'
        assert match(5, [(lambda v: v > 100, 'x')], lambda v: v + 1) == 6

    def test_handler_errors_propagate(self):
        """Handler exceptions reach the caller unchanged."""

        def explode(_v):
            raise KeyError('handler')

        with pytest.raises(KeyError, match='handler'):
            match(1, [(_, explode)])

    def test_predicate_errors_propagate(self):
        """Predicate exceptions reach the caller unchanged."""
        with pytest.raises(ZeroDivisionError):
            match(0, [(lambda v: 1 / v, 'x')])

    @pytest.mark.asyncio
    async def test_async_handler_not_awaited(self):
        """An awaitable returned by a handler is handed back as is."""

        async def handler(v):
            return v * 3

        pending = match(2, [(_, handler)])
        assert await pending == 6

    def test_invalid_patterns(self):
        """Patterns must be a list, tuple or mapping."""
        with pytest.raises(TypeError):
            match(1, 'abc')  # type: ignore[arg-type]


class TestStructuralMatching:
    """Tests for mapping, attribute and sequence patterns."""

    def test_extra_fields_ignored(self):
        """Fields absent from the pattern are ignored."""
        assert match({'a': 1, 'b': 2}, [({'a': 1}, 'matchedA')]) == 'matchedA'

    def test_all_fields_must_match(self):
        """Every field in the pattern must match."""
        branches = [({'a': 1, 'b': 3}, 'both'), ({'a': 1}, 'only a')]
        assert match({'a': 1, 'b': 2}, branches) == 'only a'

    def test_missing_field_no_match(self):
        """A missing field is no match, even for the wildcard."""
        assert not check_branch_match({'c': _}, {'a': 1})

    def test_nested_patterns(self):
        """Patterns nest recursively and may use predicates."""
        value = {'user': {'name': 'ada', 'age': 36}, 'active': True}
        pattern = {'user': {'age': lambda a: a >= 18}, 'active': True}
        assert match(value, [(pattern, 'adult')]) == 'adult'

    def test_object_attributes(self):
        """Mapping patterns read attributes of non-mapping values."""
        branches = [
            ({'role': 'admin'}, 'admin'),
            ({'age': lambda a: a < 18}, 'minor'),
            (User, lambda u: u.name),
        ]
        assert match(User('ada', 36, 'admin'), branches) == 'admin'
        assert match(User('bob', 12), branches) == 'minor'
        assert match(User('cy', 40), branches) == 'cy'

    def test_scalar_value_against_mapping(self):
        """A mapping pattern against a scalar without the field is no match."""
        assert not check_branch_match({'a': 1}, 5)
        assert not check_branch_match({'a': 1}, None)

    def test_empty_mapping_needs_an_object(self):
        """An empty mapping pattern does not match None or scalars."""
        assert match(None, [({}, 'obj'), (_, 'other')]) == 'other'
        assert not check_branch_match({}, 5)
        assert not check_branch_match({}, 'text')
        assert check_branch_match({}, {'a': 1})
        assert check_branch_match({}, User('ada', 36))

    def test_sequence_patterns(self):
        """Sequence patterns match positionally and ignore trailing items."""
        assert check_branch_match((1, _), [1, 'x', 'y'])
        assert not check_branch_match((1, 2), [1])
        assert not check_branch_match((1,), 'abc')

    def test_uncomparable_values(self):
        """An equality check that raises is no match."""

        class Angry:
            def __eq__(self, other):
                raise RuntimeError('no comparisons')

            __hash__ = object.__hash__

        assert not check_branch_match(Angry(), 1)

    def test_identity(self):
        """A value always matches itself."""
        sentinel = object()
        assert check_branch_match(sentinel, sentinel)


class TestContainerPatterns:
    """Tests for Option/Result patterns in ordered lists."""

    def test_wildcard_success(self):
        """success(_) matches any Success."""
        assert match(success(99), [(success(_), 'anySuccess')]) == 'anySuccess'

    def test_wildcard_respects_variant(self):
        """success(_) does not match a Failure."""
        branches = [(success(_), 'ok'), (failure(_), 'err')]
        assert match(failure('x'), branches) == 'err'
        assert match(success(1), branches) == 'ok'

    def test_option_patterns(self):
        """present(_) and absent match by variant."""
        branches = [(present(_), lambda o: o.value), (absent, 'nothing')]
        assert match(present(7), branches) == 7
        assert match(absent, branches) == 'nothing'

    def test_payload_patterns(self):
        """Container payloads are matched recursively."""
        branches = [
            (success({'status': 200}), 'ok'),
            (success(lambda v: v['status'] >= 500), 'server error'),
            (success(_), 'other'),
        ]
        assert match(success({'status': 200, 'body': ''}), branches) == 'ok'
        assert match(success({'status': 503}), branches) == 'server error'
        assert match(success({'status': 302}), branches) == 'other'

    def test_container_pattern_against_plain_value(self):
        """Container patterns never match plain values."""
        assert not check_branch_match(success(_), 1)
        assert not check_branch_match(present(_), None)


class TestKeyedMatching:
    """Tests for Some/None/Ok/Err keyed dispatch."""

    def test_ok_handler(self):
        """Ok handler receives the value."""
        assert match(success(5), {'Ok': lambda v: v * 2, 'Err': lambda: -1}) == 10

    def test_err_handler(self):
        """Err handler receives the error."""
        assert match(failure('x'), {'Ok': lambda v: v, 'Err': lambda e: e.upper()}) == 'X'

    def test_catch_all(self):
        """_ catches variants without a key."""
        assert match(failure('x'), {'Ok': lambda v: v, '_': lambda: 'fallback'}) == 'fallback'

    def test_some_none(self):
        """Some and None keys dispatch Options."""
        branches = {'Some': lambda v: f'got {v}', 'None': lambda: 'nothing'}
        assert match(present(1), branches) == 'got 1'
        assert match(absent, branches) == 'nothing'

    def test_literal_handlers(self):
        """Non-callable handlers are returned as is."""
        assert match(absent, {'Some': 'yes', 'None': 'no'}) == 'no'

    def test_nested_ordered_branches(self):
        """A list under a key refines the same container."""
        branches = {
            'Ok': [(success(lambda v: v > 3), 'big'), (success(_), 'small')],
            'Err': 'failed',
        }
        assert match(success(5), branches) == 'big'
        assert match(success(1), branches) == 'small'
        assert match(failure('e'), branches) == 'failed'

    def test_nested_predicate_receives_container(self):
        """Predicates in a nested set are tested against the container."""
        seen = []

        def record(value):
            seen.append(value)
            return result.is_success(value)

        assert match(success(5), {'Ok': [(record, 'checked')]}) == 'checked'
        assert seen == [success(5)]

    def test_nested_keyed_branches(self):
        """A mapping under a key dispatches the same container again."""
        assert match(success(5), {'Ok': {'Ok': lambda v: v * 2}}) == 10
        assert match(present(3), {'Some': {'None': 'no', '_': 'still some'}}) == 'still some'

    def test_nested_handler_payload(self):
        """Handlers inside a nested mapping still receive the payload."""
        branches = {'Err': {'Err': lambda e: f'error: {e}'}, '_': 'ok'}
        assert match(failure('bad'), branches) == 'error: bad'
        assert match(success(1), branches) == 'ok'

    def test_nested_no_match_uses_fallback(self):
        """The fallback carries through nested sets."""
        branches = {'Ok': [(success(lambda v: v > 100), 'huge')]}
        assert match(success(1), branches, lambda: 'fb') == 'fb'
        with pytest.raises(NoMatchError):
            match(success(1), branches)

    def test_wrong_family_keys(self):
        """Result keys do not dispatch Options."""
        with pytest.raises(NoMatchError):
            match(present(1), {'Ok': lambda v: v})
        assert match(present(1), {'Ok': lambda v: v, '_': 'default'}) == 'default'

    def test_plain_value(self):
        """A plain value only reaches _ or the fallback."""
        assert match(5, {'Ok': lambda v: v, '_': lambda v: v + 1}) == 6
        assert match(5, {'Ok': lambda v: v}, lambda: 'fb') == 'fb'
        with pytest.raises(NoMatchError):
            match(5, {'Ok': lambda v: v})

    def test_none_payload_key_selected(self):
        """A key mapped to None returns None rather than falling through."""
        assert match(success(1), {'Ok': None, '_': 'catch'}) is None
