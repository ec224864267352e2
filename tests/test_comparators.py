"""Tests for building comparators from sort specifications."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "packages" / "core_engine" / "src"))

from sortspec_core.comparators import comparator_of, sort_key, sorted_by
from sortspec_core.properties import PropertyAccessError
from sortspec_core.sort import Direction, Order, Sort


@dataclass
class Entity:
    name: Optional[str] = None
    sub_entity: Optional["Entity"] = None
    rank: Any = None


def _names(entities):
    return [e.name for e in entities]


def _sub_names(entities):
    return [e.sub_entity.name if e.sub_entity is not None else None for e in entities]


# ---------------------------------------------------------------------------
# Single key ordering
# ---------------------------------------------------------------------------

class TestSingleKey:
    def test_ascending_by_simple_property(self):
        entities = [Entity(name="2"), Entity(name="1")]
        result = sorted_by(entities, Sort.by("name"))
        assert _names(result) == ["1", "2"]

    def test_descending_by_simple_property(self):
        entities = [Entity(name="1"), Entity(name="2")]
        result = sorted_by(entities, Sort.by("name", direction=Direction.DESC))
        assert _names(result) == ["2", "1"]

    def test_ascending_by_nested_property(self):
        entities = [Entity(sub_entity=Entity(name="B")), Entity(sub_entity=Entity(name="A"))]
        result = sorted_by(entities, Sort.by("sub_entity.name"))
        assert _sub_names(result) == ["A", "B"]

    def test_descending_by_nested_property(self):
        entities = [Entity(sub_entity=Entity(name="A")), Entity(sub_entity=Entity(name="B"))]
        result = sorted_by(entities, Sort.by("sub_entity.name", direction=Direction.DESC))
        assert _sub_names(result) == ["B", "A"]

    def test_comparator_returns_three_way_result(self):
        cmp = comparator_of(Sort.by("name"))
        assert cmp(Entity(name="a"), Entity(name="b")) == -1
        assert cmp(Entity(name="b"), Entity(name="a")) == 1
        assert cmp(Entity(name="a"), Entity(name="a")) == 0

    def test_accepts_plain_list_of_orders(self):
        entities = [Entity(name="a"), Entity(name="c"), Entity(name="b")]
        result = sorted(entities, key=sort_key([Order.desc("name")]))
        assert _names(result) == ["c", "b", "a"]

    def test_works_with_mappings(self):
        rows = [{"team": {"name": "Lions"}}, {"team": {"name": "Bears"}}]
        result = sorted_by(rows, Sort.by("team.name"))
        assert [r["team"]["name"] for r in result] == ["Bears", "Lions"]


# ---------------------------------------------------------------------------
# Empty sort specification
# ---------------------------------------------------------------------------

class TestUnsorted:
    def test_empty_sort_preserves_input_order(self):
        entities = [Entity(name="2"), Entity(name="1"), Entity(name="3")]
        result = sorted_by(entities, Sort.unsorted())
        assert _names(result) == ["2", "1", "3"]

    def test_empty_order_list_compares_equal(self):
        cmp = comparator_of([])
        assert cmp(Entity(name="1"), Entity(name="2")) == 0

    def test_empty_sort_still_puts_null_entities_first(self):
        entities = [Entity(name="2"), None, Entity(name="1")]
        result = sorted_by(entities, Sort.unsorted())
        assert result[0] is None
        assert _names(result[1:]) == ["2", "1"]


# ---------------------------------------------------------------------------
# Null handling
# ---------------------------------------------------------------------------

class TestNulls:
    def test_nulls_first_in_ascending_order(self):
        entities = [
            Entity(sub_entity=Entity(name="B")),
            Entity(),
            Entity(sub_entity=Entity(name="A")),
        ]
        result = sorted_by(entities, Sort.by("sub_entity.name"))
        assert _sub_names(result) == [None, "A", "B"]

    def test_nulls_still_first_in_descending_order(self):
        entities = [
            Entity(),
            Entity(sub_entity=Entity(name="A")),
            Entity(sub_entity=Entity(name="B")),
        ]
        result = sorted_by(entities, Sort.by("sub_entity.name", direction=Direction.DESC))
        assert result[0].sub_entity is None
        assert _sub_names(result) == [None, "B", "A"]

    def test_null_leaf_value_sorts_first(self):
        entities = [Entity(name="b"), Entity(name=None), Entity(name="a")]
        result = sorted_by(entities, Sort.by("name"))
        assert _names(result) == [None, "a", "b"]

    def test_null_entity_sorts_first(self):
        entities = [Entity(name="b"), None, Entity(name="a")]
        for direction in (Direction.ASC, Direction.DESC):
            result = sorted_by(entities, Sort.by("name", direction=direction))
            assert result[0] is None

    def test_two_null_entities_are_equal(self):
        cmp = comparator_of(Sort.by("name"))
        assert cmp(None, None) == 0
        assert cmp(None, Entity(name="a")) == -1
        assert cmp(Entity(name="a"), None) == 1


# ---------------------------------------------------------------------------
# Multiple keys
# ---------------------------------------------------------------------------

class TestMultipleKeys:
    def test_second_key_breaks_ties(self):
        entities = [
            Entity(name="x", rank=1),
            Entity(name="x", rank=3),
            Entity(name="a", rank=2),
        ]
        sort = Sort.by_orders(Order.asc("name"), Order.desc("rank"))
        result = sorted_by(entities, sort)
        assert [(e.name, e.rank) for e in result] == [("a", 2), ("x", 3), ("x", 1)]

    def test_second_key_ignored_when_first_differs(self):
        cmp = comparator_of(Sort.by_orders(Order.asc("name"), Order.desc("rank")))
        assert cmp(Entity(name="a", rank=1), Entity(name="b", rank=9)) == -1
        assert cmp(Entity(name="b", rank=9), Entity(name="a", rank=1)) == 1

    def test_all_keys_equal_keeps_input_order(self):
        first = Entity(name="x", rank=1)
        second = Entity(name="x", rank=1)
        result = sorted_by([first, second], Sort.by("name", "rank"))
        assert result[0] is first
        assert result[1] is second

    def test_sorting_sorted_input_is_idempotent(self):
        entities = [Entity(name=n, rank=r) for n, r in [("b", 1), ("a", 2), ("b", 0), ("a", 2)]]
        sort = Sort.by_orders(Order.asc("name"), Order.desc("rank"))
        once = sorted_by(entities, sort)
        twice = sorted_by(once, sort)
        assert [id(e) for e in once] == [id(e) for e in twice]


# ---------------------------------------------------------------------------
# Case handling
# ---------------------------------------------------------------------------

class TestIgnoreCase:
    def test_case_sensitive_by_default(self):
        entities = [Entity(name="b"), Entity(name="A"), Entity(name="a"), Entity(name="B")]
        result = sorted_by(entities, Sort.by("name"))
        assert _names(result) == ["A", "B", "a", "b"]

    def test_ignore_case_uses_casefold(self):
        entities = [Entity(name="b"), Entity(name="A"), Entity(name="a"), Entity(name="B")]
        result = sorted_by(entities, Sort.by_orders(Order.asc("name").ignoring_case()))
        assert _names(result) == ["A", "a", "b", "B"]

    def test_ignore_case_leaves_non_strings_alone(self):
        entities = [Entity(rank=3), Entity(rank=1)]
        result = sorted_by(entities, Sort.by_orders(Order.asc("rank").ignoring_case()))
        assert [e.rank for e in result] == [1, 3]


# ---------------------------------------------------------------------------
# Unresolvable and unreadable properties
# ---------------------------------------------------------------------------

class Guarded:
    def __init__(self, name):
        self.name = name

    @property
    def secret(self):
        raise PermissionError("access denied")


class TestPropertyFailures:
    def test_missing_property_sorts_as_null(self):
        entities = [Entity(name="b"), Entity(name="a")]
        result = sorted_by(entities, Sort.by("does_not_exist"))
        assert _names(result) == ["b", "a"]

    def test_missing_property_on_some_entities(self):
        rows = [{"name": "b", "rank": 1}, {"name": "a"}, {"name": "c", "rank": 0}]
        result = sorted_by(rows, Sort.by("rank"))
        assert [r["name"] for r in result] == ["a", "c", "b"]

    def test_unreadable_property_is_fatal(self):
        cmp = comparator_of(Sort.by("secret"))
        with pytest.raises(PropertyAccessError, match="secret"):
            sorted([Guarded("a"), Guarded("b")], key=sort_key(Sort.by("secret")))
        with pytest.raises(PropertyAccessError):
            cmp(Guarded("a"), Guarded("b"))

    def test_building_never_raises(self):
        comparator_of(Sort.by("secret", "no.such.path", "_private"))

    def test_incomparable_values_propagate(self):
        entities = [Entity(rank=1), Entity(rank="one")]
        with pytest.raises(TypeError):
            sorted_by(entities, Sort.by("rank"))
