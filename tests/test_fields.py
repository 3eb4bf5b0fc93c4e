"""
Tests for field accessors, sorting, filtering and pagination helpers.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from portfolio.repositories.fields import (
    attribute_accessors,
    build_predicate,
    build_search_predicate,
    compare_values,
    paginate,
    sort_entities,
    strict_equals,
    value_matches,
)


@dataclass
class Item:
    id: str
    title: str
    rank: Optional[int] = None
    featured: bool = False
    tags: List[str] = field(default_factory=list)
    description: str = ""


FIELDS = attribute_accessors("id", "title", "rank", "featured", "tags", "description")


def ids(items):
    return [item.id for item in items]


class TestCompareValues:
    def test_orders_comparable_values(self):
        assert compare_values(1, 2) == -1
        assert compare_values("b", "a") == 1
        assert compare_values(3, 3) == 0

    def test_incomparable_values_are_equal(self):
        assert compare_values(None, 1) == 0
        assert compare_values("a", 1) == 0


class TestSortEntities:
    """Sorting by a named field."""

    def test_ascending(self):
        items = [Item("1", "b", 2), Item("2", "a", 1), Item("3", "c", 3)]
        assert ids(sort_entities(items, FIELDS, "rank")) == ["2", "1", "3"]

    def test_descending(self):
        items = [Item("1", "b", 2), Item("2", "a", 1), Item("3", "c", 3)]
        assert ids(sort_entities(items, FIELDS, "title", "desc")) == ["3", "1", "2"]

    def test_unknown_field_keeps_order(self):
        items = [Item("1", "b"), Item("2", "a")]
        assert ids(sort_entities(items, FIELDS, "nonexistent")) == ["1", "2"]

    def test_no_sort_field_keeps_order(self):
        items = [Item("1", "b"), Item("2", "a")]
        assert ids(sort_entities(items, FIELDS, None)) == ["1", "2"]

    def test_none_values_do_not_raise(self):
        items = [Item("1", "a", None), Item("2", "b", 1), Item("3", "c", None)]
        result = sort_entities(items, FIELDS, "rank")
        assert sorted(ids(result)) == ["1", "2", "3"]

    def test_stable_for_equal_keys(self):
        items = [Item("1", "x", 1), Item("2", "y", 1), Item("3", "z", 0)]
        assert ids(sort_entities(items, FIELDS, "rank")) == ["3", "1", "2"]

    def test_does_not_mutate_input(self):
        items = [Item("1", "b"), Item("2", "a")]
        sort_entities(items, FIELDS, "title")
        assert ids(items) == ["1", "2"]


class TestStrictEquals:
    def test_bool_never_equals_number(self):
        assert strict_equals(True, 1) is False
        assert strict_equals(0, False) is False

    def test_bools(self):
        assert strict_equals(True, True) is True
        assert strict_equals(True, False) is False

    def test_int_and_float(self):
        assert strict_equals(1, 1.0) is True

    def test_mixed_types(self):
        assert strict_equals("1", 1) is False


class TestValueMatches:
    def test_string_substring_case_insensitive(self):
        assert value_matches("React Native", "native") is True
        assert value_matches("React", "vue") is False

    def test_list_against_list_intersects(self):
        assert value_matches(["react", "firebase"], ["vue", "firebase"]) is True
        assert value_matches(["react"], ["vue"]) is False

    def test_list_against_scalar_field(self):
        assert value_matches("mobile", ["web", "MOBILE"]) is True
        assert value_matches("desktop", ["web", "mobile"]) is False

    def test_scalar_equality(self):
        assert value_matches(3, 3) is True
        assert value_matches(True, True) is True
        assert value_matches(1, True) is False


class TestBuildPredicate:
    """Filters are a conjunction of every non-None entry."""

    def test_all_filters_must_match(self):
        predicate = build_predicate(FIELDS, {"featured": True, "title": "alp"})
        assert predicate(Item("1", "Alpha", featured=True)) is True
        assert predicate(Item("2", "Alpha", featured=False)) is False
        assert predicate(Item("3", "Beta", featured=True)) is False

    def test_none_values_ignored(self):
        predicate = build_predicate(FIELDS, {"title": None})
        assert predicate(Item("1", "anything")) is True

    def test_unknown_key_never_matches(self):
        predicate = build_predicate(FIELDS, {"missing": "x"})
        assert predicate(Item("1", "x")) is False

    def test_empty_filters_match_everything(self):
        assert build_predicate(FIELDS, {})(Item("1", "x")) is True

    def test_list_filter(self):
        predicate = build_predicate(FIELDS, {"tags": ["python"]})
        assert predicate(Item("1", "a", tags=["python", "cli"])) is True
        assert predicate(Item("2", "b", tags=["go"])) is False


class TestSearchPredicate:
    def test_matches_any_text_field(self):
        predicate = build_search_predicate(FIELDS, "ALP")
        assert predicate(Item("1", "Alpha")) is True
        assert predicate(Item("2", "Beta", description="alpine")) is True
        assert predicate(Item("3", "Gamma")) is False

    def test_restricted_fields(self):
        predicate = build_search_predicate(FIELDS, "alp", fields=("description",))
        assert predicate(Item("1", "Alpha")) is False

    def test_skips_fields_without_accessor(self):
        predicate = build_search_predicate(FIELDS, "x", fields=("content", "name"))
        assert predicate(Item("1", "x")) is False

    def test_ignores_non_string_values(self):
        predicate = build_search_predicate(FIELDS, "1", fields=("rank",))
        assert predicate(Item("1", "a", rank=1)) is False


class TestPaginate:
    def test_slices_page(self):
        assert paginate(list(range(10)), 2, 3) == [3, 4, 5]

    def test_last_partial_page(self):
        assert paginate(list(range(10)), 4, 3) == [9]

    def test_out_of_range_page_is_empty(self):
        assert paginate(list(range(3)), 5, 2) == []
