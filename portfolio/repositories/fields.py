"""Field accessors, comparators and filter predicates.

Each entity repository declares an explicit map from field name to getter.
Sorting, filtering and searching only ever reach entity data through that
map, so an unknown field name is a plain lookup miss rather than an
attribute error.
"""

from functools import cmp_to_key
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from portfolio.models.common import FilterParams, FilterValue, SortOrder

T = TypeVar("T")

FieldGetter = Callable[[T], Any]
FieldMap = Mapping[str, FieldGetter]

# Text fields searched when an entity type has them
SEARCHABLE_FIELDS = ("title", "name", "description", "content")


def attribute_accessors(*names: str) -> Dict[str, FieldGetter]:
    """Build a field map that reads each named attribute."""
    return {name: attrgetter(name) for name in names}


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison where incomparable values count as equal.

    ``None`` against anything, or values of unrelated types, compare as 0 and
    keep their relative order in a stable sort.
    """
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        return 0
    return 0


def build_comparator(field_map: FieldMap, sort_by: str) -> Optional[Callable[[T, T], int]]:
    """Return a comparator for ``sort_by``, or None if the field is unknown."""
    getter = field_map.get(sort_by)
    if getter is None:
        return None

    def comparator(left: T, right: T) -> int:
        return compare_values(getter(left), getter(right))

    return comparator


def sort_entities(
    entities: Iterable[T],
    field_map: FieldMap,
    sort_by: Optional[str],
    sort_order: SortOrder = "asc",
) -> List[T]:
    """Stable sort by one field; unknown or missing ``sort_by`` keeps order."""
    items = list(entities)
    if not sort_by:
        return items
    comparator = build_comparator(field_map, sort_by)
    if comparator is None:
        return items
    return sorted(items, key=cmp_to_key(comparator), reverse=(sort_order == "desc"))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def strict_equals(actual: Any, expected: Any) -> bool:
    """Equality that never treats booleans as numbers."""
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if type(actual) is not type(expected) and not (
        isinstance(actual, (int, float)) and isinstance(expected, (int, float))
    ):
        return False
    return actual == expected


def value_matches(actual: Any, expected: FilterValue) -> bool:
    """Check one entity field value against one filter value."""
    if _is_sequence(expected):
        if _is_sequence(actual):
            return any(strict_equals(a, e) for a in actual for e in expected)
        text = str(actual).lower()
        return any(str(e).lower() in text for e in expected)
    if isinstance(expected, str) and isinstance(actual, str):
        return expected.lower() in actual.lower()
    return strict_equals(actual, expected)


def build_predicate(field_map: FieldMap, filters: FilterParams) -> Callable[[T], bool]:
    """Build a predicate requiring every non-None filter to match.

    A filter key with no accessor in ``field_map`` never matches.
    """
    checks: List[Callable[[T], bool]] = []
    for key, expected in filters.items():
        if expected is None:
            continue
        getter = field_map.get(key)
        if getter is None:
            return lambda entity: False
        checks.append(lambda entity, g=getter, e=expected: value_matches(g(entity), e))

    def predicate(entity: T) -> bool:
        return all(check(entity) for check in checks)

    return predicate


def build_search_predicate(field_map: FieldMap, query: str, fields: Sequence[str] = SEARCHABLE_FIELDS) -> Callable[[T], bool]:
    """Case-insensitive substring match against the entity's text fields."""
    needle = query.lower()
    getters = [field_map[name] for name in fields if name in field_map]

    def predicate(entity: T) -> bool:
        for getter in getters:
            value = getter(entity)
            if isinstance(value, str) and needle in value.lower():
                return True
        return False

    return predicate


def paginate(items: Sequence[T], page: int, limit: int) -> List[T]:
    """Slice ``[(page-1)*limit, page*limit)``; out-of-range pages are empty."""
    start = (page - 1) * limit
    return list(items[start:start + limit])
