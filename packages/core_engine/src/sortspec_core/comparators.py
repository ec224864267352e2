"""Build comparison functions from sort specifications.

``comparator_of`` turns a :class:`~sortspec_core.sort.Sort` into a plain
``cmp(a, b) -> int`` function. Python's own ``sorted`` does the ordering;
use :func:`sort_key` (or :func:`sorted_by`) to plug the comparator in.

Null handling: a ``None`` entity, and a ``None`` key value, always sort
first. Descending orders reverse the comparison of present values only, so
nulls stay first in both directions.
"""

import functools
import logging
from typing import Any, Callable, Iterable, List, TypeVar

from sortspec_core.properties import key_extractor
from sortspec_core.sort import Order

logger = logging.getLogger(__name__)

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]

LESS = -1
EQUAL = 0
GREATER = 1


def _natural_compare(left: Any, right: Any) -> int:
    if left < right:
        return LESS
    if left > right:
        return GREATER
    return EQUAL


def _nulls_first(compare: Comparator) -> Comparator:
    def nulls_first(left: Any, right: Any) -> int:
        if left is None:
            return EQUAL if right is None else LESS
        if right is None:
            return GREATER
        return compare(left, right)

    return nulls_first


def _casefolded(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def _order_comparator(order: Order) -> Comparator:
    extract = key_extractor(order.property)
    if order.ignore_case:
        raw_extract = extract

        def extract(entity: Any) -> Any:
            return _casefolded(raw_extract(entity))

    if order.is_ascending:
        compare_values = _natural_compare
    else:
        def compare_values(left: Any, right: Any) -> int:
            return _natural_compare(right, left)

    compare_keys = _nulls_first(compare_values)

    def compare(left: Any, right: Any) -> int:
        return compare_keys(extract(left), extract(right))

    return compare


def _then_comparing(comparators: List[Comparator]) -> Comparator:
    def compare(left: Any, right: Any) -> int:
        for comparator in comparators:
            result = comparator(left, right)
            if result != EQUAL:
                return result
        return EQUAL

    return compare


def _unordered(left: Any, right: Any) -> int:
    return EQUAL


def comparator_of(sort: Iterable[Order]) -> Comparator:
    """Return ``cmp(a, b)`` ordering entities according to ``sort``.

    Property paths are not checked here; a missing property resolves to
    ``None`` and an unreadable one raises ``PropertyAccessError`` when the
    comparator is called.
    """
    orders = list(sort)
    logger.debug("Building comparator for %d sort order(s)", len(orders))
    if not orders:
        return _nulls_first(_unordered)
    return _nulls_first(_then_comparing([_order_comparator(order) for order in orders]))


def sort_key(sort: Iterable[Order]) -> Callable[[Any], Any]:
    return functools.cmp_to_key(comparator_of(sort))


def sorted_by(items: Iterable[T], sort: Iterable[Order]) -> List[T]:
    """Return a new list of ``items`` ordered by ``sort`` (stable)."""
    return sorted(items, key=sort_key(sort))
