from sortspec_core.comparators import comparator_of, sort_key, sorted_by
from sortspec_core.issues import Issue, has_errors, to_lines
from sortspec_core.loader import (
    load_records,
    load_yaml_payload,
    load_yaml_sort,
    sort_from_payload,
    sort_issues,
    sort_to_payload,
)
from sortspec_core.properties import PropertyAccessError, key_extractor, parse_property_path
from sortspec_core.sort import Direction, Order, Sort, parse_sort

__all__ = [
    "Direction",
    "Issue",
    "Order",
    "PropertyAccessError",
    "Sort",
    "comparator_of",
    "has_errors",
    "key_extractor",
    "load_records",
    "load_yaml_payload",
    "load_yaml_sort",
    "parse_property_path",
    "parse_sort",
    "sort_from_payload",
    "sort_issues",
    "sort_key",
    "sort_to_payload",
    "sorted_by",
    "to_lines",
]
