"""Loading and validating sort specifications stored as YAML/JSON.

A sort spec file is either a list of order entries or a mapping with a
``sort`` key holding that list::

    sort:
      - property: team.name
      - property: points
        direction: desc
        ignore_case: false
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from sortspec_core.issues import Issue
from sortspec_core.sort import DEFAULT_DIRECTION, Direction, Order, Sort


def load_yaml_payload(path: str) -> Any:
    return yaml.safe_load(Path(path).read_text(encoding="utf-8"))


def _order_entries(payload: Any) -> Any:
    if isinstance(payload, dict) and "sort" in payload:
        return payload["sort"]
    return payload


def sort_issues(payload: Any) -> List[Issue]:
    """Validate a sort spec payload without raising."""
    issues: List[Issue] = []
    entries = _order_entries(payload)

    if entries is None:
        return issues
    if not isinstance(entries, list):
        issues.append(Issue(
            severity="error",
            code="INVALID_SORT_CONTAINER",
            message="Sort spec must be a list of orders or a mapping with a 'sort' list.",
            path="/sort",
        ))
        return issues

    seen: Dict[str, int] = {}
    for index, entry in enumerate(entries):
        path = f"/sort/{index}"
        if isinstance(entry, str):
            entry = {"property": entry}
        if not isinstance(entry, dict):
            issues.append(Issue(
                severity="error",
                code="INVALID_ORDER",
                message="Order entry must be a mapping or a property string.",
                path=path,
            ))
            continue

        prop = entry.get("property")
        if not isinstance(prop, str) or not prop.strip():
            issues.append(Issue(
                severity="error",
                code="MISSING_PROPERTY",
                message="Order entry requires a non-empty 'property'.",
                path=f"{path}/property",
            ))
        elif prop.strip() in seen:
            name = prop.strip()
            issues.append(Issue(
                severity="warn",
                code="DUPLICATE_PROPERTY",
                message=f"Property '{name}' already ordered at /sort/{seen[name]}; this order never breaks a tie.",
                path=f"{path}/property",
            ))
        else:
            seen[prop.strip()] = index

        direction = entry.get("direction")
        if direction is not None and (
            not isinstance(direction, str) or Direction.from_optional_string(direction) is None
        ):
            issues.append(Issue(
                severity="error",
                code="INVALID_DIRECTION",
                message=f"Unknown direction '{direction}'. Use 'asc' or 'desc'.",
                path=f"{path}/direction",
            ))

        if "ignore_case" in entry and not isinstance(entry["ignore_case"], bool):
            issues.append(Issue(
                severity="error",
                code="INVALID_IGNORE_CASE",
                message="'ignore_case' must be a boolean.",
                path=f"{path}/ignore_case",
            ))

        unknown = sorted(set(entry.keys()) - {"property", "direction", "ignore_case"})
        for key in unknown:
            issues.append(Issue(
                severity="warn",
                code="UNKNOWN_ORDER_KEY",
                message=f"Unknown key '{key}' is ignored.",
                path=f"{path}/{key}",
            ))

    return issues


def sort_from_payload(payload: Any) -> Sort:
    """Build a Sort from a parsed payload. Raises ValueError if it is invalid."""
    errors = [issue for issue in sort_issues(payload) if issue.severity == "error"]
    if errors:
        first = errors[0]
        raise ValueError(f"{first.code}: {first.message} ({first.path})")

    orders: List[Order] = []
    for entry in _order_entries(payload) or []:
        if isinstance(entry, str):
            entry = {"property": entry}
        direction = entry.get("direction")
        orders.append(Order(
            property=entry["property"].strip(),
            direction=Direction.from_string(direction) if direction else DEFAULT_DIRECTION,
            ignore_case=entry.get("ignore_case", False),
        ))
    return Sort(orders)


def sort_to_payload(sort: Sort) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = []
    for order in sort:
        entry: Dict[str, Any] = {
            "property": order.property,
            "direction": order.direction.value,
        }
        if order.ignore_case:
            entry["ignore_case"] = True
        entries.append(entry)
    return {"sort": entries}


def load_yaml_sort(path: str) -> Sort:
    return sort_from_payload(load_yaml_payload(path))


def load_records(path: str) -> List[Any]:
    """Load a list of records from a YAML or JSON file."""
    payload = load_yaml_payload(path)
    if payload is None:
        return []
    if isinstance(payload, dict) and "records" in payload:
        payload = payload["records"]
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of records in {path}, got {type(payload).__name__}.")
    return payload
