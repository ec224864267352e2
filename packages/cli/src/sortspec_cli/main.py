import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from sortspec_core import (
    PropertyAccessError,
    Sort,
    load_records,
    load_yaml_payload,
    load_yaml_sort,
    parse_sort,
    sort_from_payload,
    sort_issues,
    sort_to_payload,
    sorted_by,
)
from sortspec_core.issues import Issue, has_errors, to_lines

logger = logging.getLogger("sortspec")


def _print_issues(issues: List[Issue]) -> None:
    if not issues:
        print("No issues found.")
        return
    for line in to_lines(issues):
        print(line)


def _build_sort(args: argparse.Namespace) -> Sort:
    sort = Sort.unsorted()
    if args.spec:
        sort = load_yaml_sort(args.spec)
    if args.by:
        sort = sort.and_(parse_sort(args.by))
    return sort


def _write_output(text: str, out: Optional[str], label: str) -> None:
    if out:
        Path(out).write_text(text, encoding="utf-8")
        print(f"Wrote {label}: {out}")
    else:
        print(text)


def cmd_sort(args: argparse.Namespace) -> int:
    try:
        sort = _build_sort(args)
    except ValueError as exc:
        print(f"Invalid sort: {exc}")
        return 1

    try:
        records = load_records(args.records)
    except ValueError as exc:
        print(f"Sort failed: {exc}")
        return 1

    logger.info("Sorting %d record(s) by %s", len(records), sort)
    try:
        ordered = sorted_by(records, sort)
    except (PropertyAccessError, TypeError) as exc:
        print(f"Sort failed: {exc}")
        return 1

    if args.output_json:
        output = json.dumps(ordered, indent=2, default=str) + "\n"
    else:
        output = yaml.safe_dump(ordered, sort_keys=False, allow_unicode=True)
    _write_output(output, args.out, "sorted records")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    issues = sort_issues(load_yaml_payload(args.spec))
    _print_issues(issues)
    return 1 if has_errors(issues) else 0


def cmd_fmt(args: argparse.Namespace) -> int:
    payload = load_yaml_payload(args.spec)
    issues = sort_issues(payload)
    if has_errors(issues):
        _print_issues(issues)
        return 1

    canonical: Dict[str, Any] = sort_to_payload(sort_from_payload(payload))
    output = yaml.safe_dump(canonical, sort_keys=False, default_flow_style=False)

    if args.write:
        Path(args.spec).write_text(output, encoding="utf-8")
        print(f"Formatted: {args.spec}")
    else:
        _write_output(output, args.out, "formatted sort spec")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sortspec", description="Sort records by property-path sort specs")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sort_parser = sub.add_parser("sort", help="Sort a YAML/JSON list of records")
    sort_parser.add_argument("records", help="Path to records YAML or JSON")
    sort_parser.add_argument(
        "--by",
        action="append",
        default=[],
        help="Sort expression, e.g. 'name,desc', 'team.name:asc' or '--by=-points' (repeatable)",
    )
    sort_parser.add_argument("--spec", help="Path to sort spec YAML (applied before --by)")
    sort_parser.add_argument("--out", help="Output file for sorted records")
    sort_parser.add_argument("--output-json", action="store_true", help="Print sorted records as JSON")
    sort_parser.set_defaults(func=cmd_sort)

    validate_parser = sub.add_parser("validate", help="Validate a sort spec file")
    validate_parser.add_argument("spec", help="Path to sort spec YAML")
    validate_parser.set_defaults(func=cmd_validate)

    fmt_parser = sub.add_parser("fmt", help="Rewrite a sort spec in canonical form")
    fmt_parser.add_argument("spec", help="Path to sort spec YAML")
    fmt_parser.add_argument("--write", action="store_true", help="Overwrite the spec file in place")
    fmt_parser.add_argument("--out", help="Output file for the formatted spec")
    fmt_parser.set_defaults(func=cmd_fmt)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
