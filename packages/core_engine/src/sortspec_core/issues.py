from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Issue:
    severity: str
    code: str
    message: str
    path: str = "/"


def has_errors(issues: List[Issue]) -> bool:
    return any(issue.severity == "error" for issue in issues)


def to_lines(issues: List[Issue]) -> List[str]:
    return [
        f"[{issue.severity.upper()}] {issue.code}: {issue.message} ({issue.path})"
        for issue in issues
    ]
