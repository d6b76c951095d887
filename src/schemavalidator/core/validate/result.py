"""
result.py — Result values shared by the option loader, the dispatcher and
both validation paths.

Failures are returned, not raised. The CLI boundary turns the one it
receives into an exit code and an `[NG]` message.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

ISSUE_MARKER = ">"
CHILD_MARKER = "--> "


class ErrorKind(Enum):
    INVALID_OPTION = "invalid command line option"
    EMPTY_SCHEMA_LIST = "empty schema file list"
    SCHEMA_NOT_FOUND = "schema file not found"
    INPUT_NOT_FOUND = "input file not found"
    UNKNOWN_SCHEMA_TYPE = "unknown schema file type"
    NOT_IMPLEMENTED = "not implemented"
    ENGINE = "validation engine failure"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    path: Path | None = None
    detail: str | None = None

    def render(self) -> str:
        head = f"[NG] {self.message}"
        if self.path is not None:
            head += f": {self.path}"
        if self.detail:
            head += f"\n      detail: {self.detail}"
        return head


@dataclass(frozen=True)
class ValidationIssue:
    """One validator finding. `children` is only filled on the JSON path."""

    line: int
    column: int
    message: str
    children: tuple[ValidationIssue, ...] = ()


def format_issue(issue: ValidationIssue, marker: str = ISSUE_MARKER) -> str:
    return f"{marker} {issue.line} {issue.column} {issue.message}"
