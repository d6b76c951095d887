"""Validation paths and their result values.

Public API:
- `validate_json(config)` -> list[ValidationIssue] | Failure
- `render_json_report(issues)` -> list[str]
- `validate_xml(config, on_event)` -> Failure | None

    from schemavalidator.core.validate import validate_json
"""

from __future__ import annotations

from .json_validate import render_json_report, validate_json
from .result import ErrorKind, Failure, ValidationIssue, format_issue
from .xml_validate import validate_xml

__all__ = [
    "ErrorKind",
    "Failure",
    "ValidationIssue",
    "format_issue",
    "render_json_report",
    "validate_json",
    "validate_xml",
]
