"""
json_validate.py — JSON path: validate one JSON document against one JSON Schema.

Steps:
  1. Load the schema, pick the validator class from `$schema`
     (Draft 2020-12 when absent) and check the schema itself.
  2. Build a `$ref` registry (see ref_resolver) with the schema anchored at its file URI.
  3. Load the input document and index the source position of every value.
  4. Collect errors in validator order; anyOf/oneOf branch errors become children.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

import requests
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.validators import validator_for
from referencing.exceptions import Unresolvable

from schemavalidator.core.utils.json_positions import PathKey, Position, index_positions, locate
from schemavalidator.core.validate.ref_resolver import anchor_at_file, build_registry
from schemavalidator.core.validate.result import (
    CHILD_MARKER,
    ErrorKind,
    Failure,
    ValidationIssue,
    format_issue,
)

if TYPE_CHECKING:
    from schemavalidator.core.options.load_options import Configuration

logger = logging.getLogger(__name__)

VALID_LINE = "JSON appears to be valid!"
INVALID_LINE = "JSON appears to be INVALID:"

_ENGINE_ERRORS = (
    json.JSONDecodeError,
    SchemaError,
    Unresolvable,
    requests.RequestException,
    UnicodeDecodeError,
    OSError,
)


def _read_json(path: Path) -> tuple[str, Any]:
    text = path.read_text(encoding="utf-8-sig")
    return text, json.loads(text)


def json_path(path: Iterable[Any]) -> str:
    out = "$"
    for p in path:
        out += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return out


def _to_issue(
    err: ValidationError,
    positions: dict[PathKey, Position],
    *,
    with_children: bool,
) -> ValidationIssue:
    line, col = locate(positions, tuple(err.absolute_path))
    children: tuple[ValidationIssue, ...] = ()
    if with_children and err.context:
        children = tuple(_to_issue(c, positions, with_children=False) for c in err.context)
    return ValidationIssue(
        line=line,
        column=col,
        message=f"{json_path(err.absolute_path)}: {err.message}",
        children=children,
    )


def validate_json(config: Configuration) -> list[ValidationIssue] | Failure:
    """Validate `config.input_file` against its single JSON Schema.

    Returns the top-level issues (empty list == valid) or a Failure.
    """
    if len(config.schema_files) > 1:
        return Failure(
            ErrorKind.NOT_IMPLEMENTED,
            "multiple JSON schema files are not implemented; reference other schemas by $ref",
        )

    schema_path = config.schema_files[0]
    try:
        _, schema = _read_json(schema_path)
        cls = validator_for(schema, default=Draft202012Validator)
        cls.check_schema(schema)
        logger.debug("schema %s uses %s", schema_path, cls.__name__)

        text, instance = _read_json(config.input_file)
        positions = index_positions(text)

        with requests.Session() as session:
            entry, registry = anchor_at_file(schema, schema_path, cls, build_registry(cls, session))
            validator = cls(entry, registry=registry, format_checker=cls.FORMAT_CHECKER)
            issues = [_to_issue(e, positions, with_children=True) for e in validator.iter_errors(instance)]
    except _ENGINE_ERRORS as e:
        return Failure(ErrorKind.ENGINE, "JSON validation failed", detail=f"{type(e).__name__}: {e}")

    logger.debug("%d top-level error(s) in %s", len(issues), config.input_file)
    return issues


def render_json_report(issues: list[ValidationIssue]) -> list[str]:
    if not issues:
        return [VALID_LINE]
    lines = [INVALID_LINE]
    for issue in issues:
        lines.append(format_issue(issue))
        for child in issue.children:
            lines.append(format_issue(child, marker=CHILD_MARKER))
    return lines
