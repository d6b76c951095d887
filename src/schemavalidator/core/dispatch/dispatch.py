"""
dispatch.py — Pick the validation path from the first schema file's suffix.

Only the first schema file is inspected; with mixed suffixes the rest follow
whichever path the first one selects.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable

from schemavalidator.core.options.load_options import Configuration
from schemavalidator.core.validate import (
    ErrorKind,
    Failure,
    format_issue,
    render_json_report,
    validate_json,
    validate_xml,
)

logger = logging.getLogger(__name__)


class SchemaKind(Enum):
    JSON_SCHEMA = "json"
    XSD_SCHEMA = "xsd"
    UNKNOWN = "unknown"


def classify_schema(path: Path | str) -> SchemaKind:
    name = str(path).lower()
    if name.endswith(".json"):
        return SchemaKind.JSON_SCHEMA
    if name.endswith(".xsd"):
        return SchemaKind.XSD_SCHEMA
    return SchemaKind.UNKNOWN


def run_validation(config: Configuration, out: Callable[[str], None] = print) -> Failure | None:
    """Run the selected path, writing its report lines through `out`."""
    kind = classify_schema(config.schema_files[0])
    logger.debug("schema kind %s for %s", kind.value, config.schema_files[0])

    if kind is SchemaKind.JSON_SCHEMA:
        result = validate_json(config)
        if isinstance(result, Failure):
            return result
        for line in render_json_report(result):
            out(line)
        return None

    if kind is SchemaKind.XSD_SCHEMA:
        return validate_xml(config, on_event=lambda issue: out(format_issue(issue)))

    return Failure(ErrorKind.UNKNOWN_SCHEMA_TYPE, "unknown schema file type", path=config.schema_files[0])
