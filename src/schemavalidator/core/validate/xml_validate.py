"""
xml_validate.py — XML path: validate one XML document against a set of XSDs.

lxml compiles exactly one schema document, so a set of several XSD files is
joined through generated wrapper schemas:

  - files are grouped by their own targetNamespace (command line order kept)
  - a group of several files -> wrapper with that namespace, one xs:include each
  - several groups -> top wrapper with one xs:import per group

Every entry of the schema error log is handed to `on_event` in order.
Nothing is reported for a valid document.
"""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Sequence

from lxml import etree

from schemavalidator.core.validate.result import ErrorKind, Failure, ValidationIssue

if TYPE_CHECKING:
    from schemavalidator.core.options.load_options import Configuration

logger = logging.getLogger(__name__)

XS_NS = "http://www.w3.org/2001/XMLSchema"
SCHEMA_SET_NS = "urn:schema-validator:schema-set"

_ENGINE_ERRORS = (
    etree.XMLSyntaxError,
    etree.XMLSchemaParseError,
    OSError,
)


def _target_namespace(path: Path) -> str | None:
    return etree.parse(str(path)).getroot().get("targetNamespace")


def _wrapper(target_ns: str | None) -> etree._Element:
    root = etree.Element(f"{{{XS_NS}}}schema", nsmap={"xs": XS_NS})
    if target_ns is not None:
        root.set("targetNamespace", target_ns)
    return root


def _write(root: etree._Element, path: Path) -> Path:
    etree.ElementTree(root).write(str(path), xml_declaration=True, encoding="utf-8")
    return path


def _group_by_namespace(schema_files: Sequence[Path]) -> dict[str | None, list[Path]]:
    groups: dict[str | None, list[Path]] = {}
    for p in schema_files:
        groups.setdefault(_target_namespace(p), []).append(p.resolve())
    return groups


def _write_schema_set(schema_files: Sequence[Path], work_dir: Path) -> Path:
    """Write wrapper schemas into `work_dir` and return the one to compile."""
    entries: list[tuple[str | None, Path]] = []
    for n, (ns, files) in enumerate(_group_by_namespace(schema_files).items()):
        if len(files) == 1:
            entries.append((ns, files[0]))
            continue
        group = _wrapper(ns)
        for f in files:
            etree.SubElement(group, f"{{{XS_NS}}}include", schemaLocation=f.as_uri())
        entries.append((ns, _write(group, work_dir / f"group_{n}.xsd")))

    if len(entries) == 1:
        return entries[0][1]

    top = _wrapper(SCHEMA_SET_NS)
    for ns, loc in entries:
        imp = etree.SubElement(top, f"{{{XS_NS}}}import", schemaLocation=loc.as_uri())
        if ns is not None:
            imp.set("namespace", ns)
    return _write(top, work_dir / "schema_set.xsd")


def compile_schema_set(schema_files: Sequence[Path]) -> etree.XMLSchema:
    if len(schema_files) == 1:
        return etree.XMLSchema(etree.parse(str(schema_files[0])))
    with tempfile.TemporaryDirectory(prefix="schema-set-") as tmp:
        entry = _write_schema_set(schema_files, Path(tmp))
        logger.debug("compiling schema set of %d file(s) via %s", len(schema_files), entry.name)
        return etree.XMLSchema(etree.parse(str(entry)))


def load_document(path: Path) -> etree._ElementTree:
    # Whitespace is kept and every node records its source line.
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False, no_network=True)
    return etree.parse(str(path), parser)


def validate_xml(
    config: Configuration,
    on_event: Callable[[ValidationIssue], None],
) -> Failure | None:
    """Validate `config.input_file` against every XSD in `config.schema_files`."""
    try:
        schema = compile_schema_set(config.schema_files)
        doc = load_document(config.input_file)
        schema.validate(doc)
    except _ENGINE_ERRORS as e:
        return Failure(ErrorKind.ENGINE, "XML validation failed", detail=f"{type(e).__name__}: {e}")

    for entry in schema.error_log:
        on_event(ValidationIssue(line=entry.line, column=entry.column, message=entry.message))
    return None
