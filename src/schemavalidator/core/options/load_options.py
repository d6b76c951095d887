"""
load_options.py — Command line parsing and file checks.

Rules, applied in order (first failure wins):
  1. arguments must parse                -> INVALID_OPTION
  2. schema list must be non-empty       -> EMPTY_SCHEMA_LIST
  3. every schema path must be a file    -> SCHEMA_NOT_FOUND (first missing one)
  4. the input path must be a file       -> INPUT_NOT_FOUND
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Sequence

from schemavalidator.core.validate.result import ErrorKind, Failure

SCHEMA_SEPARATOR = ";"


@dataclass(frozen=True)
class Configuration:
    schema_files: tuple[Path, ...]
    input_file: Path
    verbose: bool = False


class OptionError(Exception):
    pass


class _OptionParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise OptionError(message)


def build_parser() -> argparse.ArgumentParser:
    ap = _OptionParser(prog="schema-validator", description="Validate a JSON or XML document against JSON Schema / XSD files.")
    ap.add_argument(
        "-s",
        "--schema",
        required=True,
        nargs="+",
        help="path to the schema file(s) used to validate the input. Use semi-colon (;) to add more than one schema.",
    )
    ap.add_argument("-i", "--input", required=True, help="path to the file to validate against the schema")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    return ap


def split_schema_list(values: Sequence[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        out.extend(s.strip() for s in v.split(SCHEMA_SEPARATOR) if s.strip())
    return out


def load_options(argv: Sequence[str] | None = None) -> Configuration | Failure:
    try:
        args = build_parser().parse_args(argv)
    except OptionError as e:
        return Failure(ErrorKind.INVALID_OPTION, "invalid command line option", detail=str(e))

    schemas = split_schema_list(args.schema)
    if not schemas:
        return Failure(ErrorKind.EMPTY_SCHEMA_LIST, "empty schema file list")

    schema_paths = tuple(Path(s) for s in schemas)
    for p in schema_paths:
        if not p.is_file():
            return Failure(ErrorKind.SCHEMA_NOT_FOUND, "schema file not found", path=p)

    input_path = Path(args.input)
    if not input_path.is_file():
        return Failure(ErrorKind.INPUT_NOT_FOUND, "input file not found", path=input_path)

    return Configuration(schema_files=schema_paths, input_file=input_path, verbose=args.verbose)
