"""
ref_resolver.py — `$ref` retrieval for JSON Schema documents.

Builds a `referencing.Registry` that can fetch referenced schemas by URI:

    http / https -> requests
    file         -> local disk

Documents are decoded with orjson and cached for the rest of the run.
Resources without `$schema` are read with the dialect of the root schema.
The root schema itself is registered under its file URI (see anchor_at_file).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from urllib.request import url2pathname

import orjson
import requests
from referencing import Registry, Resource, Specification
from referencing.jsonschema import DRAFT202012, specification_with
from referencing.retrieval import to_cached_resource

logger = logging.getLogger(__name__)


def _fetch_text(uri: str, session: requests.Session) -> str:
    parts = urlsplit(uri)
    if parts.scheme in ("http", "https"):
        logger.debug("fetching remote schema %s", uri)
        resp = session.get(uri)
        resp.raise_for_status()
        return resp.text
    if parts.scheme == "file":
        local = Path(url2pathname(parts.path))
        logger.debug("reading referenced schema %s", local)
        return local.read_text(encoding="utf-8-sig")
    raise ValueError(f"unsupported $ref scheme: {uri!r}")


def dialect_specification(validator_cls: Any) -> Specification:
    dialect = validator_cls.META_SCHEMA.get("$schema", "")
    return specification_with(dialect, default=DRAFT202012)


def build_registry(validator_cls: Any, session: requests.Session) -> Registry:
    """Registry resolving `$ref` URIs for schemas of `validator_cls`'s dialect."""
    spec = dialect_specification(validator_cls)

    def from_contents(contents: Any) -> Resource:
        return Resource.from_contents(contents, default_specification=spec)

    @to_cached_resource(loads=orjson.loads, from_contents=from_contents)
    def retrieve(uri: str) -> str:
        return _fetch_text(uri, session)

    return Registry(retrieve=retrieve)


def anchor_at_file(
    schema: Any,
    schema_path: Path,
    validator_cls: Any,
    registry: Registry,
) -> tuple[dict[str, str], Registry]:
    """Register `schema` under its file URI and return an entry schema pointing at it.

    Relative refs in the schema then resolve next to the file, whatever the
    dialect does with keywords sitting beside a root `$ref`.
    """
    uri = schema_path.resolve().as_uri()
    resource = Resource.from_contents(schema, default_specification=dialect_specification(validator_cls))
    return {"$ref": uri}, registry.with_resource(uri, resource)
