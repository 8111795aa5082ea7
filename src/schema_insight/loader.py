"""Load a directory of JSON Schema files into :class:`Schema` records.

The engine itself never touches the file system; this module is the thin
adapter the CLI (and library users) go through to get a schema collection.
"""

from __future__ import annotations

import base64
import json
import re
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Union
from urllib.parse import unquote

from .exceptions import InvalidPathError, SchemaLoadError
from .logging_config import get_logger
from .models import Schema, SchemaMetadata, SchemaReference
from .nodes import MAX_WALK_DEPTH

logger = get_logger(__name__)

SKIP_DIRS = frozenset({"node_modules", ".git"})
SKIP_FILES = frozenset({"package.json", "package-lock.json"})

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def schema_id_for(path: Path) -> str:
    """Stable id derived from the file path (base64, alphanumerics only)."""
    encoded = base64.b64encode(str(path).encode("utf-8")).decode("ascii")
    return _NON_ALNUM.sub("", encoded)


def schema_name_for(path: Path) -> str:
    """File stem with ``.json`` and a trailing ``.schema`` removed."""
    name = path.name
    for suffix in (".json", ".schema"):
        if name.lower().endswith(suffix):
            name = name[: -len(suffix)]
    return name


def ref_target_name(ref: str) -> str:
    """Schema name a ``$ref`` points at.

    ``address.schema.json#/x`` -> ``address``; ``#/definitions/Address``
    -> ``Address``; ``https://host/schemas/order.json`` -> ``order``.
    """
    file_part, _, fragment = ref.partition("#")
    if file_part:
        return schema_name_for(Path(PurePosixPath(unquote(file_part)).name))
    segments = [s for s in fragment.split("/") if s]
    if not segments:
        return ""
    # JSON pointer escapes
    return unquote(segments[-1]).replace("~1", "/").replace("~0", "~")


def extract_refs(content: Any) -> list[str]:
    """Every ``$ref`` string in a document, in document order."""
    refs: list[str] = []
    stack: list[tuple[Any, int]] = [(content, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > MAX_WALK_DEPTH:
            continue
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                refs.append(ref)
            stack.extend((child, depth + 1) for child in reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend((child, depth + 1) for child in reversed(node))
    return refs


def _should_skip(path: Path, root: Path) -> bool:
    if path.name in SKIP_FILES:
        return True
    return any(part in SKIP_DIRS for part in path.relative_to(root).parts)


def read_schema_file(path: Path) -> Schema:
    """Read and parse one schema file.

    Raises:
        SchemaLoadError: If the file cannot be read or is not valid JSON
    """
    try:
        text = path.read_text(encoding="utf-8")
        stat = path.stat()
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(path, str(e)) from e

    try:
        content = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(path, f"invalid JSON: {e}") from e

    is_object = isinstance(content, dict)
    title = content.get("title") if is_object else None
    description = content.get("description") if is_object else None

    return Schema(
        id=schema_id_for(path),
        name=schema_name_for(path),
        content=content,
        references=tuple(
            SchemaReference(ref=ref, schema_name=ref_target_name(ref))
            for ref in extract_refs(content)
        ),
        metadata=SchemaMetadata(
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            file_size=stat.st_size,
            title=title if isinstance(title, str) else None,
            description=description if isinstance(description, str) else None,
        ),
        validation_status="valid" if is_object else "invalid",
    )


def load_schemas(
    directory: Union[str, Path], pattern: str = "**/*.json", strict: bool = False
) -> list[Schema]:
    """
    Load every JSON file under *directory* as a schema.

    Args:
        directory: Project root to scan
        pattern: Glob pattern relative to the root
        strict: Raise on unreadable files instead of skipping them

    Returns:
        Schemas sorted by path, with ``referenced_by`` filled in

    Raises:
        InvalidPathError: If *directory* is not an existing directory
        SchemaLoadError: If ``strict`` and a file cannot be loaded
    """
    root = Path(directory)
    if not root.exists():
        raise InvalidPathError(root, "Path does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "Not a directory")
    root = root.resolve()

    schemas: list[Schema] = []
    files_skipped = 0
    for path in sorted(root.glob(pattern)):
        if not path.is_file() or _should_skip(path, root):
            continue
        try:
            schemas.append(read_schema_file(path))
            logger.debug(f"Loaded: {path}")
        except SchemaLoadError as e:
            if strict:
                raise
            files_skipped += 1
            logger.warning(f"Skipping {path}: {e.reason}")

    logger.info(f"Loaded {len(schemas)} schema(s) from {root} ({files_skipped} skipped)")
    return link_referenced_by(schemas)


def link_referenced_by(schemas: list[Schema]) -> list[Schema]:
    """Fill ``referenced_by`` (ids of referencing schemas) from resolved names."""
    by_name: dict[str, Schema] = {}
    for schema in schemas:
        by_name.setdefault(schema.name, schema)

    incoming: dict[str, list[str]] = {schema.id: [] for schema in schemas}
    for schema in schemas:
        for ref in schema.references:
            target = by_name.get(ref.schema_name)
            if target is not None and schema.id not in incoming[target.id]:
                incoming[target.id].append(schema.id)

    return [replace(schema, referenced_by=tuple(incoming[schema.id])) for schema in schemas]
