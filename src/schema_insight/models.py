"""Input records: the schema collection handed to the analytics engine.

Schemas are immutable snapshots owned by the caller (the project/file
layer, or :mod:`schema_insight.loader`). The engine reads them and never
mutates them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional, Union

ValidationStatus = Literal["valid", "invalid", "pending", "error"]

Timestamp = Union[datetime, float, int, str, None]


@dataclass(frozen=True)
class SchemaReference:
    """One outgoing ``$ref`` of a schema and the schema name it resolves to."""

    ref: str  # the raw "$ref" string
    schema_name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchemaReference":
        return cls(
            ref=str(data.get("$ref", data.get("ref", ""))),
            schema_name=str(data.get("schemaName", data.get("schema_name", ""))),
        )

    def to_dict(self) -> dict[str, str]:
        return {"$ref": self.ref, "schemaName": self.schema_name}


@dataclass(frozen=True)
class SchemaMetadata:
    """File-level facts about a schema document."""

    last_modified: Timestamp = None
    file_size: int = 0
    title: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchemaMetadata":
        return cls(
            last_modified=data.get("lastModified", data.get("last_modified")),
            file_size=int(data.get("fileSize", data.get("file_size", 0)) or 0),
            title=data.get("title"),
            description=data.get("description"),
        )

    def to_dict(self) -> dict[str, Any]:
        last_modified = self.last_modified
        if isinstance(last_modified, datetime):
            last_modified = last_modified.isoformat()
        out: dict[str, Any] = {"lastModified": last_modified, "fileSize": self.file_size}
        if self.title is not None:
            out["title"] = self.title
        if self.description is not None:
            out["description"] = self.description
        return out

    @property
    def last_modified_ms(self) -> int:
        """Last-modified time as epoch milliseconds, 0 when missing or unparseable."""
        return timestamp_to_ms(self.last_modified)


@dataclass(frozen=True)
class Schema:
    """A single JSON Schema document tracked by a project."""

    id: str
    name: str
    content: Any
    references: tuple[SchemaReference, ...] = ()
    referenced_by: tuple[str, ...] = ()
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)
    validation_status: ValidationStatus = "pending"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Schema":
        """Build a Schema from its camelCase wire form."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            content=data.get("content"),
            references=tuple(SchemaReference.from_dict(r) for r in data.get("references") or ()),
            referenced_by=tuple(str(r) for r in data.get("referencedBy") or ()),
            metadata=SchemaMetadata.from_dict(data.get("metadata") or {}),
            validation_status=data.get("validationStatus", "pending"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "references": [r.to_dict() for r in self.references],
            "referencedBy": list(self.referenced_by),
            "metadata": self.metadata.to_dict(),
            "validationStatus": self.validation_status,
        }


def timestamp_to_ms(value: Timestamp) -> int:
    """Convert a datetime / epoch-seconds / ISO string to epoch milliseconds.

    Naive datetimes are taken as UTC. Anything unparseable maps to 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return 0
        return int(value * 1000)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return timestamp_to_ms(datetime.fromisoformat(text))
        except ValueError:
            return 0
    return 0
