"""Convert analysis results to JSON-ready data.

Dataclass fields are emitted under camelCase keys (``in_degree`` ->
``inDegree``). Plain dict keys are kept as they are, so mappings keyed by
schema id (``complexity_metrics``) survive untouched.
"""

from __future__ import annotations

import json
import math
from dataclasses import fields, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .engine import AnalyticsResult

# Field names whose wire form is not the plain camelCase spelling.
_RENAMES = {"duration_ms": "duration"}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_jsonable(obj: Any) -> Any:
    """Convert object to JSON-serializable form."""
    if obj is None or isinstance(obj, (str, bool, int)):
        return obj
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            _RENAMES.get(f.name, to_camel(f.name)): to_jsonable(getattr(obj, f.name))
            for f in fields(obj)
        }
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted(to_jsonable(x) for x in obj)
    return str(obj)


def result_to_dict(result: AnalyticsResult) -> dict[str, Any]:
    """JSON-ready form of a full analysis result."""
    return to_jsonable(result)


def result_to_json(result: AnalyticsResult, indent: int = 2) -> str:
    return json.dumps(result_to_dict(result), indent=indent, ensure_ascii=False)
