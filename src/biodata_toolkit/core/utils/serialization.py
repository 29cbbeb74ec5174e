"""
Serialization Utilities

to/from dict helpers for field lists and form snapshots.

The session dumps its form data through these helpers for inspection and
debugging. Nothing here touches disk.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List

from ..models.fields import Field


# ─────────────────────────────────────────────────────────────────────────────
# Field Lists
# ─────────────────────────────────────────────────────────────────────────────

def serialize_fields(fields: Iterable[Field]) -> List[dict[str, Any]]:
    """Serialize fields in order."""
    return [field.to_dict() for field in fields]


def deserialize_fields(data: Iterable[dict[str, Any]]) -> List[Field]:
    """
    Deserialize a field list.

    Raises:
        KeyError: If a required key is missing
        ValueError: If an origin or input kind is not recognised,
            or two entries share an id
    """
    fields = [Field.from_dict(item) for item in data]
    seen: set[str] = set()
    for field in fields:
        if field.id in seen:
            raise ValueError(f"Duplicate field id: {field.id}")
        seen.add(field.id)
    return fields


# ─────────────────────────────────────────────────────────────────────────────
# JSON
# ─────────────────────────────────────────────────────────────────────────────

def dumps_form(snapshot: dict[str, Any]) -> str:
    """Pretty JSON for a form snapshot."""
    return json.dumps(snapshot, indent=2, ensure_ascii=False)
