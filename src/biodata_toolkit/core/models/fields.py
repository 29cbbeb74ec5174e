"""
Module: fields

Purpose:
    Provides the Field dataclass - one renderable label/value line item
    of a biodata document, tagged with the raw group it was entered under.

Key Classes:
    - Field: Immutable label/value item
    - FieldOrigin: Built-in vs user-added
    - InputKind: Editor widget kind (layout ignores it)

Dependencies:
    - dataclasses (std)
    - .groups: RawGroup, CanonicalGroup

Used By:
    - builder.layout.paginator
    - builder.output.renderer
    - session.BiodataSession
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .groups import CanonicalGroup, RawGroup, canonicalize


class FieldOrigin(str, Enum):
    """Whether a field ships with the form or was added by the user."""
    MANDATORY = "mandatory"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class InputKind(str, Enum):
    """Editor input widget for the field."""
    TEXT = "text"
    TEXTAREA = "textarea"
    DATE = "date"
    TIME = "time"
    SELECT = "select"
    RADIO = "radio"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Field:
    """
    One label/value line item (immutable).

    Attributes:
        id: Stable unique token, e.g. "name-0"
        label: Display label
        value: Display value (may be blank)
        group: Raw group tag from the editor (RawGroup or any tag string;
            unknown tags render as unheaded OTHER fields)
        origin: Built-in or user-added (UI only)
        input_kind: Editor widget kind (UI only)
        options: Choices for select/radio inputs (UI only)

    Example:
        >>> f = Field("name-0", "Full Name", "Asha Rao", RawGroup.PERSONAL)
        >>> f.canonical_group
        <CanonicalGroup.PERSONAL: 'personal'>
        >>> f.has_content
        True
    """

    id: str
    label: str
    value: str
    group: Union[RawGroup, str]
    origin: FieldOrigin = FieldOrigin.MANDATORY
    input_kind: InputKind = InputKind.TEXT
    options: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Field id must be non-empty")

    @property
    def canonical_group(self) -> CanonicalGroup:
        return canonicalize(self.group)

    @property
    def has_content(self) -> bool:
        """True when the value occupies layout space (non-blank)."""
        return bool(self.value) and self.value.strip() != ""

    @property
    def is_custom(self) -> bool:
        return self.origin is FieldOrigin.CUSTOM

    def with_value(self, value: str) -> "Field":
        return replace(self, value=value)

    def with_label(self, label: str) -> "Field":
        return replace(self, label=label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "value": self.value,
            "type": self.origin.value,
            "groupId": str(self.group),
            "inputType": self.input_kind.value,
            "options": list(self.options),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            value=data.get("value", ""),
            group=_parse_group(data["groupId"]),
            origin=FieldOrigin(data.get("type", FieldOrigin.MANDATORY.value)),
            input_kind=InputKind(data.get("inputType", InputKind.TEXT.value)),
            options=tuple(data.get("options") or ()),
        )


def _parse_group(tag: str) -> Union[RawGroup, str]:
    try:
        return RawGroup(tag)
    except ValueError:
        return tag
