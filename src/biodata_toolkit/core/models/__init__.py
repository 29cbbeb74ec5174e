"""
Core Models Package

Immutable, validated data models.

| Model | Role |
|-------|------|
| `Field` | One label/value line item |
| `RawGroup` | Group tag assigned by the editor |
| `CanonicalGroup` | Section bucket driving headings |
| `Template` | Background image + primary colour |
| `CustomizationSettings` | Body / heading typography |
"""

from .groups import RawGroup, CanonicalGroup, canonicalize, heading_for, GROUP_TITLES
from .fields import Field, FieldOrigin, InputKind
from .settings import Template, CustomizationSettings, FontSpec

__all__ = [
    "RawGroup",
    "CanonicalGroup",
    "canonicalize",
    "heading_for",
    "GROUP_TITLES",
    "Field",
    "FieldOrigin",
    "InputKind",
    "Template",
    "CustomizationSettings",
    "FontSpec",
]
