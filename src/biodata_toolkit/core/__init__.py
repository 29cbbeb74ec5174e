"""
Biodata Toolkit Core Package

Shared data models used by the builder and the editor session.

All models are frozen dataclasses. Editing a field produces a new
instance, and the page list is derived from the current field list
on every change rather than updated in place.
"""

from .models import (
    CanonicalGroup,
    CustomizationSettings,
    Field,
    FieldOrigin,
    FontSpec,
    InputKind,
    RawGroup,
    Template,
    canonicalize,
    heading_for,
)

__all__ = [
    "CanonicalGroup",
    "CustomizationSettings",
    "Field",
    "FieldOrigin",
    "FontSpec",
    "InputKind",
    "RawGroup",
    "Template",
    "canonicalize",
    "heading_for",
]
