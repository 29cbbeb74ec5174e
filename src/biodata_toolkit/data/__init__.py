"""
Module: data

Purpose:
    Built-in catalogues: the default biodata fields and the document
    templates offered by the editor.
"""

from .initial_fields import (
    ComplexField,
    IDENTITY_FIELD_ID,
    INITIAL_COMPLEX_FIELDS,
    flatten_fields,
    initial_fields,
)
from .templates import TEMPLATES, DEFAULT_TEMPLATE, get_template

__all__ = [
    "ComplexField",
    "IDENTITY_FIELD_ID",
    "INITIAL_COMPLEX_FIELDS",
    "flatten_fields",
    "initial_fields",
    "TEMPLATES",
    "DEFAULT_TEMPLATE",
    "get_template",
]
