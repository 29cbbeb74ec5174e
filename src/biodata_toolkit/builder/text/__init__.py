"""
Module: builder.text

Purpose:
    Font resolution and the word-wrapping algorithm shared by
    pagination and rendering.
"""

from .fonts import load_font, font_for
from .measure import (
    Measure,
    TextMeasures,
    VALUE_PREFIX,
    count_wrapped_lines,
    field_block_height,
    make_measure,
    wrap_and_emit,
    wrapped_block_height,
)

__all__ = [
    "load_font",
    "font_for",
    "Measure",
    "TextMeasures",
    "VALUE_PREFIX",
    "count_wrapped_lines",
    "field_block_height",
    "make_measure",
    "wrap_and_emit",
    "wrapped_block_height",
]
