"""
Module: builder.text.measure

Purpose:
    Greedy word wrapping shared by the pagination simulator and the page
    renderer. Both sides run the same line-breaking generator with the
    same font metrics, so predicted heights equal drawn heights.

Key Functions:
    - count_wrapped_lines(): Number of lines text wraps into
    - wrap_and_emit(): Wrap and draw, returning the next free Y
    - wrapped_block_height(): Line count floored at 1, times line height
    - field_block_height(): Taller of a field's label and value blocks

Key Classes:
    - TextMeasures: Width functions for the label and value columns

Algorithm:
    Split on single spaces. Append words to the working line while the
    measured width of (line + word) fits max_width. On overflow with a
    non-empty working line, commit it and start a new line with the word.
    The final working line is always committed. A single word wider than
    max_width is never split; it overflows.

Dependencies:
    - builder.text.fonts: Font resolution for measures

Used By:
    - builder.layout.paginator
    - builder.output.renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from biodata_toolkit.core.models import CustomizationSettings, Field

from .fonts import PillowFont, font_for

Measure = Callable[[str], float]
Draw = Callable[[str, float, float], None]

VALUE_PREFIX = ": "


def _wrap_lines(measure: Measure, text: str, max_width: float) -> Iterator[str]:
    """Yield committed lines for `text`. Blank text yields nothing."""
    if text.strip() == "":
        return

    line = ""
    for word in text.split(" "):
        candidate = f"{line} {word}" if line else word
        if measure(candidate) > max_width and line:
            yield line
            line = word
        else:
            line = candidate
    yield line


def count_wrapped_lines(measure: Measure, text: str, max_width: float) -> int:
    """
    Count the lines `text` wraps into at `max_width`.

    Example:
        >>> count_wrapped_lines(len, "aaa bbb ccc", 7)
        2
        >>> count_wrapped_lines(len, "   ", 7)
        0
    """
    return sum(1 for _ in _wrap_lines(measure, text, max_width))


def wrap_and_emit(
    measure: Measure,
    draw: Draw,
    text: str,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
) -> float:
    """
    Wrap `text` and draw each line at (x, running_y).

    Args:
        measure: Width function (same one used for pagination)
        draw: Callback drawing one line at (text, x, y)
        text: Text to wrap
        x: Left X of every line
        y: Baseline Y of the first line
        max_width: Wrap width
        line_height: Advance per line

    Returns:
        Next free Y after the last line. Blank text draws nothing and
        still reserves one line, matching `wrapped_block_height`.
    """
    running_y = y
    drew = False
    for line in _wrap_lines(measure, text, max_width):
        draw(line.rstrip(), x, running_y)
        running_y += line_height
        drew = True
    if not drew:
        return y + line_height
    return running_y


def wrapped_block_height(measure: Measure, text: str, max_width: float, line_height: float) -> float:
    """Height of a wrapped block, never less than one line."""
    return max(1, count_wrapped_lines(measure, text, max_width)) * line_height


@dataclass(frozen=True)
class TextMeasures:
    """
    Width functions for the two field columns.

    Labels are drawn in the bold body font, values in the regular one,
    so each column has its own metrics.
    """

    label: Measure
    value: Measure

    @classmethod
    def uniform(cls, measure: Measure) -> "TextMeasures":
        return cls(label=measure, value=measure)

    @classmethod
    def from_customization(cls, customization: CustomizationSettings, scale: int = 1) -> "TextMeasures":
        """Measures matching the fonts the renderer draws fields with."""
        return cls(
            label=make_measure(font_for(customization.body_font(bold=True), scale), scale),
            value=make_measure(font_for(customization.body_font(), scale), scale),
        )


def make_measure(font: PillowFont, scale: int = 1) -> Measure:
    """Width function in logical units for a font loaded at `scale`."""
    def measure(text: str) -> float:
        return font.getlength(text) / scale
    return measure


def field_block_height(
    field: Field,
    measures: TextMeasures,
    *,
    label_width: float,
    value_width: float,
    line_height: float,
) -> float:
    """Height of a field's text: taller of the label and value blocks."""
    label_height = wrapped_block_height(measures.label, field.label, label_width, line_height)
    value_height = wrapped_block_height(
        measures.value, VALUE_PREFIX + field.value, value_width, line_height
    )
    return max(label_height, value_height)
