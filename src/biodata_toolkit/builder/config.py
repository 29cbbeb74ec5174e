"""
Module: builder.config

Purpose:
    Configuration for the page layout engine.
    Defines canvas dimensions, column geometry, vertical rhythm and the
    content bounds shared by the paginator and the renderer.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: Page breaking
    - builder.output.renderer: Page drawing
    - builder.output.assembler: Surface sizing
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from biodata_toolkit.core.models import CustomizationSettings


# A4 proportions (1:1.414) in logical canvas units
DEFAULT_CANVAS_WIDTH = 500
DEFAULT_CANVAS_HEIGHT = 707
DEFAULT_DPI_SCALE = 2
DEFAULT_PADDING = 60


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All coordinates are logical canvas units; the raster is
    `dpi_scale` times larger.

    Attributes:
        canvas_width: Logical page width
        canvas_height: Logical page height
        dpi_scale: Raster pixels per logical unit
        padding: Outer page padding
        field_gap: Vertical gap after each field
        line_height: Height of one wrapped body line
        body_font_size: Body font size used for measurement
        heading_font_size: Section heading font size
        heading_space_above: Gap inserted before a section heading
        heading_gap_below: Gap between heading baseline and next field
        first_page_content_y: First field Y on page 1 (below the header)
        next_page_content_y: First field Y on later pages
        max_content_y: Bottom bound before a forced break
        value_col_offset: X of the value column
        label_col_gap: Gap between label column and value column
        emblem_box: (width, height) of the page-1 emblem
        photo_box: (width, height) of the page-1 portrait
        header_item_spacing: Gap between header items

    Example:
        >>> config = LayoutConfig()
        >>> config.value_col_width
        220
        >>> config.heading_block_height
        50
    """

    # Canvas
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    dpi_scale: int = DEFAULT_DPI_SCALE
    padding: int = DEFAULT_PADDING

    # Vertical rhythm
    field_gap: int = 8
    line_height: int = 14
    body_font_size: int = 10
    heading_font_size: int = 14
    heading_space_above: int = 20
    heading_gap_below: int = 16

    # Content bounds
    first_page_content_y: int = DEFAULT_PADDING + 175
    next_page_content_y: int = DEFAULT_PADDING + 8
    max_content_y: int = DEFAULT_CANVAS_HEIGHT - DEFAULT_PADDING - 25

    # Columns
    value_col_offset: int = DEFAULT_PADDING + 160
    label_col_gap: int = 10

    # Page-1 header
    emblem_box: Tuple[int, int] = (80, 80)
    photo_box: Tuple[int, int] = (110, 140)
    header_item_spacing: int = 10

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.canvas_width <= 0:
            raise ValueError(f"canvas_width must be positive: {self.canvas_width}")
        if self.canvas_height <= 0:
            raise ValueError(f"canvas_height must be positive: {self.canvas_height}")
        if self.dpi_scale <= 0:
            raise ValueError(f"dpi_scale must be positive: {self.dpi_scale}")
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive: {self.line_height}")
        if self.value_col_width <= 0:
            raise ValueError("Value column exceeds page width")
        if self.label_col_width <= 0:
            raise ValueError("Label column has no width")
        if self.max_content_y > self.canvas_height:
            raise ValueError("max_content_y exceeds canvas height")

    @property
    def value_col_width(self) -> int:
        """Width of the value column (up to the right padding)."""
        return self.canvas_width - self.value_col_offset - self.padding

    @property
    def label_col_width(self) -> int:
        """Width of the label column (left padding up to the value column)."""
        return self.value_col_offset - self.padding - self.label_col_gap

    @property
    def heading_block_height(self) -> int:
        """Vertical space consumed by one section heading."""
        return self.heading_space_above + self.heading_font_size + self.heading_gap_below

    @property
    def raster_size(self) -> Tuple[int, int]:
        """Raster size in pixels."""
        return self.canvas_width * self.dpi_scale, self.canvas_height * self.dpi_scale

    @property
    def aspect_ratio(self) -> float:
        """Height / width of the page."""
        return self.canvas_height / self.canvas_width

    def content_start_y(self, page_index: int) -> int:
        """Y at which field content starts on a page."""
        return self.first_page_content_y if page_index == 0 else self.next_page_content_y

    def with_customization(self, customization: CustomizationSettings) -> "LayoutConfig":
        """Copy of this config with font sizes taken from the user's settings."""
        return replace(
            self,
            body_font_size=customization.body_font_size,
            heading_font_size=customization.heading_font_size,
        )
