"""
Module: builder.output.renderer

Purpose:
    Draw one page of a biodata document onto a raster surface.
    Page 1 also carries the header: emblem, portrait, invocation line
    and document heading.

Key Functions:
    - draw_background(): Template image or flat tint
    - render_page(): Header (page 1) + section headings + field rows

Layout:
    Fields start at the same Y the paginator assumed and advance by the
    same amounts: heading block, taller of label/value blocks, field gap.
    Labels sit in the left column (bold, template colour); values are
    drawn as ": value" in the right column.

Dependencies:
    - builder.output.surface: RasterSurface
    - builder.text.measure: Shared wrapping
    - builder.layout: Page, HeadingTracker

Used By:
    - builder.output.assembler: One call per exported page
    - session.BiodataSession: Live preview
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageColor

from biodata_toolkit.core.models import (
    CanonicalGroup,
    CustomizationSettings,
    Template,
    heading_for,
)

from ..config import LayoutConfig
from ..images.photo import clamp_radius
from ..images.resource import ImageResource
from ..layout.headings import HeadingTracker
from ..layout.models import Page
from ..text.measure import VALUE_PREFIX, wrap_and_emit
from .surface import RasterSurface

logger = logging.getLogger(__name__)

# Alpha of the flat tint used when the template image is unavailable (0x1A)
FALLBACK_TINT_ALPHA = 26 / 255
# Extra drop from the emblem to the invocation baseline
INVOCATION_OFFSET = 6
HEADING_LINE_OFFSET = 20


@dataclass(frozen=True)
class HeaderContent:
    """
    Page-1 header inputs.

    Attributes:
        emblem: Decorative emblem image cell (top-left)
        photo: Portrait image cell (top-right)
        photo_radius: User corner radius for the portrait
        invocation_text: Free-text line under the emblem
        heading_text: Free-text document heading
    """

    emblem: ImageResource = field(default_factory=ImageResource.empty)
    photo: ImageResource = field(default_factory=ImageResource.empty)
    photo_radius: Union[str, float] = 0
    invocation_text: str = ""
    heading_text: str = ""


@dataclass(frozen=True)
class RenderReport:
    """
    What a render call drew.

    Attributes:
        page_index: Page rendered
        fields_drawn: Field ids in draw order
        headings: Section headings drawn, in order
        end_y: Y after the last field
        pending: Header resources still loading (redraw when they settle)
    """

    page_index: int
    fields_drawn: Tuple[str, ...]
    headings: Tuple[CanonicalGroup, ...]
    end_y: float
    pending: Tuple[ImageResource, ...] = ()


def tint_color(primary_color: str, alpha: float = FALLBACK_TINT_ALPHA) -> Tuple[int, int, int]:
    """Primary colour at `alpha` over white."""
    r, g, b = ImageColor.getrgb(primary_color)[:3]
    return tuple(round(255 + (c - 255) * alpha) for c in (r, g, b))  # type: ignore[return-value]


def draw_background(
    surface: RasterSurface,
    template: Template,
    background: Optional[Image.Image],
) -> None:
    """Fill the surface with the template image, or a flat tint without one."""
    if background is not None:
        surface.paste_full(background)
    else:
        surface.fill(tint_color(template.primary_color))


def render_page(
    surface: RasterSurface,
    template: Template,
    page: Page,
    customization: CustomizationSettings,
    *,
    header: Optional[HeaderContent] = None,
    config: Optional[LayoutConfig] = None,
) -> RenderReport:
    """
    Render a page's content onto a surface whose background is already drawn.

    Args:
        surface: Target raster
        template: Template (label colour, fallback colours)
        page: Page plan from the paginator
        customization: Body/heading typography
        header: Page-1 header content (ignored on later pages)
        config: Layout configuration (defaults derived from customization)

    Returns:
        RenderReport describing what was drawn
    """
    if config is None:
        config = LayoutConfig().with_customization(customization)
    header = header or HeaderContent()

    pending: List[ImageResource] = []
    if page.is_first:
        pending.extend(_draw_header(surface, template, customization, header, config))

    end_y, drawn, headings = _draw_fields(surface, template, page, customization, config)

    return RenderReport(
        page_index=page.index,
        fields_drawn=tuple(drawn),
        headings=tuple(headings),
        end_y=end_y,
        pending=tuple(pending),
    )


def _draw_header(
    surface: RasterSurface,
    template: Template,
    customization: CustomizationSettings,
    header: HeaderContent,
    config: LayoutConfig,
) -> List[ImageResource]:
    """Draw the page-1 header. Returns resources still pending."""
    pending: List[ImageResource] = []
    emblem_w, emblem_h = config.emblem_box
    photo_w, photo_h = config.photo_box

    emblem_x = emblem_y = config.padding
    emblem = header.emblem.get()
    if emblem is not None:
        surface.paste(emblem, emblem_x, emblem_y, emblem_w, emblem_h)
    elif header.emblem.is_pending:
        pending.append(header.emblem)

    photo_x = config.canvas_width - config.padding - photo_w
    photo_y = config.padding
    photo = header.photo.get()
    if photo is not None:
        radius = clamp_radius(header.photo_radius, photo_w, photo_h)
        surface.paste(photo, photo_x, photo_y, photo_w, photo_h, radius=radius)
    elif header.photo.is_pending:
        pending.append(header.photo)

    invocation_y = emblem_y + emblem_h + config.header_item_spacing + INVOCATION_OFFSET
    if header.invocation_text.strip():
        spec = customization.body_font(
            bold=True,
            color=customization.body_text_color or template.primary_color,
        )
        surface.draw_text(header.invocation_text, emblem_x, invocation_y, spec)

    heading_y = invocation_y + customization.body_font_size + HEADING_LINE_OFFSET
    if header.heading_text.strip():
        spec = customization.heading_font(color=customization.heading_text_color or "#1f2937")
        surface.draw_text(header.heading_text, emblem_x, heading_y, spec)

    if pending:
        logger.debug(f"{len(pending)} header image(s) still loading")
    return pending


def _draw_fields(
    surface: RasterSurface,
    template: Template,
    page: Page,
    customization: CustomizationSettings,
    config: LayoutConfig,
) -> Tuple[float, List[str], List[CanonicalGroup]]:
    label_spec = customization.body_font(bold=True, color=template.primary_color)
    value_spec = customization.body_font()
    heading_spec = customization.heading_font(
        color=customization.heading_text_color or template.primary_color
    )
    label_measure = surface.measure(label_spec)
    value_measure = surface.measure(value_spec)

    def draw_label(text: str, x: float, y: float) -> None:
        surface.draw_text(text, x, y, label_spec)

    def draw_value(text: str, x: float, y: float) -> None:
        surface.draw_text(text, x, y, value_spec)

    tracker = HeadingTracker(None if page.is_first else page.carry_over_group)
    y: float = config.content_start_y(page.index)
    drawn: List[str] = []
    headings: List[CanonicalGroup] = []

    for f in page.fields:
        if not f.has_content:
            continue

        group = f.canonical_group
        if tracker.needs_heading(group):
            y += config.heading_space_above
            text = heading_for(group)
            if text:
                surface.draw_text(text, config.padding, y, heading_spec)
            y += config.heading_font_size + config.heading_gap_below
            headings.append(group)
        tracker.observe(group)

        label_bottom = wrap_and_emit(
            label_measure, draw_label, f.label,
            config.padding, y, config.label_col_width, config.line_height,
        )
        value_bottom = wrap_and_emit(
            value_measure, draw_value, VALUE_PREFIX + f.value,
            config.value_col_offset, y, config.value_col_width, config.line_height,
        )
        y = max(label_bottom, value_bottom) + config.field_gap
        drawn.append(f.id)

    return y, drawn, headings
