"""
Module: builder.layout.paginator

Purpose:
    Cut the ordered field list into pages by simulating the height each
    field will occupy once drawn.

Key Functions:
    - paginate(): Main pagination function
    - field_consumption(): Vertical space one field takes on a page

Algorithm:
    1. Keep only content fields (non-blank value). None left: zero pages.
    2. For each page, start the cursor at the page's content start and
       seed the heading tracker with the previous page's last group.
    3. Walk remaining fields in order. Consumption = heading block (when
       the field opens a new named section) + text block + field gap.
    4. If the field would pass max_content_y and the page already holds
       a field, break. Otherwise accept it (the first field of a page
       is always accepted, even if it alone overflows).

    Pure and deterministic: no I/O, no dependency on loaded images.

Dependencies:
    - builder.text.measure: Shared wrapping
    - builder.layout.headings: Heading rules

Used By:
    - session.BiodataSession: Live page list
    - builder.output.assembler (via the session)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from biodata_toolkit.core.models import CustomizationSettings, Field

from ..config import LayoutConfig
from ..text.measure import TextMeasures, field_block_height
from .headings import HeadingTracker
from .models import LayoutResult, Page

logger = logging.getLogger(__name__)


def paginate(
    fields: Sequence[Field],
    config: LayoutConfig,
    measures: Optional[TextMeasures] = None,
) -> LayoutResult:
    """
    Arrange fields onto pages.

    Args:
        fields: Ordered field list (blank values are dropped)
        config: Layout configuration
        measures: Column width functions; defaults to the body font at
            `config.body_font_size`, measured at `config.dpi_scale` like
            the raster the renderer draws on

    Returns:
        LayoutResult with pages in document order

    Example:
        >>> result = paginate(fields, LayoutConfig())
        >>> result.field_count == sum(1 for f in fields if f.has_content)
        True
    """
    content_fields = [f for f in fields if f.has_content]
    if not content_fields:
        return LayoutResult(pages=(), warnings=[])

    if measures is None:
        measures = TextMeasures.from_customization(
            CustomizationSettings(body_font_size=config.body_font_size),
            config.dpi_scale,
        )

    pages: List[Page] = []
    warnings: List[str] = []
    field_page_map: Dict[str, int] = {}

    start = 0
    while start < len(content_fields):
        page_index = len(pages)
        carry_over = pages[-1].last_group if pages else None
        tracker = HeadingTracker(carry_over)
        cursor_y = config.content_start_y(page_index)

        accepted: List[Field] = []
        for candidate in content_fields[start:]:
            consumption = field_consumption(candidate, tracker, config, measures)

            if cursor_y + consumption > config.max_content_y:
                if accepted:
                    break
                message = (
                    f"Field {candidate.id!r} overflows page {page_index}: "
                    f"{consumption:g} units needed, "
                    f"{config.max_content_y - cursor_y:g} available"
                )
                logger.warning(message)
                warnings.append(message)

            accepted.append(candidate)
            cursor_y += consumption
            tracker.observe(candidate.canonical_group)

        pages.append(Page(
            index=page_index,
            fields=tuple(accepted),
            carry_over_group=carry_over,
        ))
        for f in accepted:
            field_page_map[f.id] = page_index
        start += len(accepted)

    logger.info(f"Paginated {len(content_fields)} fields onto {len(pages)} pages")

    return LayoutResult(
        pages=tuple(pages),
        warnings=warnings,
        field_page_map=field_page_map,
    )


def field_consumption(
    field: Field,
    tracker: HeadingTracker,
    config: LayoutConfig,
    measures: TextMeasures,
) -> float:
    """
    Vertical space `field` needs at the tracker's current position.

    Does not update the tracker.
    """
    heading = config.heading_block_height if tracker.needs_heading(field.canonical_group) else 0
    text = field_block_height(
        field,
        measures,
        label_width=config.label_col_width,
        value_width=config.value_col_width,
        line_height=config.line_height,
    )
    return heading + text + config.field_gap
