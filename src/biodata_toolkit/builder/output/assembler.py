"""
Module: builder.output.assembler

Purpose:
    Export every page of a biodata document through a document sink.
    One reusable surface is cleared, backgrounded and rendered per page,
    strictly in page order.

Key Functions:
    - assemble_document(): Main export function
    - output_filename(): File name from the identity field

Key Classes:
    - RenderRequest: Shared render parameters
    - GenerationResult: Outcome reported to the caller
    - AssemblyError: Failure while rendering or writing a page

Failure policy:
    - No sink: abort before drawing anything, report failure.
    - Background image unavailable: flat tint, export continues.
    - Anything else raised during export: caught here, logged, reported
      as a failed result. Never propagates to the host.

Dependencies:
    - builder.output.renderer: Page drawing
    - builder.output.sink: Export capability

Used By:
    - builder.controller.GenerationController
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from biodata_toolkit.core.models import CustomizationSettings, Field, Template
from biodata_toolkit.data.initial_fields import IDENTITY_FIELD_ID

from ..config import LayoutConfig
from ..images.resource import ImageResource
from ..layout.models import Page
from .renderer import HeaderContent, draw_background, render_page
from .sink import MissingExportCapabilityError, SinkFactory
from .surface import RasterSurface

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "WeddingBiodata"
FILENAME_FALLBACK = "New"
DEFAULT_BACKGROUND_TIMEOUT = 10.0

MISSING_CAPABILITY_MESSAGE = "PDF libraries not loaded"
EMPTY_DOCUMENT_MESSAGE = "No content to export"

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class AssemblyError(Exception):
    """Error while rendering or writing a document page."""
    pass


@dataclass(frozen=True)
class RenderRequest:
    """
    Render parameters shared by every page of one export.

    Attributes:
        template: Selected template
        customization: Typography
        header: Page-1 header content
        background: Template background cell
        config: Layout configuration (must match the one used to paginate)
    """

    template: Template
    customization: CustomizationSettings
    header: HeaderContent = field(default_factory=HeaderContent)
    background: ImageResource = field(default_factory=ImageResource.empty)
    config: LayoutConfig = field(default_factory=LayoutConfig)


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a document generation.

    Attributes:
        success: Whether a document was written
        error: Failure description (None on success)
        path: Written document (None on failure)
        page_count: Pages written
    """

    success: bool
    error: Optional[str] = None
    path: Optional[Path] = None
    page_count: int = 0

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error)


def output_filename(
    fields: Sequence[Field],
    *,
    identity_field_id: str = IDENTITY_FIELD_ID,
    suffix: str = ".pdf",
) -> str:
    """
    Document file name derived from the identity field.

    Whitespace in the value becomes underscores. An absent or blank
    identity field falls back to "New".

    Example:
        >>> output_filename([Field("name-0", "Full Name", "Asha Rao", RawGroup.PERSONAL)])
        'WeddingBiodata_Asha_Rao.pdf'
        >>> output_filename([])
        'WeddingBiodata_New.pdf'
    """
    identity = next((f for f in fields if f.id == identity_field_id), None)
    if identity is None or not identity.has_content:
        name = FILENAME_FALLBACK
    else:
        name = _UNSAFE_FILENAME_CHARS.sub("", re.sub(r"\s", "_", identity.value)) or FILENAME_FALLBACK
    return f"{FILENAME_PREFIX}_{name}{suffix}"


def assemble_document(
    pages: Sequence[Page],
    request: RenderRequest,
    sink_factory: Optional[SinkFactory],
    *,
    fields: Sequence[Field],
    output_dir: Path,
    background_timeout: float = DEFAULT_BACKGROUND_TIMEOUT,
) -> GenerationResult:
    """
    Render all pages and write them through a document sink.

    Args:
        pages: Page plans in document order
        request: Shared render parameters
        sink_factory: Export capability; None when unavailable
        fields: Current field list (for the file name)
        output_dir: Directory for the written document
        background_timeout: Max seconds to wait for the background image

    Returns:
        GenerationResult (never raises)
    """
    if sink_factory is None:
        logger.error(f"Document generation failed: {MISSING_CAPABILITY_MESSAGE}")
        return GenerationResult.failure(MISSING_CAPABILITY_MESSAGE)

    if not pages:
        logger.warning("Nothing to export: no field has a value")
        return GenerationResult.failure(EMPTY_DOCUMENT_MESSAGE)

    config = request.config
    start_time = time.perf_counter()

    sink = None
    try:
        try:
            sink = sink_factory(output_dir, config.aspect_ratio)
        except MissingExportCapabilityError as e:
            logger.error(f"Document generation failed: {e}")
            return GenerationResult.failure(MISSING_CAPABILITY_MESSAGE)

        # Resolved once for the whole document
        background = request.background.wait(background_timeout)
        if background is None:
            logger.warning("Background image unavailable, using flat tint")

        surface = RasterSurface(config.canvas_width, config.canvas_height, config.dpi_scale)

        for i, page in enumerate(pages):
            try:
                surface.clear()
                draw_background(surface, request.template, background)
                render_page(
                    surface,
                    request.template,
                    page,
                    request.customization,
                    header=request.header,
                    config=config,
                )
                if i > 0:
                    sink.add_page()
                sink.add_image(sink.rasterize(surface))
            except Exception as e:
                raise AssemblyError(f"Page {i + 1} failed: {e}") from e

        path = sink.save(output_filename(fields))
    except Exception as e:
        logger.exception(f"Error generating document: {e}")
        return GenerationResult.failure(str(e))
    finally:
        if sink is not None:
            sink.close()

    elapsed = time.perf_counter() - start_time
    logger.info(f"Generated {len(pages)} page(s) in {elapsed:.2f}s: {path}")
    return GenerationResult(success=True, path=path, page_count=len(pages))
