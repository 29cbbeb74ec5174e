"""
Module: builder

Purpose:
    Layout, rendering and export pipeline for biodata documents.
    Fields -> paginate -> Pages -> render_page -> assemble_document.

Key Functions:
    - paginate(): Split fields into pages
    - render_page(): Draw one page
    - assemble_document(): Export all pages through a document sink

Key Classes:
    - LayoutConfig: Layout constants
    - GenerationController: Generation status state machine

Dependencies:
    - PIL: Raster drawing and fonts
    - reportlab / pymupdf: PDF writing
"""

from .config import LayoutConfig
from .layout import Page, LayoutResult, paginate
from .output import (
    GenerationResult,
    HeaderContent,
    RasterSurface,
    RenderRequest,
    assemble_document,
    render_page,
)
from .controller import GenerationController, GenerationStatus

__all__ = [
    "LayoutConfig",
    "Page",
    "LayoutResult",
    "paginate",
    "GenerationResult",
    "HeaderContent",
    "RasterSurface",
    "RenderRequest",
    "assemble_document",
    "render_page",
    "GenerationController",
    "GenerationStatus",
]
