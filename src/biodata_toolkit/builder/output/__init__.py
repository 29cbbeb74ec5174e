"""
Module: builder.output

Purpose:
    Page rendering and document export.
    Draws Pages onto a raster surface and writes them through a
    document sink (ReportLab by default).

Key Functions:
    - render_page(): Draw one page
    - draw_background(): Template image or tint
    - assemble_document(): Export all pages

Dependencies:
    - PIL: Raster drawing
    - reportlab / pymupdf: PDF writing
"""

from .surface import RasterSurface
from .renderer import HeaderContent, RenderReport, draw_background, render_page
from .sink import (
    DocumentSink,
    MissingExportCapabilityError,
    PyMuPDFDocumentSink,
    ReportLabDocumentSink,
    get_sink_factory,
)
from .assembler import (
    AssemblyError,
    GenerationResult,
    RenderRequest,
    assemble_document,
    output_filename,
)

__all__ = [
    "RasterSurface",
    "HeaderContent",
    "RenderReport",
    "draw_background",
    "render_page",
    "DocumentSink",
    "MissingExportCapabilityError",
    "PyMuPDFDocumentSink",
    "ReportLabDocumentSink",
    "get_sink_factory",
    "AssemblyError",
    "GenerationResult",
    "RenderRequest",
    "assemble_document",
    "output_filename",
]
