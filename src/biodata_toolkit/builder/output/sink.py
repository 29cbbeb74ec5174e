"""
Module: builder.output.sink

Purpose:
    Document sink: the export capability the assembler writes pages to.
    Kept narrow so the assembler is provider-agnostic and can be tested
    with a stub.

Key Classes:
    - DocumentSink: Abstract export capability
    - ReportLabDocumentSink: PDF via ReportLab (default)
    - PyMuPDFDocumentSink: PDF via PyMuPDF

Key Functions:
    - get_sink_factory(): Provider name -> sink class (None if unknown)
    - pdf_page_size(): Portrait page size in points for a canvas ratio

Page model:
    The first page is implicit. Each later page is opened explicitly
    with add_page() before its image is added.

Dependencies:
    - reportlab: PDF generation
    - pymupdf: Alternative PDF generation
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import pymupdf
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .surface import RasterSurface

logger = logging.getLogger(__name__)

# Portrait, A4 width
A4_WIDTH_PT = A4[0]


class MissingExportCapabilityError(Exception):
    """No export capability is available."""
    pass


def pdf_page_size(aspect_ratio: float) -> Tuple[float, float]:
    """
    Page size in points: A4 width, height proportional to the canvas.

    Example:
        >>> w, h = pdf_page_size(707 / 500)
        >>> round(w, 1), round(h, 1)
        (595.3, 841.7)
    """
    return A4_WIDTH_PT, A4_WIDTH_PT * aspect_ratio


class DocumentSink(ABC):
    """
    Abstract export capability.

    Operations:
        rasterize(): Serialize the current surface to an embeddable image
        add_page() / add_image(): Append a raster as a document page
        save(): Finalize and write the document
        close(): Release the document; safe after save() and on failure
    """

    def __init__(self, output_dir: Path, aspect_ratio: float) -> None:
        self.output_dir = Path(output_dir)
        self.page_size = pdf_page_size(aspect_ratio)
        self.page_count = 0

    def rasterize(self, surface: RasterSurface) -> bytes:
        """PNG bytes of the surface."""
        return surface.to_png()

    @abstractmethod
    def add_page(self) -> None:
        """Open a new page after the first."""

    @abstractmethod
    def add_image(self, data: bytes) -> None:
        """Place a full-page image on the current page."""

    @abstractmethod
    def save(self, filename: str) -> Path:
        """
        Finalize the document.

        Returns:
            Path of the written file
        """

    def close(self) -> None:
        """Release provider resources. Idempotent."""


class ReportLabDocumentSink(DocumentSink):
    """PDF sink backed by a ReportLab canvas."""

    def __init__(self, output_dir: Path, aspect_ratio: float) -> None:
        super().__init__(output_dir, aspect_ratio)
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=self.page_size)
        self.page_count = 1

    def add_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1

    def add_image(self, data: bytes) -> None:
        width, height = self.page_size
        self._canvas.drawImage(ImageReader(io.BytesIO(data)), 0, 0, width=width, height=height)

    def save(self, filename: str) -> Path:
        self._canvas.showPage()
        self._canvas.save()
        path = self.output_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self._buffer.getvalue())
        logger.info(f"Wrote {self.page_count} page(s) to {path}")
        return path

    def close(self) -> None:
        self._buffer.close()


class PyMuPDFDocumentSink(DocumentSink):
    """PDF sink backed by a PyMuPDF document."""

    def __init__(self, output_dir: Path, aspect_ratio: float) -> None:
        super().__init__(output_dir, aspect_ratio)
        self._doc = pymupdf.open()
        self._new_page()

    def _new_page(self) -> None:
        width, height = self.page_size
        self._doc.new_page(width=width, height=height)
        self.page_count = self._doc.page_count

    def add_page(self) -> None:
        self._new_page()

    def add_image(self, data: bytes) -> None:
        page = self._doc[-1]
        page.insert_image(page.rect, stream=data)

    def save(self, filename: str) -> Path:
        path = self.output_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        self._doc.save(str(path))
        logger.info(f"Wrote {self.page_count} page(s) to {path}")
        return path

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()


SinkFactory = Callable[[Path, float], DocumentSink]

SINK_PROVIDERS: Dict[str, SinkFactory] = {
    "reportlab": ReportLabDocumentSink,
    "pymupdf": PyMuPDFDocumentSink,
}

DEFAULT_SINK = "reportlab"


def get_sink_factory(name: Optional[str] = DEFAULT_SINK) -> Optional[SinkFactory]:
    """Sink class for a provider name, or None when no such provider exists."""
    if name is None:
        return None
    factory = SINK_PROVIDERS.get(name.strip().lower())
    if factory is None:
        logger.warning(f"Unknown export provider {name!r}")
    return factory
