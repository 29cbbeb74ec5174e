"""
Module: builder.output.surface

Purpose:
    Fixed-size raster the renderer draws on. Callers work in logical
    canvas units; the surface scales to its pixel resolution.

Key Classes:
    - RasterSurface: Pillow-backed drawing surface

Dependencies:
    - PIL: Image, ImageDraw, ImageChops
    - builder.text: Fonts and width functions
"""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image, ImageChops, ImageDraw

from biodata_toolkit.core.models import FontSpec

from ..images.photo import fit_to_box, rounded_mask
from ..text.fonts import font_for
from ..text.measure import Measure, make_measure


class RasterSurface:
    """
    Drawing surface of `width` x `height` logical units.

    Attributes:
        width: Logical width
        height: Logical height
        scale: Raster pixels per logical unit
        image: Backing RGB image

    Example:
        >>> surface = RasterSurface(500, 707, scale=2)
        >>> surface.image.size
        (1000, 1414)
    """

    def __init__(self, width: int, height: int, scale: int = 1) -> None:
        if width <= 0 or height <= 0 or scale <= 0:
            raise ValueError(f"Invalid surface size {width}x{height}@{scale}")
        self.width = width
        self.height = height
        self.scale = scale
        self.image = Image.new("RGB", (width * scale, height * scale), "white")
        self._draw = ImageDraw.Draw(self.image)

    def _px(self, value: float) -> int:
        return int(round(value * self.scale))

    # ─────────────────────────────────────────────────────────────────────
    # Fills
    # ─────────────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Reset every pixel so nothing from a previous page survives."""
        self.fill("white")

    def fill(self, color) -> None:
        self._draw.rectangle((0, 0, self.image.width, self.image.height), fill=color)

    # ─────────────────────────────────────────────────────────────────────
    # Images
    # ─────────────────────────────────────────────────────────────────────

    def paste(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        radius: float = 0,
    ) -> None:
        """Stretch `image` into the box, optionally clipped to rounded corners."""
        box = (self._px(width), self._px(height))
        fitted = fit_to_box(image.convert("RGBA"), box)

        mask = fitted.getchannel("A")
        corners = rounded_mask(box, radius * self.scale)
        if corners is not None:
            mask = ImageChops.multiply(mask, corners)

        self.image.paste(fitted.convert("RGB"), (self._px(x), self._px(y)), mask)

    def paste_full(self, image: Image.Image) -> None:
        self.paste(image, 0, 0, self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────
    # Text
    # ─────────────────────────────────────────────────────────────────────

    def draw_text(self, text: str, x: float, y: float, spec: FontSpec, *, color: Optional[str] = None) -> None:
        """Draw `text` with its baseline at logical (x, y)."""
        font = font_for(spec, self.scale)
        self._draw.text(
            (x * self.scale, y * self.scale),
            text,
            font=font,
            fill=color or spec.color,
            anchor="ls",
        )

    def measure(self, spec: FontSpec) -> Measure:
        """Width function (logical units) for text in `spec`."""
        return make_measure(font_for(spec, self.scale), self.scale)

    # ─────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def snapshot(self) -> Image.Image:
        return self.image.copy()
