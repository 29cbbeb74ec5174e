"""
Module: builder.text.fonts

Purpose:
    Resolve user-facing font family names to Pillow fonts.

Key Functions:
    - load_font(): Family/size/bold -> ImageFont
    - font_for(): FontSpec at a raster scale -> ImageFont

Dependencies:
    - PIL.ImageFont

Used By:
    - builder.text.measure: Width functions
    - builder.output.surface: Text drawing
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List, Tuple, Union

from PIL import ImageFont

from biodata_toolkit.core.models import FontSpec

logger = logging.getLogger(__name__)

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# family (lower case) -> (regular candidates, bold candidates)
_FAMILY_FILES: Dict[str, Tuple[List[str], List[str]]] = {
    "arial": (
        ["arial.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"],
        ["arialbd.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf"],
    ),
    "helvetica": (
        ["Helvetica.ttf", "LiberationSans-Regular.ttf"],
        ["Helvetica-Bold.ttf", "LiberationSans-Bold.ttf"],
    ),
    "times new roman": (
        ["times.ttf", "Times New Roman.ttf", "LiberationSerif-Regular.ttf", "DejaVuSerif.ttf"],
        ["timesbd.ttf", "Times New Roman Bold.ttf", "LiberationSerif-Bold.ttf", "DejaVuSerif-Bold.ttf"],
    ),
    "georgia": (
        ["georgia.ttf", "Georgia.ttf", "DejaVuSerif.ttf"],
        ["georgiab.ttf", "Georgia Bold.ttf", "DejaVuSerif-Bold.ttf"],
    ),
    "verdana": (
        ["verdana.ttf", "Verdana.ttf", "DejaVuSans.ttf"],
        ["verdanab.ttf", "Verdana Bold.ttf", "DejaVuSans-Bold.ttf"],
    ),
    "courier new": (
        ["cour.ttf", "Courier New.ttf", "LiberationMono-Regular.ttf", "DejaVuSansMono.ttf"],
        ["courbd.ttf", "Courier New Bold.ttf", "LiberationMono-Bold.ttf", "DejaVuSansMono-Bold.ttf"],
    ),
    "inter": (
        ["Inter-Regular.ttf", "Inter.ttf"],
        ["Inter-Bold.ttf"],
    ),
}

_FALLBACK_FILES: Tuple[List[str], List[str]] = (
    ["DejaVuSans.ttf", "arial.ttf", "Arial.ttf"],
    ["DejaVuSans-Bold.ttf", "arialbd.ttf", "Arial Bold.ttf"],
)


@lru_cache(maxsize=64)
def load_font(family: str, size: int, *, bold: bool = False) -> PillowFont:
    """
    Load a TrueType font for a family name.

    Tries the family's own files first, then generic sans fallbacks,
    then Pillow's bundled default font.

    Args:
        family: CSS-style family name ("Arial", "Georgia", ...)
        size: Pixel size
        bold: Prefer bold variants

    Returns:
        Font object
    """
    regular, bold_files = _FAMILY_FILES.get(family.strip().lower(), ([], []))
    fallback_regular, fallback_bold = _FALLBACK_FILES
    if bold:
        candidates = bold_files + regular + fallback_bold + fallback_regular
    else:
        candidates = regular + fallback_regular

    for font_name in candidates:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for {family!r}, using default")
    return ImageFont.load_default(size)


def font_for(spec: FontSpec, scale: int = 1) -> PillowFont:
    """Font for a FontSpec rendered at `scale` raster pixels per unit."""
    return load_font(spec.family, spec.size * scale, bold=spec.is_bold)
