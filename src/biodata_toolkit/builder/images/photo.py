"""
Module: builder.images.photo

Purpose:
    Prepare header images for pasting: resize into a fixed box and clip
    the portrait to a rounded rectangle.

Key Functions:
    - clamp_radius(): User radius -> valid corner radius
    - fit_to_box(): Stretch an image to a box
    - rounded_mask(): Alpha mask for a rounded rectangle

Dependencies:
    - PIL: Image, ImageDraw
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)


def clamp_radius(radius: Union[str, int, float, None], width: float, height: float) -> float:
    """
    Clamp a user-supplied corner radius to [0, min(width, height) / 2].

    Non-numeric or non-finite input (including "" and "nan") counts as 0.

    Example:
        >>> clamp_radius("200", 110, 140)
        55.0
        >>> clamp_radius("-4", 110, 140)
        0.0
    """
    try:
        value = float(radius) if radius not in (None, "") else 0.0
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric corner radius {radius!r}")
        value = 0.0
    if not math.isfinite(value):
        logger.debug(f"Ignoring non-finite corner radius {radius!r}")
        value = 0.0
    return float(min(max(value, 0.0), min(width, height) / 2))


def fit_to_box(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Resize `image` to exactly `size` (stretching, like a canvas drawImage)."""
    if image.size == size:
        return image.copy()
    return image.resize(size, Image.Resampling.LANCZOS)


def rounded_mask(size: Tuple[int, int], radius: float) -> Optional[Image.Image]:
    """L-mode mask for a rounded rectangle, or None when radius is 0."""
    if radius <= 0:
        return None
    mask = Image.new("L", size, 0)
    draw = ImageDraw.Draw(mask)
    draw.rounded_rectangle((0, 0, size[0] - 1, size[1] - 1), radius=radius, fill=255)
    return mask
