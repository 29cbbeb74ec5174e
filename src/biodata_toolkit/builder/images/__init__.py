"""
Module: builder.images

Purpose:
    Image access for the renderer: asynchronously loaded resource cells
    and helpers for fitting and clipping header images.

Key Classes:
    - ImageResource: Pending / Ready / Failed cell
    - ImageLoader: Background decoder

Key Functions:
    - decode_image(): Synchronous fetch + decode
    - clamp_radius(), fit_to_box(), rounded_mask()
"""

from .resource import (
    ImageLoader,
    ImageResource,
    ResourceLoadError,
    ResourceState,
    decode_image,
)
from .photo import clamp_radius, fit_to_box, rounded_mask

__all__ = [
    "ImageLoader",
    "ImageResource",
    "ResourceLoadError",
    "ResourceState",
    "decode_image",
    "clamp_radius",
    "fit_to_box",
    "rounded_mask",
]
