"""
Module: settings

Purpose:
    Styling records consumed by the page renderer: the document template
    (background + primary colour) and the body/heading typography chosen
    by the user.

Key Classes:
    - Template: Background image reference and primary colour
    - CustomizationSettings: Font family/colour/size/weight per role
    - FontSpec: Resolved font request for one text role

Dependencies:
    - dataclasses (std)
    - PIL.ImageColor: Colour validation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from PIL import ImageColor

BOLD_WEIGHT_THRESHOLD = 600


@dataclass(frozen=True)
class Template:
    """
    Document template (immutable).

    Attributes:
        id: Template identifier
        name: Display name
        background_ref: Path, URL or None for a flat tint
        primary_color: Hex colour used for labels and the fallback tint
    """

    id: str
    name: str
    background_ref: Optional[str]
    primary_color: str

    def __post_init__(self) -> None:
        # Raises ValueError for unknown colour strings
        ImageColor.getrgb(self.primary_color)


@dataclass(frozen=True)
class FontSpec:
    """Font request for one text role."""

    family: str
    size: int
    weight: int = 400
    color: str = "#000000"

    @property
    def is_bold(self) -> bool:
        return self.weight >= BOLD_WEIGHT_THRESHOLD


@dataclass(frozen=True)
class CustomizationSettings:
    """
    Typography for body text and headings (immutable).

    Defaults match the editor's initial state.
    """

    body_font_family: str = "Arial"
    body_text_color: str = "#000000"
    body_font_size: int = 14
    body_font_weight: int = 400

    heading_font_family: str = "Arial"
    heading_text_color: str = "#000000"
    heading_font_size: int = 18
    heading_font_weight: int = 700

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.body_font_size <= 0:
            raise ValueError(f"body_font_size must be positive: {self.body_font_size}")
        if self.heading_font_size <= 0:
            raise ValueError(f"heading_font_size must be positive: {self.heading_font_size}")
        for color in (self.body_text_color, self.heading_text_color):
            if color:
                ImageColor.getrgb(color)

    def body_font(self, *, bold: bool = False, color: Optional[str] = None) -> FontSpec:
        return FontSpec(
            family=self.body_font_family,
            size=self.body_font_size,
            weight=700 if bold else self.body_font_weight,
            color=color or self.body_text_color or "#1f2937",
        )

    def heading_font(self, *, color: Optional[str] = None) -> FontSpec:
        return FontSpec(
            family=self.heading_font_family,
            size=self.heading_font_size,
            weight=self.heading_font_weight,
            color=color or self.heading_text_color or "#1f2937",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bodyFontFamily": self.body_font_family,
            "bodyTextColor": self.body_text_color,
            "bodyFontSize": self.body_font_size,
            "bodyFontWeight": self.body_font_weight,
            "headingFontFamily": self.heading_font_family,
            "headingTextColor": self.heading_text_color,
            "headingFontSize": self.heading_font_size,
            "headingFontWeight": self.heading_font_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomizationSettings":
        defaults = cls()
        return cls(
            body_font_family=data.get("bodyFontFamily", defaults.body_font_family),
            body_text_color=data.get("bodyTextColor", defaults.body_text_color),
            body_font_size=int(data.get("bodyFontSize", defaults.body_font_size)),
            body_font_weight=int(data.get("bodyFontWeight", defaults.body_font_weight)),
            heading_font_family=data.get("headingFontFamily", defaults.heading_font_family),
            heading_text_color=data.get("headingTextColor", defaults.heading_text_color),
            heading_font_size=int(data.get("headingFontSize", defaults.heading_font_size)),
            heading_font_weight=int(data.get("headingFontWeight", defaults.heading_font_weight)),
        )
