"""
Module: data.templates

Purpose:
    Built-in document templates.
"""

from __future__ import annotations

from typing import Optional, Tuple

from biodata_toolkit.core.models import Template

TEMPLATES: Tuple[Template, ...] = (
    Template(
        id="modern",
        name="Modern Geometric",
        background_ref="https://i.ibb.co/q3J2rQck/Whats-App-Image-2025-10-06-at-9-49-57-AM-2.jpg",
        primary_color="#333333",
    ),
    Template(
        id="classic",
        name="Classic Minimal",
        background_ref="https://i.ibb.co/jPJk6GHC/Whats-App-Image-2025-10-06-at-9-49-57-AM-1.jpg",
        primary_color="#374151",
    ),
    Template(
        id="nature",
        name="Nature Green",
        background_ref="https://i.ibb.co/RF3rzCW/Whats-App-Image-2025-10-06-at-9-49-56-AM-1.jpg",
        primary_color="#059669",
    ),
    Template(
        id="royal",
        name="Royal Maroon",
        background_ref="https://i.ibb.co/20QR6kWp/Whats-App-Image-2025-10-06-at-9-49-56-AM.jpg",
        primary_color="#881337",
    ),
    Template(
        id="yellow",
        name="Yellow Maroon",
        background_ref="https://i.ibb.co/mL68Xsh/Whats-App-Image-2025-10-06-at-9-49-57-AM.jpg",
        primary_color="#222222",
    ),
)

DEFAULT_TEMPLATE = TEMPLATES[0]


def get_template(template_id: str) -> Optional[Template]:
    """Look up a built-in template by id."""
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None
