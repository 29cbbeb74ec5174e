"""
Module: builder.layout

Purpose:
    Page layout for biodata documents.
    Converts the ordered field list into page plans.

Key Functions:
    - paginate(): Arrange fields onto pages

Key Classes:
    - Page: Single page plan
    - LayoutResult: All pages plus warnings
    - HeadingTracker: Section heading rules

Used By:
    - session.BiodataSession
    - builder.output.renderer
"""

from .models import Page, LayoutResult, EMPTY_PAGE
from .headings import HeadingTracker, iter_headings
from .paginator import paginate, field_consumption

__all__ = [
    "Page",
    "LayoutResult",
    "EMPTY_PAGE",
    "HeadingTracker",
    "iter_headings",
    "paginate",
    "field_consumption",
]
