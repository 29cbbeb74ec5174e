"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing pages and the layout result.

Key Classes:
    - Page: Ordered field subset plus carry-over group
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)
    - core.models: Field, CanonicalGroup

Used By:
    - builder.layout.paginator: Creates Pages
    - builder.output.renderer: Draws one Page
    - builder.output.assembler: Exports all Pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from biodata_toolkit.core.models import CanonicalGroup, Field


@dataclass(frozen=True)
class Page:
    """
    Layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        fields: Fields drawn on this page, in document order
        carry_over_group: Canonical group of the previous page's last
            field (None on the first page). A heading for this group is
            not repeated at the top of the page.

    Example:
        >>> page = Page(index=1, fields=(f1, f2), carry_over_group=CanonicalGroup.FAMILY)
        >>> page.field_count
        2
    """

    index: int
    fields: Tuple[Field, ...]
    carry_over_group: Optional[CanonicalGroup] = None

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_empty(self) -> bool:
        return len(self.fields) == 0

    @property
    def last_group(self) -> Optional[CanonicalGroup]:
        """Canonical group of the last field (carry-over for the next page)."""
        if not self.fields:
            return None
        return self.fields[-1].canonical_group


EMPTY_PAGE = Page(index=0, fields=(), carry_over_group=None)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of Pages
        warnings: Warning messages (oversized fields)
        field_page_map: Mapping of field id to page index

    Example:
        >>> result = LayoutResult(pages=(page1, page2))
        >>> result.page_count
        2
    """

    pages: Tuple[Page, ...]
    warnings: list[str] = field(default_factory=list)
    field_page_map: Dict[str, int] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def field_count(self) -> int:
        """Total fields placed across all pages."""
        return sum(p.field_count for p in self.pages)

    def page(self, index: int) -> Page:
        """Page at `index`, or an empty first page when the layout is empty."""
        if not self.pages:
            return EMPTY_PAGE
        index = max(0, min(index, len(self.pages) - 1))
        return self.pages[index]
