"""
Module: builder.layout.headings

Purpose:
    Section heading bookkeeping shared by the paginator and the renderer.

Rules:
    1. A heading opens when a field's canonical group differs from the
       last named group seen on the page.
    2. OTHER never opens a heading and never becomes the last group,
       so an OTHER field inside a run does not split it.
    3. A page starts with its carry-over group as the last group, which
       suppresses a repeated heading when a section continues.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

from biodata_toolkit.core.models import CanonicalGroup, Field


class HeadingTracker:
    """
    Tracks the last named group drawn (or referenced) on a page.

    Example:
        >>> tracker = HeadingTracker(CanonicalGroup.PERSONAL)
        >>> tracker.needs_heading(CanonicalGroup.PERSONAL)
        False
        >>> tracker.needs_heading(CanonicalGroup.FAMILY)
        True
    """

    def __init__(self, start: Optional[CanonicalGroup] = None) -> None:
        self.last_group = start

    def needs_heading(self, group: CanonicalGroup) -> bool:
        return group.has_heading and group != self.last_group

    def observe(self, group: CanonicalGroup) -> None:
        """Record a placed field's group. OTHER leaves the tracker untouched."""
        if group.has_heading:
            self.last_group = group


def iter_headings(
    fields: Iterable[Field],
    start: Optional[CanonicalGroup] = None,
) -> Iterator[Tuple[Field, Optional[CanonicalGroup]]]:
    """
    Pair each content field with the heading drawn before it (or None).

    Blank-valued fields are skipped, as the renderer skips them.
    """
    tracker = HeadingTracker(start)
    for f in fields:
        if not f.has_content:
            continue
        group = f.canonical_group
        heading = group if tracker.needs_heading(group) else None
        tracker.observe(group)
        yield f, heading
