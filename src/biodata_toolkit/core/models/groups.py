"""
Module: groups

Purpose:
    Map a field's raw group tag onto one of four canonical section
    buckets, and a canonical bucket onto its section heading.

Key Functions:
    - canonicalize(): RawGroup / tag -> CanonicalGroup (total)
    - heading_for(): CanonicalGroup -> heading text or None

Dependencies:
    - enum (std)

Used By:
    - builder.layout.headings: Heading run tracking
    - session.BiodataSession: group-scoped field moves
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class RawGroup(str, Enum):
    """Group tag assigned to a field by the editor."""
    PERSONAL = "personal"
    FAMILY = "family"
    CONTACT = "contact"
    CUSTOM_PERSONAL = "custom-personal"
    CUSTOM_FAMILY = "custom-family"
    CUSTOM = "custom"              # User-added field on the contact step

    def __str__(self) -> str:
        return self.value


class CanonicalGroup(str, Enum):
    """Section bucket used for heading emission."""
    PERSONAL = "personal"
    FAMILY = "family"
    CONTACT = "contact"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @property
    def has_heading(self) -> bool:
        """OTHER never opens a section."""
        return self is not CanonicalGroup.OTHER


_CANONICAL_BY_RAW: Dict[RawGroup, CanonicalGroup] = {
    RawGroup.PERSONAL: CanonicalGroup.PERSONAL,
    RawGroup.CUSTOM_PERSONAL: CanonicalGroup.PERSONAL,
    RawGroup.FAMILY: CanonicalGroup.FAMILY,
    RawGroup.CUSTOM_FAMILY: CanonicalGroup.FAMILY,
    RawGroup.CONTACT: CanonicalGroup.CONTACT,
    RawGroup.CUSTOM: CanonicalGroup.CONTACT,
}

GROUP_TITLES: Dict[CanonicalGroup, str] = {
    CanonicalGroup.PERSONAL: "Personal Details",
    CanonicalGroup.FAMILY: "Family Details",
    CanonicalGroup.CONTACT: "Contact & Other Details",
}


def canonicalize(group: Union[RawGroup, str]) -> CanonicalGroup:
    """
    Resolve the canonical section for a raw group tag.

    Total over its input: tags outside RawGroup map to OTHER.

    Args:
        group: RawGroup member or any tag string

    Returns:
        CanonicalGroup for the tag

    Example:
        >>> canonicalize("custom-family")
        <CanonicalGroup.FAMILY: 'family'>
        >>> canonicalize("sidebar")
        <CanonicalGroup.OTHER: 'other'>
    """
    if not isinstance(group, RawGroup):
        try:
            group = RawGroup(group)
        except ValueError:
            logger.debug(f"Unknown group tag {group!r}, treating as other")
            return CanonicalGroup.OTHER
    return _CANONICAL_BY_RAW[group]


def heading_for(group: Optional[CanonicalGroup]) -> Optional[str]:
    """Heading text for a canonical group, None for OTHER or unmapped values."""
    if group is None:
        return None
    return GROUP_TITLES.get(group)
