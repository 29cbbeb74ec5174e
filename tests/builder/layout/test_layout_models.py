"""
Unit tests for layout models.
"""

from biodata_toolkit.builder.layout.models import EMPTY_PAGE, LayoutResult, Page
from biodata_toolkit.core.models import CanonicalGroup, RawGroup


class TestPage:

    def test_last_group(self, make_field):
        page = Page(index=0, fields=(make_field(group=RawGroup.PERSONAL), make_field(group=RawGroup.CUSTOM_FAMILY)))
        assert page.last_group is CanonicalGroup.FAMILY

    def test_empty_page(self):
        assert EMPTY_PAGE.is_empty
        assert EMPTY_PAGE.is_first
        assert EMPTY_PAGE.last_group is None


class TestLayoutResult:

    def test_page_lookup_is_clamped(self, make_field):
        pages = (Page(0, (make_field(),)), Page(1, (make_field(),), CanonicalGroup.PERSONAL))
        result = LayoutResult(pages=pages)

        assert result.page(-3) is pages[0]
        assert result.page(9) is pages[1]
        assert result.field_count == 2

    def test_page_lookup_on_empty_layout(self):
        assert LayoutResult(pages=()).page(2) is EMPTY_PAGE
