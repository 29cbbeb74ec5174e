"""
Unit tests for the paginator.

Uses a fixed-width measure (5 units per character) with the default
LayoutConfig: value column 220 wide (44 chars), label column 150 wide
(30 chars), line height 14, field gap 8, heading block 50.

A short single-line field therefore consumes 22 units, or 72 when it
opens a section.
"""

import pytest

from biodata_toolkit.builder.config import LayoutConfig
from biodata_toolkit.builder.layout import paginate
from biodata_toolkit.builder.layout.headings import HeadingTracker, iter_headings
from biodata_toolkit.builder.layout.paginator import field_consumption
from biodata_toolkit.core.models import CanonicalGroup, RawGroup

# Ten 20-character words: wraps to five value lines at 44 chars/line
LONG_VALUE = " ".join(["abcdefghijklmnopqrst"] * 10)
# Far taller than any page
HUGE_VALUE = " ".join(["word"] * 400)


@pytest.fixture
def config():
    return LayoutConfig()


class TestScenarios:

    def test_single_field_gives_single_page(self, make_field, config, measures):
        # Arrange
        field = make_field(label="Full Name", value="Asha Rao", group=RawGroup.PERSONAL)

        # Act
        result = paginate([field], config, measures)

        # Assert
        assert result.page_count == 1
        assert result.pages[0].fields == (field,)
        assert result.pages[0].carry_over_group is None
        assert result.warnings == []

    def test_many_wrapping_fields_spread_over_pages(self, make_field, config, measures):
        fields = [make_field(value=LONG_VALUE) for _ in range(40)]

        result = paginate(fields, config, measures)

        assert result.page_count > 1
        placed = [f for page in result.pages for f in page.fields]
        assert placed == fields
        assert [p.index for p in result.pages] == list(range(result.page_count))

    def test_when_all_values_blank_then_zero_pages(self, make_field, config, measures):
        fields = [make_field(value=v) for v in ("", "  ", "\n")]

        result = paginate(fields, config, measures)

        assert result.pages == ()
        assert result.page_count == 0

    def test_swapping_equal_height_fields_keeps_split(self, make_field, config, measures):
        fields = [make_field(value=f"value {i}") for i in range(30)]
        swapped = list(fields)
        swapped[3], swapped[4] = swapped[4], swapped[3]

        before = paginate(fields, config, measures)
        after = paginate(swapped, config, measures)

        assert [p.field_count for p in before.pages] == [p.field_count for p in after.pages]
        assert after.pages[0].fields[3] is fields[4]
        assert after.pages[0].fields[4] is fields[3]


class TestPlacement:

    def test_blank_fields_never_placed(self, make_field, config, measures):
        fields = [
            make_field(value="a"),
            make_field(value=""),
            make_field(value="b"),
            make_field(value="   "),
        ]

        result = paginate(fields, config, measures)

        placed = [f.id for page in result.pages for f in page.fields]
        assert placed == [fields[0].id, fields[2].id]

    def test_paginate_is_deterministic(self, make_field, config, measures):
        fields = [make_field(value=LONG_VALUE if i % 3 else "x") for i in range(25)]

        assert paginate(fields, config, measures) == paginate(fields, config, measures)

    def test_smaller_bottom_bound_never_reduces_pages(self, make_field, measures):
        fields = [
            make_field(value=LONG_VALUE if i % 2 else "short", group=group)
            for i, group in enumerate([RawGroup.PERSONAL, RawGroup.FAMILY, RawGroup.CONTACT] * 8)
        ]

        counts = [
            paginate(fields, LayoutConfig(max_content_y=bound), measures).page_count
            for bound in (622, 550, 450, 350, 250)
        ]

        assert counts == sorted(counts)

    def test_first_page_capacity(self, make_field, config, measures):
        # 235 + 72 + 14 * 22 = 615; a 16th field would end at 637
        fields = [make_field(value="x") for _ in range(16)]

        result = paginate(fields, config, measures)

        assert [p.field_count for p in result.pages] == [15, 1]
        assert result.pages[1].carry_over_group is CanonicalGroup.PERSONAL

    def test_continued_section_does_not_reserve_heading(self, make_field, config, measures):
        # Page 2 fits 25 fields (68 + 25 * 22 = 618) only without a heading
        fields = [make_field(value="x") for _ in range(40)]

        result = paginate(fields, config, measures)

        assert [p.field_count for p in result.pages] == [15, 25]

    def test_field_page_map(self, make_field, config, measures):
        fields = [make_field(value="x") for _ in range(16)]

        result = paginate(fields, config, measures)

        assert result.field_page_map[fields[0].id] == 0
        assert result.field_page_map[fields[15].id] == 1


class TestOversizedFields:

    def test_when_first_field_too_tall_then_placed_alone(self, make_field, config, measures):
        big = make_field(value=HUGE_VALUE)
        small = make_field(value="x")

        result = paginate([big, small], config, measures)

        assert result.pages[0].fields == (big,)
        assert result.pages[1].fields == (small,)
        assert len(result.warnings) == 1
        assert big.id in result.warnings[0]

    def test_when_tall_field_follows_then_moves_to_own_page(self, make_field, config, measures):
        first = make_field(value="x")
        big = make_field(value=HUGE_VALUE)
        last = make_field(value="y")

        result = paginate([first, big, last], config, measures)

        assert [p.fields for p in result.pages] == [(first,), (big,), (last,)]
        assert len(result.warnings) == 1


class TestHeadingBookkeeping:

    def test_heading_once_per_run(self, make_field):
        fields = [
            make_field(group=RawGroup.PERSONAL),
            make_field(group=RawGroup.CUSTOM_PERSONAL),
            make_field(group=RawGroup.FAMILY),
            make_field(group=RawGroup.FAMILY),
            make_field(group=RawGroup.CUSTOM),
        ]

        headings = [h for _, h in iter_headings(fields)]

        assert headings == [
            CanonicalGroup.PERSONAL, None,
            CanonicalGroup.FAMILY, None,
            CanonicalGroup.CONTACT,
        ]

    def test_other_field_does_not_split_run(self, make_field):
        fields = [
            make_field(group=RawGroup.PERSONAL),
            make_field(group="sidebar"),
            make_field(group=RawGroup.PERSONAL),
        ]

        headings = [h for _, h in iter_headings(fields)]

        assert headings == [CanonicalGroup.PERSONAL, None, None]

    def test_other_field_consumes_no_heading(self, make_field, config, measures):
        tracker = HeadingTracker()
        field = make_field(group="sidebar")

        assert field_consumption(field, tracker, config, measures) == 22

    def test_carry_over_suppresses_heading(self, make_field, config, measures):
        field = make_field(group=RawGroup.FAMILY)

        assert field_consumption(field, HeadingTracker(CanonicalGroup.FAMILY), config, measures) == 22
        assert field_consumption(field, HeadingTracker(CanonicalGroup.PERSONAL), config, measures) == 72

    def test_carry_over_is_last_field_group_even_when_other(self, make_field, config, measures):
        # 235 + 72 + 13 * 22 = 593, OTHER field ends at 615, next field overflows
        fields = [make_field(value="x") for _ in range(14)]
        fields.append(make_field(value="x", group="sidebar"))
        fields.append(make_field(value="x"))

        result = paginate(fields, config, measures)

        assert result.pages[0].field_count == 15
        assert result.pages[1].carry_over_group is CanonicalGroup.OTHER
        _, heading = next(iter_headings(result.pages[1].fields, result.pages[1].carry_over_group))
        assert heading is CanonicalGroup.PERSONAL

    def test_blank_fields_skipped_by_iter_headings(self, make_field):
        fields = [make_field(value=""), make_field(group=RawGroup.FAMILY)]

        pairs = list(iter_headings(fields))

        assert len(pairs) == 1
        assert pairs[0][1] is CanonicalGroup.FAMILY
