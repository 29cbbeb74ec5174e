"""
Unit tests for portrait helpers.
"""

import pytest
from PIL import Image

from biodata_toolkit.builder.images.photo import clamp_radius, fit_to_box, rounded_mask


class TestClampRadius:

    @pytest.mark.parametrize("radius, expected", [
        (10, 10.0),
        ("12", 12.0),
        ("200", 55.0),
        (-5, 0.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("nan", 0.0),
        (float("nan"), 0.0),
        ("inf", 0.0),
        ("-inf", 0.0),
    ])
    def test_clamped_to_half_short_side(self, radius, expected):
        assert clamp_radius(radius, 110, 140) == expected


class TestMasks:

    def test_zero_radius_has_no_mask(self):
        assert rounded_mask((20, 20), 0) is None

    def test_rounded_mask_clears_corners(self):
        mask = rounded_mask((40, 40), 10)

        assert mask.getpixel((0, 0)) == 0
        assert mask.getpixel((20, 20)) == 255

    def test_fit_to_box(self):
        image = Image.new("RGB", (10, 30))
        assert fit_to_box(image, (20, 20)).size == (20, 20)
