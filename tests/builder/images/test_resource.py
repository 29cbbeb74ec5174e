"""
Unit tests for image resource cells and the loader.
"""

import io
import threading

import pytest
from PIL import Image

from biodata_toolkit.builder.images.resource import (
    ImageLoader,
    ImageResource,
    ResourceLoadError,
    ResourceState,
    decode_image,
)


def png_bytes(color="red", size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


class TestImageResource:

    def test_new_cell_is_pending(self):
        cell = ImageResource("logo.png")

        assert cell.state is ResourceState.PENDING
        assert cell.is_pending
        assert cell.get() is None

    def test_resolve_makes_image_available(self):
        cell = ImageResource("logo.png")
        image = Image.new("RGB", (4, 4))

        cell.resolve(image)

        assert cell.state is ResourceState.READY
        assert cell.get() is image

    def test_failed_cell_returns_none(self):
        cell = ImageResource.failed("broken")

        assert cell.state is ResourceState.FAILED
        assert cell.get() is None
        assert cell.error == "broken"

    def test_empty_cell_is_settled(self):
        cell = ImageResource.empty()
        assert not cell.is_pending
        assert cell.wait(0) is None

    def test_settles_only_once(self):
        cell = ImageResource()
        cell.fail("first")
        cell.resolve(Image.new("RGB", (2, 2)))

        assert cell.state is ResourceState.FAILED

    def test_callback_runs_on_settle(self):
        cell = ImageResource()
        seen = []
        cell.add_done_callback(lambda c: seen.append(c.state))

        assert seen == []
        cell.resolve(Image.new("RGB", (2, 2)))
        assert seen == [ResourceState.READY]

    def test_callback_added_after_settle_runs_immediately(self):
        cell = ImageResource.failed()
        seen = []

        cell.add_done_callback(seen.append)

        assert seen == [cell]

    def test_failing_callback_does_not_block_others(self):
        cell = ImageResource()
        seen = []

        def broken(_):
            raise RuntimeError("boom")

        cell.add_done_callback(broken)
        cell.add_done_callback(seen.append)
        cell.fail("x")

        assert seen == [cell]

    def test_wait_returns_image_resolved_on_other_thread(self):
        cell = ImageResource()
        image = Image.new("RGB", (2, 2))
        threading.Timer(0.01, cell.resolve, args=(image,)).start()

        assert cell.wait(5) is image


class TestDecodeImage:

    def test_decodes_bytes_to_rgba(self):
        image = decode_image(png_bytes())
        assert image.mode == "RGBA"
        assert image.size == (8, 8)

    def test_decodes_path(self, sample_image):
        image = decode_image(sample_image)
        assert image.size == (200, 100)

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(ResourceLoadError):
            decode_image(tmp_path / "missing.png")

    def test_garbage_bytes_raise(self):
        with pytest.raises(ResourceLoadError):
            decode_image(b"not an image")


class TestImageLoader:

    def test_load_resolves_cell(self):
        with ImageLoader() as loader:
            cell = loader.load(png_bytes())
            image = cell.wait(5)

        assert cell.state is ResourceState.READY
        assert image.size == (8, 8)

    def test_load_failure_marks_cell_failed(self, tmp_path):
        with ImageLoader() as loader:
            cell = loader.load(str(tmp_path / "missing.png"))
            cell.wait(5)

        assert cell.state is ResourceState.FAILED
        assert cell.error

    @pytest.mark.parametrize("ref", [None, "", "   "])
    def test_blank_ref_gives_empty_cell(self, ref):
        with ImageLoader() as loader:
            cell = loader.load(ref)

        assert cell.state is ResourceState.FAILED
