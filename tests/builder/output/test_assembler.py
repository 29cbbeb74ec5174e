"""
Tests for document assembly.
"""

import pymupdf
import pytest
from PIL import Image

from biodata_toolkit.builder.config import LayoutConfig
from biodata_toolkit.builder.images.resource import ImageResource
from biodata_toolkit.builder.layout import Page
from biodata_toolkit.builder.output.assembler import (
    EMPTY_DOCUMENT_MESSAGE,
    MISSING_CAPABILITY_MESSAGE,
    RenderRequest,
    assemble_document,
    output_filename,
)
from biodata_toolkit.builder.output.sink import MissingExportCapabilityError, ReportLabDocumentSink
from biodata_toolkit.core.models import CanonicalGroup, CustomizationSettings, Field, RawGroup


@pytest.fixture
def request_params(plain_template):
    customization = CustomizationSettings()
    return RenderRequest(
        template=plain_template,
        customization=customization,
        config=LayoutConfig().with_customization(customization),
    )


@pytest.fixture
def three_pages(make_field):
    return [
        Page(0, (make_field(),)),
        Page(1, (make_field(),), CanonicalGroup.PERSONAL),
        Page(2, (make_field(group=RawGroup.FAMILY),), CanonicalGroup.PERSONAL),
    ]


class TestOutputFilename:

    def test_whitespace_becomes_underscores(self):
        fields = [Field("name-0", "Full Name", "Asha  Rao", RawGroup.PERSONAL)]
        assert output_filename(fields) == "WeddingBiodata_Asha__Rao.pdf"

    def test_missing_identity_field_falls_back(self):
        assert output_filename([]) == "WeddingBiodata_New.pdf"

    def test_blank_identity_field_falls_back(self):
        fields = [Field("name-0", "Full Name", "   ", RawGroup.PERSONAL)]
        assert output_filename(fields) == "WeddingBiodata_New.pdf"

    def test_unsafe_characters_removed(self):
        fields = [Field("name-0", "Full Name", 'A/B:"C"', RawGroup.PERSONAL)]
        assert output_filename(fields) == "WeddingBiodata_ABC.pdf"


class TestAssembleDocument:

    def test_pages_written_in_order(self, three_pages, request_params, stub_sinks, tmp_path):
        # Act
        result = assemble_document(three_pages, request_params, stub_sinks, fields=[], output_dir=tmp_path)

        # Assert
        assert result.success
        assert result.page_count == 3
        sink = stub_sinks.created[0]
        assert sink.calls == [
            "add_image",
            "add_page", "add_image",
            "add_page", "add_image",
            "save",
            "close",
        ]
        assert result.path == tmp_path / "WeddingBiodata_New.pdf"

    def test_when_sink_missing_then_fails_before_drawing(self, three_pages, request_params, tmp_path):
        result = assemble_document(three_pages, request_params, None, fields=[], output_dir=tmp_path)

        assert not result.success
        assert result.error == MISSING_CAPABILITY_MESSAGE
        assert list(tmp_path.iterdir()) == []

    def test_when_sink_factory_reports_missing_capability(self, three_pages, request_params, tmp_path):
        def factory(output_dir, aspect_ratio):
            raise MissingExportCapabilityError("no pdf backend")

        result = assemble_document(three_pages, request_params, factory, fields=[], output_dir=tmp_path)

        assert result.error == MISSING_CAPABILITY_MESSAGE

    def test_when_no_pages_then_fails(self, request_params, stub_sinks, tmp_path):
        result = assemble_document([], request_params, stub_sinks, fields=[], output_dir=tmp_path)

        assert not result.success
        assert result.error == EMPTY_DOCUMENT_MESSAGE
        assert stub_sinks.created == []

    def test_sink_error_is_reported_not_raised(self, three_pages, request_params, stub_sinks, tmp_path):
        def broken(data):
            raise IOError("disk full")

        def factory(output_dir, aspect_ratio):
            sink = stub_sinks(output_dir, aspect_ratio)
            sink.add_image = broken
            return sink

        result = assemble_document(three_pages, request_params, factory, fields=[], output_dir=tmp_path)

        assert not result.success
        assert "Page 1 failed" in result.error
        assert stub_sinks.created[0].calls[-1] == "close"

    def test_failed_background_still_exports(self, three_pages, request_params, stub_sinks, tmp_path):
        request = RenderRequest(
            template=request_params.template,
            customization=request_params.customization,
            background=ImageResource.failed("404"),
            config=request_params.config,
        )

        result = assemble_document(three_pages, request, stub_sinks, fields=[], output_dir=tmp_path)

        assert result.success

    def test_pending_background_waited_once(self, three_pages, request_params, stub_sinks, tmp_path):
        background = ImageResource("bg.png")
        request = RenderRequest(
            template=request_params.template,
            customization=request_params.customization,
            background=background,
            config=request_params.config,
        )

        result = assemble_document(
            three_pages, request, stub_sinks, fields=[], output_dir=tmp_path, background_timeout=0.01,
        )

        # Timed out: exported with the flat tint
        assert result.success
        assert background.is_pending

    def test_real_pdf(self, three_pages, request_params, tmp_path):
        fields = [Field("name-0", "Full Name", "Asha Rao", RawGroup.PERSONAL)]
        request = RenderRequest(
            template=request_params.template,
            customization=request_params.customization,
            background=ImageResource.ready(Image.new("RGB", (50, 70), "beige")),
            config=request_params.config,
        )

        result = assemble_document(three_pages, request, ReportLabDocumentSink, fields=fields, output_dir=tmp_path)

        assert result.success
        assert result.path.name == "WeddingBiodata_Asha_Rao.pdf"
        with pymupdf.open(result.path) as doc:
            assert doc.page_count == 3
