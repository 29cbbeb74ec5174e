import pytest
import sys
from pathlib import Path
from typing import List
from PIL import Image

# Add src to sys.path so we can import biodata_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from biodata_toolkit.builder.output.sink import DocumentSink  # noqa: E402
from biodata_toolkit.builder.text.measure import TextMeasures  # noqa: E402
from biodata_toolkit.core.models import Field, FieldOrigin, RawGroup, Template  # noqa: E402

# Width of one character under the fixed-width test measure
CHAR_WIDTH = 5.0


def char_measure(text: str) -> float:
    """Fixed-width measure: every character is CHAR_WIDTH units wide."""
    return len(text) * CHAR_WIDTH


class StubSink(DocumentSink):
    """Records sink calls instead of writing a document."""

    def __init__(self, output_dir: Path, aspect_ratio: float) -> None:
        super().__init__(output_dir, aspect_ratio)
        self.calls: List[str] = []
        self.images: List[bytes] = []
        self.page_count = 1

    def add_page(self) -> None:
        self.calls.append("add_page")
        self.page_count += 1

    def add_image(self, data: bytes) -> None:
        self.calls.append("add_image")
        self.images.append(data)

    def save(self, filename: str) -> Path:
        self.calls.append("save")
        return self.output_dir / filename

    def close(self) -> None:
        self.calls.append("close")


# Common test fixtures
@pytest.fixture
def measures():
    """Column measures using the fixed-width test measure."""
    return TextMeasures.uniform(char_measure)


@pytest.fixture
def make_field():
    """Factory to create fields."""
    counter = {"n": 0}

    def _create(
        value: str = "value",
        group=RawGroup.PERSONAL,
        label: str = "Label",
        field_id: str = None,
        origin: FieldOrigin = FieldOrigin.MANDATORY,
    ) -> Field:
        counter["n"] += 1
        return Field(
            id=field_id or f"f{counter['n']}",
            label=label,
            value=value,
            group=group,
            origin=origin,
        )
    return _create


@pytest.fixture
def plain_template():
    """Template without a background image (flat tint)."""
    return Template(id="plain", name="Plain", background_ref=None, primary_color="#881337")


@pytest.fixture
def stub_sinks():
    """Sink factory that keeps every sink it creates."""
    created: List[StubSink] = []

    def factory(output_dir: Path, aspect_ratio: float) -> StubSink:
        sink = StubSink(output_dir, aspect_ratio)
        created.append(sink)
        return sink

    factory.created = created
    return factory


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
