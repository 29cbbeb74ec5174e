"""
Module: session

Purpose:
    Explicit editor/preview state for one biodata document. Owns the
    field list and every input the renderer needs, applies the editor's
    field mutations, and recomputes the page list from scratch after
    each change.

Key Classes:
    - BiodataSession: State object + entry points for preview and export
    - MoveDirection: Field reorder direction

Dependencies:
    - builder: Pagination, rendering, export
    - data: Default fields and templates

Example:
    >>> session = BiodataSession()
    >>> session.set_value("name-0", "Asha Rao")
    >>> session.page_count
    1
    >>> result = session.generate_document(Path("out"))
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple, Union

from biodata_toolkit.builder.config import LayoutConfig
from biodata_toolkit.builder.controller import GenerationController, GenerationStatus
from biodata_toolkit.builder.images.resource import (
    ImageLoader,
    ImageRef,
    ImageResource,
    ResourceLoadError,
    decode_image,
)
from biodata_toolkit.builder.layout import LayoutResult, Page, paginate
from biodata_toolkit.builder.output import (
    GenerationResult,
    HeaderContent,
    RasterSurface,
    RenderReport,
    RenderRequest,
    assemble_document,
    draw_background,
    get_sink_factory,
    render_page,
)
from biodata_toolkit.builder.output.sink import DEFAULT_SINK, SinkFactory
from biodata_toolkit.builder.text.measure import TextMeasures
from biodata_toolkit.core.models import (
    CanonicalGroup,
    CustomizationSettings,
    Field,
    FieldOrigin,
    InputKind,
    RawGroup,
    Template,
)
from biodata_toolkit.core.utils.serialization import (
    deserialize_fields,
    dumps_form,
    serialize_fields,
)
from biodata_toolkit.data import DEFAULT_TEMPLATE, get_template, initial_fields

logger = logging.getLogger(__name__)

NEW_FIELD_LABEL = "New Custom Field"

_CUSTOM_GROUP_FOR: Dict[CanonicalGroup, RawGroup] = {
    CanonicalGroup.PERSONAL: RawGroup.CUSTOM_PERSONAL,
    CanonicalGroup.FAMILY: RawGroup.CUSTOM_FAMILY,
    CanonicalGroup.CONTACT: RawGroup.CUSTOM,
}

_USE_SESSION_SINK = object()

Scheduler = Callable[[Callable[[], None]], None]


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    def __str__(self) -> str:
        return self.value


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class BiodataSession:
    """
    Editor and preview state for one document.

    The page list is derived, never edited: every mutation re-runs the
    paginator over the whole field list.

    Args:
        fields: Initial field list (defaults to the built-in catalogue)
        template: Selected template
        customization: Typography
        config: Base layout configuration (font sizes are taken from
            `customization`)
        loader: Image loader for template/emblem/photo refs. Without one,
            refs are decoded synchronously.
        controller: Generation state machine
        sink_name: Export provider ("reportlab" or "pymupdf")
        redraw_scheduler: Runs deferred preview redraws (e.g. posts to a
            UI event loop); defaults to calling immediately
    """

    def __init__(
        self,
        fields: Optional[Sequence[Field]] = None,
        *,
        template: Template = DEFAULT_TEMPLATE,
        customization: Optional[CustomizationSettings] = None,
        config: Optional[LayoutConfig] = None,
        loader: Optional[ImageLoader] = None,
        controller: Optional[GenerationController] = None,
        sink_name: Optional[str] = DEFAULT_SINK,
        redraw_scheduler: Scheduler = _call_now,
    ) -> None:
        self._fields: List[Field] = list(fields) if fields is not None else initial_fields()
        self._check_unique_ids(self._fields)

        self._customization = customization or CustomizationSettings()
        self._base_config = config or LayoutConfig()
        self._loader = loader
        self.controller = controller or GenerationController()
        self.sink_name = sink_name
        self._redraw_scheduler = redraw_scheduler

        self._template = template
        self.background = self._load(template.background_ref)
        self.emblem = ImageResource.empty()
        self.photo = ImageResource.empty()
        self.photo_radius: Union[str, float] = 0
        self.invocation_text = ""
        self.heading_text = ""

        self._current_page_index = 0
        self._awaiting_redraw: Set[int] = set()
        self._layout = LayoutResult(pages=())
        self._relayout()

    # ─────────────────────────────────────────────────────────────────────
    # Derived layout
    # ─────────────────────────────────────────────────────────────────────

    @property
    def fields(self) -> Tuple[Field, ...]:
        return tuple(self._fields)

    @property
    def template(self) -> Template:
        return self._template

    @property
    def customization(self) -> CustomizationSettings:
        return self._customization

    @property
    def layout_config(self) -> LayoutConfig:
        return self._base_config.with_customization(self._customization)

    @property
    def measures(self) -> TextMeasures:
        return TextMeasures.from_customization(self._customization, self._base_config.dpi_scale)

    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self._layout.pages

    @property
    def page_count(self) -> int:
        return self._layout.page_count

    @property
    def current_page_index(self) -> int:
        return self._current_page_index

    @property
    def current_page(self) -> Page:
        return self._layout.page(self._current_page_index)

    def set_current_page(self, index: int) -> int:
        """Select the preview page, clamped to the page range."""
        self._current_page_index = max(0, min(index, self.page_count - 1))
        return self._current_page_index

    def _relayout(self) -> None:
        self._layout = paginate(self._fields, self.layout_config, self.measures)
        # Keep the current page in view, or fall back to the last page
        self.set_current_page(self._current_page_index)

    # ─────────────────────────────────────────────────────────────────────
    # Field mutations
    # ─────────────────────────────────────────────────────────────────────

    def get_field(self, field_id: str) -> Field:
        return self._fields[self._index_of(field_id)]

    def set_value(self, field_id: str, value: str) -> None:
        i = self._index_of(field_id)
        self._fields[i] = self._fields[i].with_value(value)
        self._relayout()

    def set_label(self, field_id: str, label: str) -> None:
        i = self._index_of(field_id)
        self._fields[i] = self._fields[i].with_label(label)
        self._relayout()

    def fields_in_group(self, group: CanonicalGroup) -> List[Field]:
        return [f for f in self._fields if f.canonical_group is group]

    def move_field(self, field_id: str, direction: Union[MoveDirection, str]) -> bool:
        """
        Swap a field with its neighbour inside the same canonical group.

        Fields of other groups in between are not touched.

        Returns:
            True if the field moved, False at the edge of its group
        """
        direction = MoveDirection(direction)
        field = self.get_field(field_id)
        group_ids = [f.id for f in self.fields_in_group(field.canonical_group)]

        position = group_ids.index(field_id)
        target = position + (-1 if direction is MoveDirection.UP else 1)
        if target < 0 or target >= len(group_ids):
            return False

        source_index = self._index_of(field_id)
        target_index = self._index_of(group_ids[target])
        self._fields[source_index], self._fields[target_index] = (
            self._fields[target_index],
            self._fields[source_index],
        )
        self._relayout()
        return True

    def remove_custom_field(self, field_id: str) -> bool:
        """Delete a user-added field. Built-in fields are kept."""
        field = self.get_field(field_id)
        if not field.is_custom:
            logger.warning(f"Refusing to remove built-in field {field_id!r}")
            return False
        del self._fields[self._index_of(field_id)]
        self._relayout()
        return True

    def insert_custom_field(
        self,
        after_id: str,
        *,
        contact: bool = False,
        label: str = NEW_FIELD_LABEL,
    ) -> Field:
        """
        Insert a blank user-added field right after `after_id`.

        The new field joins the same canonical section as its neighbour,
        or the contact section when `contact` is set.
        """
        i = self._index_of(after_id)
        if contact:
            group = RawGroup.CUSTOM
        else:
            group = _CUSTOM_GROUP_FOR.get(self._fields[i].canonical_group, RawGroup.CUSTOM)
        new_field = Field(
            id=f"custom-{uuid.uuid4().hex[:12]}",
            label=label,
            value="",
            group=group,
            origin=FieldOrigin.CUSTOM,
            input_kind=InputKind.TEXT,
        )
        self._fields.insert(i + 1, new_field)
        self._relayout()
        return new_field

    def _index_of(self, field_id: str) -> int:
        for i, f in enumerate(self._fields):
            if f.id == field_id:
                return i
        raise KeyError(f"Unknown field id: {field_id}")

    @staticmethod
    def _check_unique_ids(fields: Sequence[Field]) -> None:
        ids = [f.id for f in fields]
        if len(ids) != len(set(ids)):
            raise ValueError("Field ids must be unique")

    # ─────────────────────────────────────────────────────────────────────
    # Styling and header inputs
    # ─────────────────────────────────────────────────────────────────────

    def set_template(self, template: Template) -> None:
        self._template = template
        self.background = self._load(template.background_ref)

    def set_customization(self, customization: CustomizationSettings) -> None:
        self._customization = customization
        self._relayout()

    def set_emblem(self, ref: Optional[ImageRef]) -> None:
        self.emblem = self._load(ref)

    def set_photo(self, ref: Optional[ImageRef]) -> None:
        self.photo = self._load(ref)

    @property
    def header(self) -> HeaderContent:
        return HeaderContent(
            emblem=self.emblem,
            photo=self.photo,
            photo_radius=self.photo_radius,
            invocation_text=self.invocation_text,
            heading_text=self.heading_text,
        )

    def _load(self, ref: Optional[ImageRef]) -> ImageResource:
        if ref is None or (isinstance(ref, str) and not ref.strip()):
            return ImageResource.empty()
        if self._loader is not None:
            return self._loader.load(ref)

        try:
            return ImageResource.ready(decode_image(ref), ref)
        except ResourceLoadError as e:
            logger.warning(f"Image failed to load: {e}")
            return ImageResource.failed(str(e), ref)

    # ─────────────────────────────────────────────────────────────────────
    # Preview and export
    # ─────────────────────────────────────────────────────────────────────

    def new_surface(self) -> RasterSurface:
        config = self._base_config
        return RasterSurface(config.canvas_width, config.canvas_height, config.dpi_scale)

    def render_preview(self, surface: RasterSurface) -> RenderReport:
        """
        Redraw the current page on the preview surface.

        Images still loading are skipped; the page is redrawn once each
        of them settles.
        """
        surface.clear()
        draw_background(surface, self._template, self.background.get())
        report = render_page(
            surface,
            self._template,
            self.current_page,
            self._customization,
            header=self.header,
            config=self.layout_config,
        )

        waiting = list(report.pending)
        if self.background.is_pending:
            waiting.append(self.background)
        for resource in waiting:
            self._redraw_when_settled(resource, surface)
        return report

    def _redraw_when_settled(self, resource: ImageResource, surface: RasterSurface) -> None:
        key = id(resource)
        if key in self._awaiting_redraw:
            return
        self._awaiting_redraw.add(key)

        def on_settled(_: ImageResource) -> None:
            self._awaiting_redraw.discard(key)
            self._redraw_scheduler(lambda: self.render_preview(surface))

        resource.add_done_callback(on_settled)

    def render_request(self) -> RenderRequest:
        return RenderRequest(
            template=self._template,
            customization=self._customization,
            header=self.header,
            background=self.background,
            config=self.layout_config,
        )

    @property
    def generation_status(self) -> GenerationStatus:
        return self.controller.status

    def generate_document(
        self,
        output_dir: Path,
        *,
        sink_factory: Any = _USE_SESSION_SINK,
    ) -> GenerationResult:
        """
        Export every page to a document in `output_dir`.

        Args:
            output_dir: Target directory
            sink_factory: Export capability override; None simulates a
                missing capability. Defaults to the session's provider.

        Returns:
            GenerationResult with success flag and error message
        """
        factory: Optional[SinkFactory]
        if sink_factory is _USE_SESSION_SINK:
            factory = get_sink_factory(self.sink_name)
        else:
            factory = sink_factory

        pages = self.pages
        request = self.render_request()
        fields = self.fields
        return self.controller.run(lambda: assemble_document(
            pages,
            request,
            factory,
            fields=fields,
            output_dir=Path(output_dir),
        ))

    # ─────────────────────────────────────────────────────────────────────
    # Snapshot
    # ─────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Form data snapshot (fields, header inputs, template, typography)."""
        return {
            "fields": serialize_fields(self._fields),
            "photo": {
                "url": _ref_repr(self.photo.ref),
                "borderRadius": self.photo_radius,
                "state": self.photo.state.value,
            },
            "logo": _ref_repr(self.emblem.ref),
            "dietyText": self.invocation_text,
            "templateHeading": self.heading_text,
            "template": {
                "id": self._template.id,
                "name": self._template.name,
                "primaryColor": self._template.primary_color,
            },
            "customization": self._customization.to_dict(),
            "pageCount": self.page_count,
        }

    def to_json(self) -> str:
        return dumps_form(self.to_dict())

    def restore(self, snapshot: Dict[str, Any]) -> None:
        """
        Reload form data from a `to_dict()` snapshot.

        Fields, typography, header texts, photo radius and the template
        (when it is a built-in one) are restored. Image refs are not:
        emblem and photo must be chosen again.

        Raises:
            KeyError: If the snapshot has no field list
            ValueError: If the field list is malformed or has duplicate ids
        """
        fields = deserialize_fields(snapshot["fields"])

        customization = self._customization
        if "customization" in snapshot:
            customization = CustomizationSettings.from_dict(snapshot["customization"])

        self._fields = fields
        self._customization = customization
        self.invocation_text = snapshot.get("dietyText", self.invocation_text)
        self.heading_text = snapshot.get("templateHeading", self.heading_text)
        self.photo_radius = snapshot.get("photo", {}).get("borderRadius", self.photo_radius)

        template_id = snapshot.get("template", {}).get("id")
        template = get_template(template_id) if template_id else None
        if template is not None and template != self._template:
            self.set_template(template)
        elif template_id and template is None and template_id != self._template.id:
            logger.warning(f"Unknown template {template_id!r}, keeping {self._template.id!r}")

        self._relayout()
        logger.info(f"Restored {len(fields)} fields onto {self.page_count} pages")

    def close(self) -> None:
        self.controller.shutdown()


def _ref_repr(ref: Optional[ImageRef]) -> Optional[str]:
    if ref is None:
        return None
    if isinstance(ref, bytes):
        return f"<{len(ref)} bytes>"
    return str(ref)
