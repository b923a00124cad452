"""
Tag driver.

``DocumentRenderer`` is the boundary a host template engine talks to: it
reports each tag start, body text and tag end, and collects the document
at ``finish()``. ``render_document`` drives the same calls from a ``Tag``
tree, which is what the CLI and the tests use.

Per tag, in order:

1. on_start: nesting check, attribute validation, cross-attribute checks,
   frame push. Any failure raises before a single byte is emitted.
2. body: text written while the tag is open lands in its frame.
3. on_end: frame pop; child tags register into their parent, container
   tags render markup plus script into the enclosing frame or the
   document buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from compat_ui.core.attributes import is_js_identifier, validate_attributes
from compat_ui.core.config import ASSET_TAGS, UIConfig
from compat_ui.core.context import (
    ComponentContext,
    ComponentFrame,
    FrameKind,
    GridColumn,
    GridRow,
    IdGenerator,
    LayoutArea,
)
from compat_ui.core.errors import (
    ConflictingAttributes,
    ErrorContext,
    InvalidAttributeValue,
    InvalidNesting,
    MissingRequiredAttribute,
    UnknownTag,
)
from compat_ui.core.tag_specs import (
    BORDER_POSITIONS,
    TagDefinition,
    get_definition,
    grid_update_mode,
)
from compat_ui.runtime.markup import MarkupRenderer
from compat_ui.runtime.scripts import ScriptEmitter

logger = logging.getLogger(__name__)

# Child tag -> (frame kind it needs, child display name, parent display name)
CHILD_TAGS: dict[str, tuple[FrameKind, str, str]] = {
    "gridcolumn": (FrameKind.GRID, "GridColumn", "Grid"),
    "gridrow": (FrameKind.GRID, "GridRow", "Grid"),
    "layoutarea": (FrameKind.LAYOUT, "LayoutArea", "Layout"),
}

# Tags whose markup ignores captured body output. Anything but whitespace
# written inside them is rejected.
BODYLESS_TAGS: dict[str, str] = {
    "grid": "Grid body may only contain GridColumn and GridRow tags",
    "gridcolumn": "GridColumn does not accept body content",
    "gridrow": "GridRow does not accept body content",
    "gridupdate": "GridUpdate does not accept body content",
    "layout": "Layout body may only contain LayoutArea tags",
    "ajaxproxy": "AjaxProxy does not accept body content",
    "ajaximport": "AjaxImport does not accept body content",
}


class Tag(BaseModel):
    """
    One tag invocation in a document tree.

    ``children`` mixes nested tags and literal body text, in document order.

    Example:
        Tag(name="pod", attributes={"title": "News"}, children=["<p>Hello</p>"])
    """

    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    children: list[Tag | str] = Field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return any(isinstance(child, Tag) or child.strip() for child in self.children)


class DocumentRenderer:
    """Render one document. Not reusable across documents and not thread-safe."""

    def __init__(self, config: UIConfig | None = None, ids: IdGenerator | None = None) -> None:
        self.config = config or UIConfig()
        self.context = ComponentContext(
            ids or IdGenerator(self.config.id_strategy, self.config.id_seed)
        )
        self.markup = MarkupRenderer(self.config)
        self.scripts = ScriptEmitter(self.config)
        self._buffer: list[str] = []
        self._start_checks: dict[str, Callable[[dict[str, Any], bool], None]] = {
            "grid": self._check_grid,
            "gridrow": self._check_grid_row,
            "gridupdate": self._check_grid_update,
            "layoutarea": self._check_layout_area,
            "div": self._check_div,
            "ajaxproxy": self._check_ajax_proxy,
            "ajaximport": self._check_ajax_import,
        }

    # -------------------------------------------------------------------------
    # Host boundary
    # -------------------------------------------------------------------------

    def on_start(
        self, tag: str, attributes: Mapping[str, Any] | None = None, has_body: bool = False
    ) -> ComponentFrame:
        """Validate a tag start and open its frame."""
        definition = self._definition(tag)
        name = definition.name

        if name in CHILD_TAGS:
            kind, child, parent = CHILD_TAGS[name]
            self.context.require(kind, child, parent, name)

        attrs = validate_attributes(
            name, definition.display_name, definition.attributes, attributes or {}
        )
        check = self._start_checks.get(name)
        if check is not None:
            check(attrs, has_body)

        return self.context.open(name, definition.frame_kind, attrs, definition.id_prefix)

    def write(self, text: str) -> None:
        """Body text for the innermost open tag, or the document when none is open."""
        if not self.context.write(text):
            self._buffer.append(text)

    def on_end(self, tag: str) -> None:
        """Close a tag: register it with its parent or emit its output."""
        definition = self._definition(tag)
        frame = self.context.pop(definition.name)

        if frame.tag in BODYLESS_TAGS and frame.content.strip():
            raise InvalidNesting(BODYLESS_TAGS[frame.tag], ErrorContext(tag=frame.tag))

        if frame.tag in CHILD_TAGS:
            self._register_child(frame)
            return

        if frame.tag == "div" and frame.get("bind") and frame.content.strip():
            raise ConflictingAttributes(
                "Div cannot have body content when the bind attribute is specified",
                ErrorContext(tag="div", attribute="bind"),
            )

        output = self.markup.render(frame) + self.scripts.emit(frame)
        self.write(output)

    def finish(self) -> str:
        """The rendered document. Raises InvalidNesting if tags are still open."""
        self.context.assert_empty()
        return "".join(self._buffer)

    # -------------------------------------------------------------------------
    # Tree driver
    # -------------------------------------------------------------------------

    def render_node(self, node: Tag | str) -> None:
        if isinstance(node, str):
            self.write(node)
            return
        self.on_start(node.name, node.attributes, has_body=node.has_body)
        for child in node.children:
            self.render_node(child)
        self.on_end(node.name)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _definition(tag: str) -> TagDefinition:
        definition = get_definition(tag)
        if definition is None:
            raise UnknownTag(f"Unknown tag: {tag}", ErrorContext(tag=tag))
        return definition

    def _register_child(self, frame: ComponentFrame) -> None:
        kind, child, parent_name = CHILD_TAGS[frame.tag]
        parent = self.context.require(kind, child, parent_name, frame.tag)

        if frame.tag == "gridcolumn":
            name = frame.get("name")
            descriptor: GridColumn | GridRow | LayoutArea = GridColumn(
                name=name,
                header=frame.get("header", name),
                index=len(parent.columns),
                attributes=frame.attributes,
            )
        elif frame.tag == "gridrow":
            descriptor = GridRow(index=len(parent.rows), data=dict(frame.get("data")))
        else:
            descriptor = LayoutArea(
                id=frame.id,
                index=len(parent.areas),
                title=frame.get("title"),
                position=frame.get("position"),
                content=frame.content,
                attributes=frame.attributes,
            )
        self.context.register(parent, descriptor)

    # Cross-attribute checks, run after per-attribute validation.

    def _check_grid(self, attrs: dict[str, Any], has_body: bool) -> None:
        if attrs.get("multirowselect"):
            attrs["selectMode"] = "multi"
        for name in ("pageSize", "page"):
            value = attrs.get(name)
            if value is not None and value < 1:
                raise InvalidAttributeValue(
                    f"{name} attribute must be at least 1", ErrorContext(tag="grid", attribute=name)
                )
        query = attrs.get("query")
        if query is not None and (
            isinstance(query, (str, bytes))
            or not isinstance(query, Sequence)
            or not all(isinstance(row, Mapping) for row in query)
        ):
            raise InvalidAttributeValue(
                "query attribute must be a list of rows",
                ErrorContext(tag="grid", attribute="query"),
            )

    def _check_grid_row(self, attrs: dict[str, Any], has_body: bool) -> None:
        if not isinstance(attrs.get("data"), Mapping):
            raise InvalidAttributeValue(
                "data attribute must be a mapping of column name to value",
                ErrorContext(tag="gridrow", attribute="data"),
            )

    def _check_grid_update(self, attrs: dict[str, Any], has_body: bool) -> None:
        if grid_update_mode(attrs) is None:
            raise MissingRequiredAttribute(
                "GridUpdate requires either dataSource+tableName for database updates "
                "or url for HTTP updates",
                ErrorContext(tag="gridupdate"),
            )

    def _check_layout_area(self, attrs: dict[str, Any], has_body: bool) -> None:
        layout = self.context.nearest(FrameKind.LAYOUT)
        if layout is None or layout.get("type") != "border":
            return
        position = attrs.get("position")
        if position not in BORDER_POSITIONS:
            raise InvalidAttributeValue(
                f"LayoutArea position must be one of: {', '.join(BORDER_POSITIONS)}",
                ErrorContext(tag="layoutarea", attribute="position"),
            )
        if any(area.position == position for area in layout.areas):
            raise ConflictingAttributes(
                f"LayoutArea position '{position}' is already used in this Layout",
                ErrorContext(tag="layoutarea", attribute="position"),
            )

    def _check_div(self, attrs: dict[str, Any], has_body: bool) -> None:
        if attrs.get("bind") and has_body:
            raise ConflictingAttributes(
                "Div cannot have body content when the bind attribute is specified",
                ErrorContext(tag="div", attribute="bind"),
            )

    def _check_ajax_proxy(self, attrs: dict[str, Any], has_body: bool) -> None:
        cfc = attrs.get("cfc")
        if not cfc and not attrs.get("bind"):
            raise MissingRequiredAttribute(
                "Either cfc or bind attribute is required for AjaxProxy",
                ErrorContext(tag="ajaxproxy"),
            )
        if cfc and not attrs.get("jsClassName"):
            class_name = cfc.rsplit(".", 1)[-1]
            if not is_js_identifier(class_name):
                raise InvalidAttributeValue(
                    f"jsClassName attribute is required when the component name "
                    f"'{class_name}' is not a valid JavaScript class name",
                    ErrorContext(tag="ajaxproxy", attribute="jsClassName"),
                )

    def _check_ajax_import(self, attrs: dict[str, Any], has_body: bool) -> None:
        requested = attrs.get("tags")
        if not requested:
            return
        unknown = [
            t.strip() for t in requested.split(",") if t.strip() and t.strip().lower() not in ASSET_TAGS
        ]
        if unknown:
            raise InvalidAttributeValue(
                f"tags attribute must be a list of: {', '.join(ASSET_TAGS)}",
                ErrorContext(tag="ajaximport", attribute="tags"),
            )


def render_document(
    nodes: Iterable[Tag | str],
    config: UIConfig | None = None,
    ids: IdGenerator | None = None,
) -> str:
    """
    Render a sequence of top-level nodes to one HTML document fragment.

    Args:
        nodes: Tags and literal text, in document order.
        config: Render settings (defaults when omitted).
        ids: Id source; defaults to one built from ``config``.

    Returns:
        Markup and scripts for every container tag, interleaved with the text.
    """
    renderer = DocumentRenderer(config, ids)
    for node in nodes:
        renderer.render_node(node)
    html = renderer.finish()
    logger.debug("Rendered document (%d chars)", len(html))
    return html
