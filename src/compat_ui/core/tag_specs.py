"""
Tag definitions table.

One ``TagDefinition`` per supported tag, built once at import time and
looked up by name. The style tables map presentation attributes onto the
CSS property they render as.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from compat_ui.core.attributes import AttributeKind, AttributeSpec
from compat_ui.core.context import FrameKind

ALIGNMENTS = ("left", "center", "right")
BORDER_POSITIONS = ("top", "bottom", "left", "right", "center")
COLUMN_TYPES = ("string", "numeric", "date", "boolean", "currency", "image")
DIV_TAG_NAMES = ("div", "span", "p", "section", "article", "aside", "header", "footer", "main", "nav")
LAYOUT_ALIGNMENTS = ("left", "center", "right", "top", "bottom")
LAYOUT_TYPES = ("border", "accordion", "tab", "hbox", "vbox")
OVERFLOW_VALUES = ("auto", "hidden", "scroll", "visible")
SELECT_MODES = ("none", "single", "multi")
UPDATE_METHODS = ("POST", "PUT", "PATCH")

# Attribute name -> CSS property. Boolean attributes map to a fixed declaration.
STYLE_MAP: dict[str, str] = {
    "bgColor": "background-color",
    "textColor": "color",
    "font": "font-family",
    "fontSize": "font-size",
}
FLAG_STYLE_MAP: dict[str, str] = {
    "bold": "font-weight: bold",
    "italic": "font-style: italic",
}
HEADER_STYLE_MAP: dict[str, str] = {
    "headerBgColor": "background-color",
    "headerTextColor": "color",
    "headerFont": "font-family",
    "headerFontSize": "font-size",
}
HEADER_FLAG_STYLE_MAP: dict[str, str] = {
    "headerBold": "font-weight: bold",
    "headerItalic": "font-style: italic",
}


class TagDefinition(BaseModel):
    """Static description of a tag: display name, id prefix, frame kind, attributes."""

    model_config = {"frozen": True}

    name: str
    display_name: str
    id_prefix: str | None = None  # None: no element id unless one is supplied
    frame_kind: FrameKind = FrameKind.NONE
    attributes: tuple[AttributeSpec, ...] = ()


def _s(name: str, **kwargs: object) -> AttributeSpec:
    return AttributeSpec(name=name, **kwargs)  # type: ignore[arg-type]


def _b(name: str, default: bool = False) -> AttributeSpec:
    return AttributeSpec(name=name, kind=AttributeKind.BOOLEAN, default=default)


def _i(name: str, default: int | None = None) -> AttributeSpec:
    return AttributeSpec(name=name, kind=AttributeKind.INTEGER, default=default)


def _fn(name: str) -> AttributeSpec:
    return AttributeSpec(name=name, kind=AttributeKind.IDENTIFIER)


_PRESENTATION = (
    _s("id"),
    _s("class"),
    _s("style"),
    _s("height"),
    _s("width"),
)

_FONT = (
    _s("bgColor"),
    _s("textColor"),
    _s("font"),
    _s("fontSize"),
    _b("bold"),
    _b("italic"),
)

GRID = TagDefinition(
    name="grid",
    display_name="Grid",
    id_prefix="grid",
    frame_kind=FrameKind.GRID,
    attributes=(
        _s("name", required=True),
        *_PRESENTATION,
        *_FONT,
        _s("headerBgColor"),
        _s("headerTextColor"),
        _s("headerFont"),
        _s("headerFontSize"),
        _b("headerBold"),
        _b("headerItalic"),
        _s("selectMode", allowed_values=SELECT_MODES, default="none"),
        _b("multirowselect"),
        _b("sortable"),
        _b("editable"),
        _b("showHeaders", default=True),
        _b("stripeRows", default=True),
        _i("pageSize"),
        _i("page", default=1),
        AttributeSpec(name="query", kind=AttributeKind.ANY),
        _s("source"),
        _fn("onLoad"),
        _fn("onEdit"),
        _fn("onSort"),
        _fn("onChange"),
    ),
)

GRID_COLUMN = TagDefinition(
    name="gridcolumn",
    display_name="GridColumn",
    attributes=(
        _s("name", required=True),
        _s("header"),
        _s("width"),
        _s("dataAlign", allowed_values=ALIGNMENTS),
        _s("headerAlign", allowed_values=ALIGNMENTS),
        _s("type", allowed_values=COLUMN_TYPES, default="string"),
        _b("display", default=True),
        AttributeSpec(name="sortable", kind=AttributeKind.BOOLEAN),
        AttributeSpec(name="editable", kind=AttributeKind.BOOLEAN),
        _s("values"),
        _s("valuesDisplay"),
        _s("href"),
        _s("hrefKey"),
        _s("target"),
        _s("numberFormat"),
        _s("dateFormat"),
    ),
)

GRID_ROW = TagDefinition(
    name="gridrow",
    display_name="GridRow",
    attributes=(AttributeSpec(name="data", required=True, kind=AttributeKind.ANY),),
)

GRID_UPDATE = TagDefinition(
    name="gridupdate",
    display_name="GridUpdate",
    attributes=(
        _s("grid", required=True),
        _s("dataSource"),
        _s("tableName"),
        _s("tableOwner"),
        _s("tableQualifier"),
        _s("username"),
        _s("password"),
        _b("keyOnly"),
        _s("url"),
        _s("method", allowed_values=UPDATE_METHODS, default="POST"),
        _fn("onSuccess"),
        _fn("onError"),
    ),
)

LAYOUT = TagDefinition(
    name="layout",
    display_name="Layout",
    id_prefix="layout",
    frame_kind=FrameKind.LAYOUT,
    attributes=(
        _s("type", required=True, allowed_values=LAYOUT_TYPES),
        *_PRESENTATION,
        _s("align", allowed_values=LAYOUT_ALIGNMENTS),
        _b("fillHeight"),
        _b("fitToWindow"),
        _s("name"),
    ),
)

LAYOUT_AREA = TagDefinition(
    name="layoutarea",
    display_name="LayoutArea",
    id_prefix="layoutarea",
    attributes=(
        _s("id"),
        _s("title"),
        _s("position"),
        _s("size"),
        _s("minSize"),
        _s("maxSize"),
        _b("splitter", default=True),
        _b("collapsible", default=True),
        _b("initCollapsed"),
        _s("source"),
        _s("align", allowed_values=ALIGNMENTS),
        _s("overflow", allowed_values=OVERFLOW_VALUES),
        _s("style"),
    ),
)

POD = TagDefinition(
    name="pod",
    display_name="Pod",
    id_prefix="pod",
    attributes=(
        *_PRESENTATION,
        _s("name"),
        _s("title"),
        _s("overflow", allowed_values=OVERFLOW_VALUES),
        _s("bodyStyle"),
        _s("headerStyle"),
        _s("source"),
        _fn("onBindError"),
    ),
)

DIV = TagDefinition(
    name="div",
    display_name="Div",
    id_prefix="div",
    attributes=(
        *_PRESENTATION,
        _s("tagName", allowed_values=DIV_TAG_NAMES, default="div"),
        _s("bind"),
        _b("bindOnLoad", default=True),
        _fn("onBindError"),
    ),
)

AJAX_PROXY = TagDefinition(
    name="ajaxproxy",
    display_name="AjaxProxy",
    attributes=(
        _s("cfc"),
        _fn("jsClassName"),
        _s("bind"),
        _fn("onSuccess"),
        _fn("onError"),
    ),
)

AJAX_IMPORT = TagDefinition(
    name="ajaximport",
    display_name="AjaxImport",
    attributes=(
        _s("tags"),
        _s("cssSrc"),
        _s("scriptSrc"),
        _s("params"),
    ),
)

TAG_DEFINITIONS: dict[str, TagDefinition] = {
    d.name: d
    for d in (
        GRID,
        GRID_COLUMN,
        GRID_ROW,
        GRID_UPDATE,
        LAYOUT,
        LAYOUT_AREA,
        POD,
        DIV,
        AJAX_PROXY,
        AJAX_IMPORT,
    )
}


def grid_update_mode(attributes: Mapping[str, Any]) -> str | None:
    """How a gridupdate saves: ``"database"`` needs both dataSource and
    tableName, otherwise ``"url"`` needs a url. None when neither is complete."""
    if attributes.get("dataSource") and attributes.get("tableName"):
        return "database"
    if attributes.get("url"):
        return "url"
    return None


def get_definition(tag: str) -> TagDefinition | None:
    """Look up a tag definition by name (case-insensitive, ``bx:`` prefix allowed)."""
    name = tag.lower()
    if name.startswith("bx:"):
        name = name[3:]
    return TAG_DEFINITIONS.get(name.replace("-", ""))
