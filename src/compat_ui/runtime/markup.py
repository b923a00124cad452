"""
Markup renderer.

Turns a closed ``ComponentFrame`` into HTML. Class lists, inline styles and
data attributes are assembled here in Python; the Jinja2 templates under
``templates/`` only lay them out, so every attribute value passes through
autoescaping exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from compat_ui.core.config import ASSET_TAGS, UIConfig
from compat_ui.core.context import ComponentFrame, GridColumn, LayoutArea
from compat_ui.core.pagination import PaginationResult, paginate
from compat_ui.core.tag_specs import (
    FLAG_STYLE_MAP,
    HEADER_FLAG_STYLE_MAP,
    HEADER_STYLE_MAP,
    STYLE_MAP,
    grid_update_mode,
)
from compat_ui.runtime.template_renderer import render_fragment, trusted

logger = logging.getLogger(__name__)

# Number of page buttons shown either side of the current page.
PAGE_LINK_RADIUS = 2


# =============================================================================
# Helpers
# =============================================================================


def join_classes(*parts: str | None) -> str:
    """Join class names, skipping empty parts."""
    return " ".join(p.strip() for p in parts if p and p.strip())


def join_styles(*declarations: str | None) -> str:
    """Join CSS declarations, dropping empties and trailing semicolons."""
    cleaned = [d.strip().rstrip(";").strip() for d in declarations if d and d.strip()]
    return "; ".join(d for d in cleaned if d)


def size_styles(attrs: Mapping[str, Any]) -> list[str]:
    """``height``/``width`` attributes as declarations, in that order."""
    styles = []
    for name in ("height", "width"):
        value = attrs.get(name)
        if value:
            styles.append(f"{name}: {value}")
    return styles


def mapped_styles(
    attrs: Mapping[str, Any],
    style_map: Mapping[str, str],
    flag_map: Mapping[str, str],
) -> list[str]:
    """Render presentation attributes through a style map."""
    styles = [f"{prop}: {attrs[name]}" for name, prop in style_map.items() if attrs.get(name)]
    styles.extend(decl for name, decl in flag_map.items() if attrs.get(name))
    return styles


def passthrough_data(
    attrs: Mapping[str, Any], mapped: Sequence[tuple[str, str]] = ()
) -> list[tuple[str, str]]:
    """Caller-supplied ``data-*`` attributes, carried through unchanged.

    Names already in ``mapped`` are skipped so each attribute renders once.
    """
    taken = {name for name, _ in mapped}
    return [
        (name.lower(), str(value))
        for name, value in attrs.items()
        if name.lower().startswith("data-") and value is not None and name.lower() not in taken
    ]


def _bool_attr(value: bool) -> str:
    return "true" if value else "false"


def _lookup(row: Mapping[str, Any], key: str) -> Any:
    """Row value by column name; falls back to a case-insensitive match."""
    if key in row:
        return row[key]
    lowered = key.lower()
    for name, value in row.items():
        if str(name).lower() == lowered:
            return value
    return None


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return _bool_attr(value)
    return str(value)


def page_window(result: PaginationResult) -> list[int]:
    """Page numbers to link around the current page."""
    if result.total_pages == 0:
        return []
    first = max(1, result.page - PAGE_LINK_RADIUS)
    last = min(result.total_pages, result.page + PAGE_LINK_RADIUS)
    return list(range(first, last + 1))


def page_info(result: PaginationResult) -> str:
    if result.total_row_count == 0:
        return "No records"
    if result.is_empty:
        return f"Page {result.page} of {result.total_pages}"
    return f"Showing {result.start_row}-{result.end_row} of {result.total_row_count}"


# =============================================================================
# Renderer
# =============================================================================


class MarkupRenderer:
    """Render closed frames to HTML, one method per container tag."""

    def __init__(self, config: UIConfig | None = None) -> None:
        self.config = config or UIConfig()
        self._renderers = {
            "grid": self.render_grid,
            "layout": self.render_layout,
            "pod": self.render_pod,
            "div": self.render_div,
            "gridupdate": self.render_grid_update,
            "ajaximport": self.render_ajax_import,
        }

    def render(self, frame: ComponentFrame) -> str:
        """Markup for ``frame``; tags without markup of their own yield ``""``."""
        renderer = self._renderers.get(frame.tag)
        if renderer is None:
            return ""
        return renderer(frame)

    # -------------------------------------------------------------------------
    # Grid
    # -------------------------------------------------------------------------

    def grid_pagination(self, frame: ComponentFrame) -> PaginationResult | None:
        """Pagination for a grid with a page size and rows (query or gridrow tags), else None."""
        query = frame.get("query")
        page_size = frame.get("pageSize")
        total = len(query) if query is not None else len(frame.rows)
        if not page_size or (query is None and not frame.rows):
            return None
        return paginate(total, frame.get("page", 1), page_size)

    def render_grid(self, frame: ComponentFrame) -> str:
        attrs = frame.attributes
        sortable = bool(frame.get("sortable", False))
        editable = bool(frame.get("editable", False))
        select_mode = frame.get("selectMode", "none")
        query = frame.get("query")
        pagination = self.grid_pagination(frame)

        columns = [self._grid_column(col, sortable, editable) for col in frame.columns]
        sample = query[0] if query else (frame.rows[0].data if frame.rows else None)
        if not columns and sample:
            # No gridcolumn tags: one column per key of the first row.
            columns = [
                self._grid_column(
                    GridColumn(name=str(key), header=str(key), index=i), sortable, editable
                )
                for i, key in enumerate(sample)
            ]

        if query is not None:
            source_rows = pagination.window(query) if pagination else list(query)
            offset = pagination.start_row - 1 if pagination else 0
            rows = [
                self._grid_row(offset + i, row, columns) for i, row in enumerate(source_rows)
            ]
        else:
            literal = pagination.window(frame.rows) if pagination else frame.rows
            rows = [self._grid_row(r.index, r.data, columns) for r in literal]

        data: list[tuple[str, str]] = [
            ("data-name", frame.get("name", "")),
            ("data-sortable", _bool_attr(sortable)),
            ("data-editable", _bool_attr(editable)),
            ("data-select-mode", select_mode),
        ]
        if frame.get("pageSize"):
            data.append(("data-page-size", str(frame.get("pageSize"))))
        if pagination:
            data.append(("data-page", str(pagination.page)))
            data.append(("data-total-pages", str(pagination.total_pages)))
            data.append(("data-total-rows", str(pagination.total_row_count)))
        if frame.get("source"):
            data.append(("data-source", frame.get("source")))
        data.extend(passthrough_data(attrs, data))

        grid = {
            "id": frame.id,
            "name": frame.get("name", ""),
            "classes": join_classes(
                "bx-grid",
                "bx-grid-sortable" if sortable else None,
                "bx-grid-editable" if editable else None,
                "bx-grid-striped" if frame.get("stripeRows", True) else None,
                "bx-grid-selectable" if select_mode != "none" else None,
                frame.get("class"),
            ),
            "style": join_styles(
                *size_styles(attrs),
                *mapped_styles(attrs, STYLE_MAP, FLAG_STYLE_MAP),
                frame.get("style"),
            ),
            "data": data,
            "select_mode": select_mode,
            "show_headers": bool(frame.get("showHeaders", True)),
            "has_query": query is not None,
            "colspan": len(columns) + (1 if select_mode != "none" else 0),
        }

        header_styles = mapped_styles(attrs, HEADER_STYLE_MAP, HEADER_FLAG_STYLE_MAP)
        for column in columns:
            column["header_style"] = join_styles(*column.pop("header_base"), *header_styles)

        return render_fragment(
            "grid.html",
            grid=grid,
            columns=columns,
            rows=rows,
            pagination=pagination,
            page_numbers=page_window(pagination) if pagination else [],
            page_info=page_info(pagination) if pagination else "",
        )

    def _grid_column(self, column: GridColumn, sortable: bool, editable: bool) -> dict[str, Any]:
        col_sortable = column.get("sortable", sortable)
        col_editable = column.get("editable", editable)
        hidden = not column.get("display", True)
        header_base = []
        if column.get("width"):
            header_base.append(f"width: {column.get('width')}")
        if column.get("headerAlign"):
            header_base.append(f"text-align: {column.get('headerAlign')}")
        if hidden:
            header_base.append("display: none")

        cell_styles = []
        if column.get("dataAlign"):
            cell_styles.append(f"text-align: {column.get('dataAlign')}")
        if hidden:
            cell_styles.append("display: none")

        values = [v.strip() for v in column.get("values", "").split(",")] if column.get("values") else []
        labels = (
            [v.strip() for v in column.get("valuesDisplay", "").split(",")]
            if column.get("valuesDisplay")
            else []
        )

        header_data = [("data-type", column.get("type", "string"))]
        if not col_sortable:
            header_data.append(("data-sortable", "false"))
        if column.get("numberFormat"):
            header_data.append(("data-number-format", column.get("numberFormat")))
        if column.get("dateFormat"):
            header_data.append(("data-date-format", column.get("dateFormat")))

        return {
            "name": column.name,
            "header": column.header,
            "header_data": header_data,
            "type": column.get("type", "string"),
            "sortable": col_sortable,
            "readonly": editable and not col_editable,
            "header_classes": join_classes(
                "bx-grid-column-header",
                "bx-grid-sortable-column" if col_sortable else None,
                "bx-grid-hidden" if hidden else None,
            ),
            "header_base": header_base,
            "cell_style": join_styles(*cell_styles),
            "display_map": dict(zip(values, labels)),
            "href": column.get("href"),
            "href_key": column.get("hrefKey"),
            "target": column.get("target"),
        }

    def _grid_row(
        self, index: int, row: Mapping[str, Any], columns: Sequence[dict[str, Any]]
    ) -> dict[str, Any]:
        cells = []
        for column in columns:
            raw = _lookup(row, column["name"])
            text = _format_value(raw)
            text = column["display_map"].get(text, text)
            cells.append(
                {
                    "column": column["name"],
                    "type": column["type"],
                    "text": text,
                    "style": column["cell_style"],
                    "readonly": column["readonly"],
                    "href": self._cell_href(column, row),
                    "target": column["target"],
                }
            )
        return {"index": index, "cells": cells}

    @staticmethod
    def _cell_href(column: Mapping[str, Any], row: Mapping[str, Any]) -> str | None:
        href = column["href"]
        if not href:
            return None
        key = column["href_key"]
        if not key:
            return href
        separator = "&" if "?" in href else "?"
        return f"{href}{separator}{key}={_format_value(_lookup(row, key))}"

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def render_layout(self, frame: ComponentFrame) -> str:
        attrs = frame.attributes
        layout_type = frame.get("type")
        areas = [self._layout_area(area, layout_type) for area in frame.areas]

        regions: dict[str, dict[str, Any] | None] = dict.fromkeys(
            ("top", "bottom", "left", "right", "center")
        )
        if layout_type == "border":
            for area in areas:
                regions[area["position"]] = area

        data = [("data-layout-type", layout_type)]
        if frame.get("name"):
            data.append(("data-name", frame.get("name")))
        data.extend(passthrough_data(attrs, data))

        layout = {
            "id": frame.id,
            "type": layout_type,
            "classes": join_classes(
                "bx-layout",
                f"bx-layout-{layout_type}",
                "bx-layout-fill-height" if frame.get("fillHeight") else None,
                "bx-layout-fit-window" if frame.get("fitToWindow") else None,
                f"bx-layout-align-{frame.get('align')}" if frame.get("align") else None,
                frame.get("class"),
            ),
            "style": join_styles(*size_styles(attrs), frame.get("style")),
            "data": data,
        }
        return render_fragment("layout.html", layout=layout, areas=areas, regions=regions)

    def _layout_area(self, area: LayoutArea, layout_type: str) -> dict[str, Any]:
        position = area.position
        styles: list[str] = []
        size = area.get("size")
        if layout_type == "border":
            axis = "height" if position in ("top", "bottom") else "width"
            if position != "center":
                if size:
                    styles.append(f"{axis}: {size}")
                if area.get("minSize"):
                    styles.append(f"min-{axis}: {area.get('minSize')}")
                if area.get("maxSize"):
                    styles.append(f"max-{axis}: {area.get('maxSize')}")
        elif layout_type in ("hbox", "vbox") and size:
            axis = "width" if layout_type == "hbox" else "height"
            styles.append(f"{axis}: {size}")
        if area.get("align"):
            styles.append(f"text-align: {area.get('align')}")
        if area.get("overflow"):
            styles.append(f"overflow: {area.get('overflow')}")
        styles.append(area.get("style", ""))

        data = [("data-area-index", str(area.index))]
        if area.title:
            data.append(("data-title", area.title))
        if area.get("source"):
            data.append(("data-source", area.get("source")))
        if layout_type == "accordion" and not area.get("collapsible", True):
            data.append(("data-collapsible", "false"))
        if layout_type == "border" and position != "center" and not area.get("splitter", True):
            data.append(("data-splitter", "false"))

        return {
            "id": area.id,
            "title": area.title or "",
            "position": position,
            "source": area.get("source"),
            "content": trusted(area.content),
            "collapsed": layout_type == "accordion" and bool(area.get("initCollapsed")),
            "style": join_styles(*styles),
            "data": data,
        }

    # -------------------------------------------------------------------------
    # Pod and Div
    # -------------------------------------------------------------------------

    def render_pod(self, frame: ComponentFrame) -> str:
        attrs = frame.attributes
        data = []
        if frame.get("name"):
            data.append(("data-name", frame.get("name")))
        if frame.get("source"):
            data.append(("data-source", frame.get("source")))
        data.extend(passthrough_data(attrs, data))

        overflow = frame.get("overflow")
        pod = {
            "id": frame.id,
            "title": frame.get("title"),
            "classes": join_classes("bx-pod", frame.get("class")),
            "style": join_styles(*size_styles(attrs), frame.get("style")),
            "header_style": join_styles(frame.get("headerStyle")),
            "body_style": join_styles(
                f"overflow: {overflow}" if overflow else None, frame.get("bodyStyle")
            ),
            "source": frame.get("source"),
            "content": trusted(frame.content),
            "data": data,
        }
        return render_fragment("pod.html", pod=pod)

    def render_div(self, frame: ComponentFrame) -> str:
        attrs = frame.attributes
        bind = frame.get("bind")
        bind_on_load = bool(frame.get("bindOnLoad", True))
        data = []
        if bind:
            data.append(("data-bind", bind))
            data.append(("data-bind-on-load", _bool_attr(bind_on_load)))
        data.extend(passthrough_data(attrs, data))

        div = {
            "id": frame.id,
            "tag_name": frame.get("tagName", "div"),
            "classes": join_classes(
                "bx-div",
                "bx-div-bind" if bind else None,
                "bx-bind-on-load" if bind and bind_on_load else None,
                frame.get("class"),
            ),
            "style": join_styles(*size_styles(attrs), frame.get("style")),
            "loading": bool(bind) and bind_on_load,
            "content": trusted(frame.content),
            "data": data,
        }
        return render_fragment("div.html", div=div)

    # -------------------------------------------------------------------------
    # GridUpdate and AjaxImport
    # -------------------------------------------------------------------------

    def render_grid_update(self, frame: ComponentFrame) -> str:
        grid_name = frame.get("grid")
        if grid_update_mode(frame.attributes) == "database":
            method, action = "POST", self.config.grid_update_endpoint
        else:
            method, action = frame.get("method", "POST"), frame.get("url")
        form = {
            "id": frame.id or f"gridupdate_{grid_name}",
            "grid_name": grid_name,
            "method": method,
            "action": action,
        }
        return render_fragment("grid_update.html", form=form)

    def import_tags(self, frame: ComponentFrame) -> list[str]:
        """Tags whose assets an ajaximport pulls in, in asset order."""
        requested = frame.get("tags")
        if not requested:
            return list(self.config.default_import_tags)
        wanted = {t.strip().lower() for t in requested.split(",") if t.strip()}
        return [t for t in ASSET_TAGS if t in wanted]

    def render_ajax_import(self, frame: ComponentFrame) -> str:
        css_base = (frame.get("cssSrc") or self.config.css_base).rstrip("/")
        script_base = (frame.get("scriptSrc") or self.config.script_base).rstrip("/")
        tags = self.import_tags(frame)

        stylesheets = [f"{css_base}/boxlang-ajax-core.css"]
        stylesheets.extend(f"{css_base}/boxlang-{tag}.css" for tag in tags)
        scripts = [f"{script_base}/boxlang-ajax-core.js"]
        scripts.extend(f"{script_base}/boxlang-{tag}.js" for tag in tags)
        if not frame.get("tags"):
            scripts.append(f"{script_base}/boxlang-ajaxproxy.js")

        logger.debug("ajaximport assets for %s: %d stylesheets", ", ".join(tags), len(stylesheets))
        return render_fragment("ajax_import.html", stylesheets=stylesheets, scripts=scripts)

