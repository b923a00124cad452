"""
Script emitter.

Each interactive tag gets one ``<script>`` block placed directly after its
markup. Blocks are self-contained: an IIFE that waits for the DOM, looks
its element up by id and marks it initialised, so emitting the same block
twice wires the element only once.
"""

from __future__ import annotations

import logging

from compat_ui.core.bind import parse_bind
from compat_ui.core.config import UIConfig
from compat_ui.core.context import ComponentFrame
from compat_ui.core.tag_specs import grid_update_mode
from compat_ui.runtime.template_renderer import render_fragment

logger = logging.getLogger(__name__)


class ScriptEmitter:
    """Render the behaviour script for a closed frame."""

    def __init__(self, config: UIConfig | None = None) -> None:
        self.config = config or UIConfig()
        self._emitters = {
            "grid": self.grid,
            "gridupdate": self.grid_update,
            "layout": self.layout,
            "pod": self.pod,
            "div": self.div,
            "ajaxproxy": self.ajax_proxy,
            "ajaximport": self.ajax_import,
        }

    def emit(self, frame: ComponentFrame) -> str:
        """Script for ``frame``, or ``""`` when the tag needs none."""
        emitter = self._emitters.get(frame.tag)
        if emitter is None:
            return ""
        script = emitter(frame)
        if script:
            logger.debug("Emitted %s script for %s", frame.tag, frame.id or "(anonymous)")
        return script

    def grid(self, frame: ComponentFrame) -> str:
        return render_fragment(
            "scripts/grid.js",
            grid_id=frame.id,
            grid_name=frame.get("name", ""),
            on_load=frame.get("onLoad"),
            on_edit=frame.get("onEdit"),
            on_sort=frame.get("onSort"),
            on_change=frame.get("onChange"),
        )

    def grid_update(self, frame: ComponentFrame) -> str:
        grid_name = frame.get("grid")
        return render_fragment(
            "scripts/grid_update.js",
            grid_name=grid_name,
            form_id=frame.id or f"gridupdate_{grid_name}",
            mode=grid_update_mode(frame.attributes),
            endpoint=self.config.grid_update_endpoint,
            url=frame.get("url"),
            method=frame.get("method", "POST"),
            data_source=frame.get("dataSource"),
            table_name=frame.get("tableName"),
            table_owner=frame.get("tableOwner"),
            table_qualifier=frame.get("tableQualifier"),
            username=frame.get("username"),
            password=frame.get("password"),
            key_only=frame.get("keyOnly", False),
            on_success=frame.get("onSuccess"),
            on_error=frame.get("onError"),
        )

    def layout(self, frame: ComponentFrame) -> str:
        layout_type = frame.get("type")
        has_source = any(area.get("source") for area in frame.areas)
        if layout_type not in ("tab", "accordion") and not has_source:
            return ""
        return render_fragment("scripts/layout.js", layout_id=frame.id, layout_type=layout_type)

    def pod(self, frame: ComponentFrame) -> str:
        if not frame.get("source"):
            return ""
        return render_fragment(
            "scripts/pod.js", pod_id=frame.id, on_bind_error=frame.get("onBindError")
        )

    def div(self, frame: ComponentFrame) -> str:
        expr = frame.get("bind")
        if not expr:
            return ""
        return render_fragment(
            "scripts/div.js",
            div_id=frame.id,
            bind=parse_bind(expr),
            bind_raw=expr,
            bind_on_load=frame.get("bindOnLoad", True),
            remote_endpoint=self.config.remote_endpoint,
            on_bind_error=frame.get("onBindError"),
        )

    def ajax_proxy(self, frame: ComponentFrame) -> str:
        cfc = frame.get("cfc")
        expr = frame.get("bind")
        class_name = frame.get("jsClassName")
        if cfc and not class_name:
            class_name = cfc.rsplit(".", 1)[-1]
        return render_fragment(
            "scripts/ajax_proxy.js",
            cfc=cfc,
            class_name=class_name,
            bind=parse_bind(expr) if expr else None,
            bind_raw=expr,
            remote_endpoint=self.config.remote_endpoint,
            on_success=frame.get("onSuccess"),
            on_error=frame.get("onError"),
        )

    def ajax_import(self, frame: ComponentFrame) -> str:
        return render_fragment(
            "scripts/ajax_import.js",
            version=self.config.version,
            css_src=(frame.get("cssSrc") or self.config.css_base).rstrip("/"),
            script_src=(frame.get("scriptSrc") or self.config.script_base).rstrip("/"),
            remote_endpoint=self.config.remote_endpoint,
            params=parse_params(frame.get("params")),
        )

    def on_load(self, function_name: str) -> str:
        return render_fragment("scripts/ajax_on_load.js", function_name=function_name)


def parse_params(raw: str | None) -> list[tuple[str, str]]:
    """Parse ``key=value,key2=value2`` into ordered pairs.

    Entries without ``=`` are dropped with a warning.
    """
    pairs: list[tuple[str, str]] = []
    if not raw:
        return pairs
    for entry in raw.split(","):
        key, sep, value = entry.partition("=")
        if not sep or not key.strip():
            logger.warning("Ignoring malformed ajaximport param: %r", entry)
            continue
        pairs.append((key.strip(), value.strip()))
    return pairs
