"""
Boundary functions callable from host templates.

These mirror the tag layer for things that are values rather than
elements: a paged view of a result set, an AJAX link href and an on-ready
call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from compat_ui.core.attributes import is_js_identifier
from compat_ui.core.config import UIConfig
from compat_ui.core.errors import InvalidArgument, MissingArgument
from compat_ui.core.pagination import paginate
from compat_ui.runtime.scripts import ScriptEmitter
from compat_ui.runtime.template_renderer import js_escape


def query_convert_for_grid(
    rows: Sequence[Mapping[str, Any]] | None = None,
    page: int | None = None,
    page_size: int | None = None,
) -> dict[str, Any]:
    """
    Slice a result set to one grid page.

    Args:
        rows: Full result set.
        page: 1-based page number.
        page_size: Rows per page.

    Returns:
        ``TOTALROWCOUNT``, ``PAGE``, ``PAGESIZE``, ``TOTALPAGES``,
        ``STARTROW``, ``ENDROW`` and the windowed ``ROWS``.

    Raises:
        MissingArgument: if any argument is omitted.
        InvalidArgument: if page or page size is below 1.
    """
    missing = [
        name
        for name, value in (("query", rows), ("page", page), ("pageSize", page_size))
        if value is None
    ]
    if missing:
        raise MissingArgument(
            f"QueryConvertForGrid requires {', '.join(missing)} "
            f"({'argument is' if len(missing) == 1 else 'arguments are'} missing)"
        )

    result = paginate(len(rows), page, page_size)
    return {
        "TOTALROWCOUNT": result.total_row_count,
        "PAGE": result.page,
        "PAGESIZE": result.page_size,
        "TOTALPAGES": result.total_pages,
        "STARTROW": result.start_row,
        "ENDROW": result.end_row,
        "ROWS": result.window(rows),
    }


def ajax_link(url: str | None = None) -> str:
    """
    Href that loads ``url`` into the nearest AJAX container.

    Returns:
        A ``javascript:void(...)`` URL calling ``BoxLangAjax.utils.handleAjaxLink``.

    Raises:
        MissingArgument: if ``url`` is missing or blank.
    """
    if url is None or not str(url).strip():
        raise MissingArgument("url parameter is required for AjaxLink")
    escaped = js_escape(str(url).strip())
    return (
        "javascript:void("
        "window.BoxLangAjax && BoxLangAjax.utils "
        f"? BoxLangAjax.utils.handleAjaxLink('{escaped}', event) "
        ": console.error('BoxLang AJAX not initialized')"
        ")"
    )


def ajax_on_load(function_name: str | None = None, config: UIConfig | None = None) -> str:
    """
    Script block calling ``function_name`` once the DOM is ready.

    Raises:
        MissingArgument: if ``function_name`` is missing or blank.
        InvalidArgument: if it is not a valid JavaScript identifier.
    """
    if function_name is None or not str(function_name).strip():
        raise MissingArgument("functionName parameter is required for AjaxOnLoad")
    name = str(function_name).strip()
    if not is_js_identifier(name):
        raise InvalidArgument(f"functionName '{name}' must be a valid JavaScript function name")
    return ScriptEmitter(config).on_load(name)
