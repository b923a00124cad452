"""
compat-ui - server-side rendering for declarative UI tags.

Turns nested grid, layout, pod, div and AJAX tags into HTML markup with
``bx-*`` classes and ``data-*`` attributes, plus the client script that
wires sorting, paging, editing, binds and tab/accordion switching.
"""

from __future__ import annotations

from ._version import get_version
from .core.bind import CfcCall, Generic, UrlBind, parse_bind
from .core.errors import (
    CompatUIError,
    ConflictingAttributes,
    InvalidArgument,
    InvalidAttributeValue,
    InvalidNesting,
    MissingArgument,
    MissingRequiredAttribute,
    UnknownTag,
)
from .core.pagination import PaginationResult, paginate
from .runtime.functions import ajax_link, ajax_on_load, query_convert_for_grid
from .runtime.tags import DocumentRenderer, Tag, render_document

__version__ = get_version()

__all__ = [
    "__version__",
    "CfcCall",
    "Generic",
    "UrlBind",
    "parse_bind",
    "CompatUIError",
    "ConflictingAttributes",
    "InvalidArgument",
    "InvalidAttributeValue",
    "InvalidNesting",
    "MissingArgument",
    "MissingRequiredAttribute",
    "UnknownTag",
    "PaginationResult",
    "paginate",
    "ajax_link",
    "ajax_on_load",
    "query_convert_for_grid",
    "DocumentRenderer",
    "Tag",
    "render_document",
]
