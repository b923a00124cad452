"""
Bind expression parser.

A bind expression names a remote data source in a single attribute value::

    cfc:app.services.UserService.getUsers(status, page)
    url:/api/users
    /api/users
    https://example.com/feed

``parse_bind`` never raises: anything it cannot read as a component call
or a URL comes back as ``Generic`` so callers can still emit a warning stub.
"""

from __future__ import annotations

import logging
import re
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from compat_ui.core.attributes import is_js_identifier

logger = logging.getLogger(__name__)

# cfc:<dotted.path>.<method>(<args>)
_CFC_RE = re.compile(r"^cfc:\s*(?P<target>[\w$.]+)\s*\((?P<args>[^()]*)\)\s*$", re.IGNORECASE)


class CfcCall(BaseModel):
    """Remote component method call; params are names resolved at call time."""

    model_config = {"frozen": True}

    kind: Literal["cfc"] = "cfc"
    component_path: str
    method_name: str
    params: tuple[str, ...] = ()


class UrlBind(BaseModel):
    """Plain URL fetched with GET."""

    model_config = {"frozen": True}

    kind: Literal["url"] = "url"
    url: str


class Generic(BaseModel):
    """Unsupported bind syntax, kept verbatim for a runtime warning."""

    model_config = {"frozen": True}

    kind: Literal["generic"] = "generic"
    raw: str


BindDescriptor = Annotated[CfcCall | UrlBind | Generic, Field(discriminator="kind")]


def parse_bind(expr: str) -> CfcCall | UrlBind | Generic:
    """Parse a bind expression into a call descriptor.

    Args:
        expr: The bind attribute value.

    Returns:
        ``CfcCall`` for ``cfc:path.method(a,b)``, ``UrlBind`` for ``url:``
        prefixed values or anything that looks like a path/URL, ``Generic``
        for everything else (including malformed ``cfc:`` expressions).
    """
    text = expr.strip()

    if text[:4].lower() == "cfc:":
        call = _parse_cfc(text)
        if call is not None:
            return call
        logger.warning("Malformed cfc bind expression, falling back to generic: %s", expr)
        return Generic(raw=expr)

    if text[:4].lower() == "url:":
        return UrlBind(url=text[4:].strip())

    if "/" in text or text.lower().startswith("http"):
        return UrlBind(url=text)

    logger.warning("Unsupported bind expression: %s", expr)
    return Generic(raw=expr)


def _parse_cfc(text: str) -> CfcCall | None:
    match = _CFC_RE.match(text)
    if match is None:
        return None

    component_path, dot, method_name = match.group("target").rpartition(".")
    if not dot or not component_path or not method_name:
        return None

    params: list[str] = []
    body = match.group("args").strip()
    if body:
        for raw in body.split(","):
            name = raw.strip()
            if not is_js_identifier(name):
                return None
            params.append(name)

    return CfcCall(
        component_path=component_path,
        method_name=method_name,
        params=tuple(params),
    )
