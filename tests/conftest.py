"""Shared pytest fixtures for compat-ui tests."""

from __future__ import annotations

import pytest

from compat_ui.core.config import UIConfig
from compat_ui.runtime.tags import DocumentRenderer, Tag, render_document


@pytest.fixture
def renderer() -> DocumentRenderer:
    """A fresh document renderer with default config and counter ids."""
    return DocumentRenderer(UIConfig())


@pytest.fixture
def render():
    """Render a list of nodes (or a single tag) to HTML."""

    def _render(*nodes: Tag | str, config: UIConfig | None = None) -> str:
        return render_document(list(nodes), config)

    return _render

