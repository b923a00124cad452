"""
compat-ui runtime: markup rendering, script emission and the tag driver.
"""

from .functions import ajax_link, ajax_on_load, query_convert_for_grid
from .markup import MarkupRenderer
from .scripts import ScriptEmitter
from .tags import DocumentRenderer, Tag, render_document
from .template_renderer import configure_templates, get_jinja_env, render_fragment

__all__ = [
    "ajax_link",
    "ajax_on_load",
    "query_convert_for_grid",
    "MarkupRenderer",
    "ScriptEmitter",
    "DocumentRenderer",
    "Tag",
    "render_document",
    "configure_templates",
    "get_jinja_env",
    "render_fragment",
]
