"""
Jinja2 environment for tag markup and script templates.

HTML templates (``*.html``) are autoescaped; script templates (``*.js``)
are not, so every value interpolated into script goes through the
``js_str`` filter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

# Template directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': "\\x22",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "<": "\\x3C",
    ">": "\\x3E",
    "&": "\\x26",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_escape(value: Any) -> str:
    """Escape text for use inside a single-quoted JavaScript string."""
    if value is None:
        return ""
    return "".join(_JS_ESCAPES.get(ch, ch) for ch in str(value))


def _js_str_filter(value: Any) -> str:
    """Render a value as a single-quoted JavaScript string literal."""
    return f"'{js_escape(value)}'"


def _js_bool_filter(value: Any) -> str:
    """Render a truthy value as a JavaScript boolean literal."""
    return "true" if value else "false"


def _js_comment_filter(value: Any) -> str:
    """Flatten text onto one line so it can sit in a // comment."""
    text = " ".join(str(value or "").split())
    return text.replace("</", "<\\/")


def create_jinja_env(templates_dir: Path | None = None) -> Environment:
    """Create and configure the Jinja2 environment.

    Args:
        templates_dir: Optional override directory searched before the
            packaged templates.
    """
    search_path = [str(TEMPLATES_DIR)]
    if templates_dir and templates_dir.is_dir():
        search_path.insert(0, str(templates_dir))

    env = Environment(
        loader=FileSystemLoader(search_path),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["js_str"] = _js_str_filter
    env.filters["js_bool"] = _js_bool_filter
    env.filters["js_comment"] = _js_comment_filter

    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def configure_templates(templates_dir: Path | None = None) -> None:
    """Reconfigure the shared environment.

    Templates in ``templates_dir`` replace packaged ones of the same name;
    ``None`` restores the packaged set.
    """
    global _env
    _env = create_jinja_env(templates_dir)


def render_fragment(template_name: str, **kwargs: Any) -> str:
    """
    Render one template.

    Args:
        template_name: Template path relative to templates/.
        **kwargs: Template variables.

    Returns:
        Rendered text.
    """
    env = get_jinja_env()
    template = env.get_template(template_name)
    return template.render(**kwargs)


def trusted(html: str) -> Markup:
    """Mark captured body output as already-rendered HTML."""
    return Markup(html)
