"""
compat-ui command line.

Commands:
- render: Render a JSON tag tree to HTML
- bind: Show how a bind expression is parsed
- paginate: Show the row window for one page
- version: Print the package version
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from compat_ui._version import get_version
from compat_ui.core.bind import BindDescriptor, parse_bind
from compat_ui.core.config import load_config
from compat_ui.core.errors import CompatUIError
from compat_ui.core.pagination import paginate
from compat_ui.runtime.tags import Tag, render_document
from compat_ui.runtime.template_renderer import configure_templates

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    help="Render grid, layout, pod and AJAX tags to HTML and client script.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log debug output to stderr")
    ] = False,
) -> None:
    """compat-ui CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(name="render")
def render_command(
    source: Annotated[Path, typer.Argument(help="JSON file holding a tag or a list of tags")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (default: stdout)")
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="compat-ui.toml to read [ui] from")
    ] = None,
    templates: Annotated[
        Path | None,
        typer.Option("--templates", "-t", help="Directory of templates overriding the packaged ones"),
    ] = None,
) -> None:
    """
    Render a document described as JSON.

    Each node is either a string (literal HTML) or an object with ``name``,
    ``attributes`` and ``children``.

    Examples:
        compat-ui render page.json
        compat-ui render page.json -o page.html
        compat-ui render page.json -t my_templates/
    """
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Error reading {source}: {e}", err=True)
        raise typer.Exit(code=1)

    if templates is not None:
        configure_templates(templates)

    nodes = data if isinstance(data, list) else [data]
    try:
        tree = TypeAdapter(list[Tag | str]).validate_python(nodes)
        config = load_config(config_path)
        html = render_document(tree, config)
    except ValidationError as e:
        typer.echo(f"Invalid tag tree: {e}", err=True)
        raise typer.Exit(code=1)
    except (CompatUIError, ValueError) as e:
        typer.echo(f"Render error: {e}", err=True)
        raise typer.Exit(code=1)

    if output:
        output.write_text(html, encoding="utf-8")
        logger.info("Wrote %d characters to %s", len(html), output)
        typer.echo(f"Rendered document written to {output}")
    else:
        typer.echo(html)


@app.command(name="bind")
def bind_command(
    expression: Annotated[str, typer.Argument(help="Bind expression, e.g. cfc:app.Users.list(id)")],
) -> None:
    """Print the parsed form of a bind expression as JSON."""
    descriptor = parse_bind(expression)
    adapter: TypeAdapter[BindDescriptor] = TypeAdapter(BindDescriptor)
    typer.echo(adapter.dump_json(descriptor, indent=2).decode())


@app.command(name="paginate")
def paginate_command(
    total: Annotated[int, typer.Argument(help="Total row count")],
    page: Annotated[int, typer.Argument(help="1-based page number")],
    size: Annotated[int, typer.Argument(help="Rows per page")],
) -> None:
    """Show the row window and page count for one page."""
    try:
        result = paginate(total, page, size)
    except CompatUIError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    table = Table(title="Pagination")
    table.add_column("Field", style="dim")
    table.add_column("Value", justify="right")
    table.add_row("Total rows", str(result.total_row_count))
    table.add_row("Page", str(result.page))
    table.add_row("Page size", str(result.page_size))
    table.add_row("Total pages", str(result.total_pages))
    table.add_row("Start row", str(result.start_row))
    table.add_row("End row", str(result.end_row))
    console.print(table)
    if result.is_empty:
        console.print("[dim]Page holds no rows.[/dim]")


@app.command(name="version")
def version_command() -> None:
    """Print the installed version."""
    typer.echo(f"compat-ui {get_version()}")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
