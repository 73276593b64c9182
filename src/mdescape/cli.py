"""mdescape CLI - Main entry point.

Commands:
- text: Escape a single string
- tree: Escape every text node of an mdast JSON document
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from mdescape import __version__
from mdescape.config import load_config, merge_cli_overrides
from mdescape.escape import escape_all_chars, escape_common_chars
from mdescape.exceptions import MdEscapeError, ResourceExhaustedError
from mdescape.tree import escape_markdown_entities

app = typer.Typer(
    help="mdescape - escape literal markdown characters in document trees.",
    no_args_is_help=True,
)

err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[bold red]✗[/] {message}", highlight=False)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mdescape {__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """mdescape - escape literal markdown characters in document trees."""
    pass


@app.command()
def text(
    value: Annotated[str, typer.Argument(help="Text to escape")],
    common_only: Annotated[
        bool,
        typer.Option(
            "--common-only",
            help="Skip leading heading, list or quote marker escaping",
        ),
    ] = False,
    max_length: Annotated[
        Optional[int], typer.Option("--max-length", help="Maximum accepted length")
    ] = None,
) -> None:
    """Escape markdown entities in a single string.

    Examples:
        mdescape text '*a*'                        # \\*a\\*
        mdescape text '# a' --common-only          # # a
    """
    try:
        config = merge_cli_overrides(load_config(), max_value_length=max_length)
        limit = config.max_value_length
        if limit is not None and len(value) > limit:
            raise ResourceExhaustedError(len(value), limit)
    except MdEscapeError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    escaped = escape_common_chars(value) if common_only else escape_all_chars(value)
    typer.echo(escaped)


@app.command()
def tree(
    source: Annotated[
        str, typer.Argument(help="mdast JSON file, or '-' for stdin")
    ] = "-",
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write result to file")
    ] = None,
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indentation")] = None,
    max_length: Annotated[
        Optional[int], typer.Option("--max-length", help="Maximum accepted value length")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log rewritten nodes")] = False,
) -> None:
    """Escape every text and html node of an mdast JSON tree.

    Examples:
        mdescape tree doc.json -o escaped.json
        cat doc.json | mdescape tree --indent 2
    """
    try:
        config = merge_cli_overrides(
            load_config(),
            max_value_length=max_length,
            log_level="DEBUG" if verbose else None,
        )
    except MdEscapeError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    _setup_logging(config.log_level)

    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text()
        document = json.loads(raw)
    except OSError as e:
        print_error(f"Cannot read {source}: {e}")
        raise typer.Exit(1) from e
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in {source}: {e}")
        raise typer.Exit(1) from e

    try:
        escaped = escape_markdown_entities(document, config=config)
    except MdEscapeError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    result = json.dumps(escaped, indent=indent, ensure_ascii=False)
    if output is None:
        typer.echo(result)
    else:
        output.write_text(result + "\n")
        err_console.print(f"[bold green]✓[/] Wrote {output}", highlight=False)


if __name__ == "__main__":
    app()
