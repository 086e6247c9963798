import logging
from pathlib import Path
from typing import Optional

import typer
from decouple import config as env_config

from . import __version__
from .errors import SnippetRenderError, SnippetTreeError
from .parsing import find_regions, make_parser
from .serializer import reformat_snippets

app = typer.Typer(help="stacksnippets: read and write Stack Snippets in markdown")

logger = logging.getLogger(__name__)

LOG_LEVEL = env_config("STACKSNIPPETS_LOG_LEVEL", default="WARNING")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(level)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    )
):
    """stacksnippets: read and write Stack Snippets in markdown"""
    pass


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnippetRenderError(str(path), str(e)) from e


def _write(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise SnippetRenderError(str(path), str(e)) from e


@app.command()
def render(
    path: Path = typer.Argument(..., help="Markdown file to render"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write html here instead of stdout"),
    verbose: bool = typer.Option(False, help="Show debug logging"),
):
    """
    Render a markdown document, snippets included, to html.
    """
    setup_logging(verbose)
    try:
        html = make_parser().render(_read(path))
        if output:
            _write(output, html)
            logger.info(f"Wrote html to {output}")
        else:
            typer.echo(html, nl=False)
    except SnippetRenderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def normalize(
    path: Path = typer.Argument(..., help="Markdown file to normalize"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file instead of printing"),
    verbose: bool = typer.Option(False, help="Show debug logging"),
):
    """
    Rewrite every snippet in the document in the snippet editor's canonical format.
    """
    setup_logging(verbose)
    try:
        text = reformat_snippets(_read(path))
        if in_place:
            _write(path, text)
        else:
            typer.echo(text, nl=False)
    except SnippetTreeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except SnippetRenderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def check(
    path: Path = typer.Argument(..., help="Markdown file to check"),
    verbose: bool = typer.Option(False, help="Show debug logging"),
):
    """
    Report whether each `begin snippet` marker starts a well-formed snippet.
    """
    setup_logging(verbose)
    try:
        text = _read(path)
    except SnippetRenderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    failures = 0
    found = 0
    for line, result in find_regions(text):
        found += 1
        if result.valid:
            typer.echo(f"{path}:{line + 1}: ok (ends at line {result.end_index + 1})")
        else:
            failures += 1
            typer.echo(f"{path}:{line + 1}: {result.reason}")

    if not found:
        typer.echo(f"{path}: no snippets found")
    if failures:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
