"""
Renders Markdown notes to preview HTML from the command line.
Also reports document stats and replays the editor's newline handling.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, PreviewConfig, build_config
from .exceptions import RenderError
from .filesystem import (
    default_save_name,
    get_max_file_size,
    is_svg_file,
    normalize_filepath,
    read_document,
    write_text_atomic,
)
from .lists import apply_edit, on_newline
from .renderer import render_html
from .stats import compute_stats
from .transformer import transform

__all__ = ["cli"]


def _load(filepath: str, **overrides: object) -> tuple[Path, str, PreviewConfig]:
    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(path.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        content = read_document(path, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    return path, content, config


@click.group()
@click.version_option(package_name="keep-preview")
def cli():
    """Live Markdown preview tools."""


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML to this file instead of stdout.",
)
@click.option("--base-url", help="URL that relative SVG image paths are resolved against.")
@click.option(
    "--line-breaks/--no-line-breaks",
    default=None,
    help="Render single newlines as line breaks.",
)
def render(
    filepath: str,
    output: str | None = None,
    base_url: str | None = None,
    line_breaks: bool | None = None,
):
    """
    Render a Markdown file to preview HTML.

    SVG files are passed through unchanged, as the editor previews them as-is.

    Args:
        filepath: Path to the Markdown or SVG file to render.
        output: Optional destination file for the HTML.
        base_url: Override for the URL relative SVG paths resolve against.
        line_breaks: Override for rendering single newlines as ``<br />``.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file cannot be read, a Markdown extension
            cannot be loaded, or the output cannot be written.

    Examples:
        keep-preview render notes.md -o notes.html --base-url https://example.com/
    """
    path, content, config = _load(filepath, base_url=base_url, line_breaks=line_breaks)
    click.echo(f"Loaded: {path.name}", err=True)

    if is_svg_file(path):
        html = content
    else:
        try:
            html = render_html(content, config)
        except RenderError as error:
            raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(html)
        return

    target = Path(output)
    try:
        write_text_atomic(target, html if html.endswith("\n") else f"{html}\n")
    except IOError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Saved: {target.name}", err=True)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def stats(filepath: str):
    """Print word and character counts of a document as the preview sees it."""
    path, content, _ = _load(filepath)
    document_stats = compute_stats(content if is_svg_file(path) else transform(content))
    click.echo(f"words: {document_stats.words}")
    click.echo(f"characters: {document_stats.characters}")


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--cursor",
    type=click.IntRange(min=0),
    help="Cursor offset of the newline keypress (defaults to the end of the text).",
)
@click.option("--save", is_flag=True, help="Write the result back instead of printing it.")
def newline(filepath: str, cursor: int | None = None, save: bool = False):
    """
    Replay a newline keypress with list continuation.

    Prints the buffer after the keypress; the new cursor offset goes to stderr.
    With ``--save`` the buffer is written back to a Markdown file instead.

    Examples:
        keep-preview newline todo.md --cursor 42
    """
    path, content, _ = _load(filepath)
    if cursor is None:
        cursor = len(content.rstrip("\n"))

    text, new_cursor = apply_edit(content, cursor, on_newline(content, cursor))

    if save:
        target = path.with_name(default_save_name(path.name))
        try:
            write_text_atomic(target, text)
        except IOError as error:
            raise click.ClickException(str(error)) from error
        click.echo(f"Saved: {target.name}", err=True)
    else:
        click.echo(text, nl=False)
    click.echo(f"cursor: {new_cursor}", err=True)


if __name__ == "__main__":
    cli()
