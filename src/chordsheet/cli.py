import logging
import sys
from pathlib import Path

import click

from .chordpro import ChordProFormatter
from .config import Settings
from .exceptions import ChordSheetError
from .inline import render_content
from .keys import CANONICAL_KEY_NAMES
from .models import Song
from .stacked import convert_stacked
from .transpose import transpose_content

_KEY_CHOICE = click.Choice(CANONICAL_KEY_NAMES, case_sensitive=True)


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _write(text: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(text)
        return
    Path(output_path).write_text(text + "\n", encoding="utf-8")
    click.echo(f"Written to {output_path}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Convert, transpose and render chord sheets.

    \b
    Content uses inline chords: "[G]Amazing [D]grace".
    FILE arguments accept "-" for stdin.
    """
    try:
        settings = Settings.from_env()
    except ChordSheetError as exc:
        _fail(exc)
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@main.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write the converted content to PATH instead of stdout.")
@click.option("--key-only", is_flag=True, default=False,
              help="Print only the detected key.")
@click.pass_obj
def import_(settings: Settings, source, output_path: str | None, key_only: bool) -> None:
    """Convert a stacked chord sheet (chords above lyrics) to inline chords."""
    result = convert_stacked(source.read().rstrip("\n"), default_key=settings.default_key)
    if key_only:
        click.echo(result.key)
        return
    click.echo(f"Key: {result.key}", err=True)
    _write(result.content, output_path)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--from", "from_key", required=True, type=_KEY_CHOICE, help="Key the content is in.")
@click.option("--to", "to_key", required=True, type=_KEY_CHOICE, help="Key to transpose to.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH")
@click.pass_obj
def transpose(settings: Settings, source, from_key: str, to_key: str, output_path: str | None) -> None:
    """Transpose inline content from one key to another."""
    try:
        text = transpose_content(
            source.read().rstrip("\n"), from_key, to_key, settings.chord_line_threshold
        )
    except ChordSheetError as exc:
        _fail(exc)
    _write(text, output_path)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--lyrics-only", is_flag=True, default=False, help="Drop the chord rows.")
@click.option("--from", "from_key", default=None, type=_KEY_CHOICE)
@click.option("--to", "to_key", default=None, type=_KEY_CHOICE)
@click.pass_obj
def render(settings: Settings, source, lyrics_only: bool, from_key: str | None, to_key: str | None) -> None:
    """Print inline content with chords on their own row above the lyrics."""
    content = source.read().rstrip("\n")
    if (from_key is None) != (to_key is None):
        raise click.UsageError("--from and --to must be given together")
    if from_key and to_key:
        content = transpose_content(content, from_key, to_key, settings.chord_line_threshold)

    for rendered in render_content(content, show_chords=not lyrics_only):
        if rendered.chord_row is not None:
            click.echo(rendered.chord_row)
        click.echo(rendered.lyric_row)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--title", required=True)
@click.option("--artist", required=True)
@click.option("--key", "key", default=None, type=_KEY_CHOICE, help="Key the content is in.")
@click.option("--to", "to_key", default=None, type=_KEY_CHOICE,
              help="Transpose to this key before exporting (needs --key).")
@click.option("--capo", default=None, type=int)
@click.option("-o", "--output", "output_path", default=None, metavar="PATH")
@click.pass_obj
def chordpro(
    settings: Settings,
    source,
    title: str,
    artist: str,
    key: str | None,
    to_key: str | None,
    capo: int | None,
    output_path: str | None,
) -> None:
    """Export inline content as ChordPro."""
    content = source.read().rstrip("\n")
    if to_key:
        if not key:
            raise click.UsageError("--to needs --key")
        content = transpose_content(content, key, to_key, settings.chord_line_threshold)
        key = to_key

    song = Song(title=title, artist=artist, content=content, key=key, capo=capo)
    _write(ChordProFormatter().render(song).rstrip("\n"), output_path)
