"""CLI interface for notedraft."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from notedraft.config import NotedraftConfig, load_config, merge_cli_overrides
from notedraft.errors import NotedraftError
from notedraft.notes.locator import NoteLocator, yesterday_stamp
from notedraft.notes.models import NoteRecord
from notedraft.notes.reader import NoteReader
from notedraft.publish.services import prepare_note
from notedraft.render.converter import ArticleRenderer
from notedraft.render.preview import preview_filename, wrap_preview_document

app = typer.Typer(
    name="notedraft",
    help="Turn dated markdown notes into inline-styled HTML article drafts.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from notedraft import __version__

        console.print(f"notedraft {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .notedraft.toml file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show progress logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """notedraft - publish dated notes as platform-ready HTML."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    ctx.obj = {"config_path": config_path}


def _config(ctx: typer.Context, **overrides: object) -> NotedraftConfig:
    config_path = (ctx.obj or {}).get("config_path")
    return merge_cli_overrides(load_config(config_path), **overrides)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    return typer.Exit(1)


def _reader(config: NotedraftConfig) -> NoteReader:
    return NoteReader(
        keywords=config.to_filter_keywords(),
        attachments_dir=config.notes.attachments_dir,
    )


def _locator(config: NotedraftConfig) -> NoteLocator:
    return NoteLocator(config.notes_root(), extension=config.notes.extension)


@app.command(name="locate")
def locate_cmd(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date key (YYYY-MM-DD). Defaults to yesterday."),
    ] = None,
    notes_root: Annotated[
        Optional[Path],
        typer.Option("--notes-root", help="Directory holding the dated notes."),
    ] = None,
) -> None:
    """List the notes for a date."""
    stamp = day or yesterday_stamp()
    try:
        config = _config(ctx, notes_root=notes_root)
        paths = _locator(config).find_all_by_date(stamp)
    except NotedraftError as exc:
        raise _fail(str(exc)) from exc

    if not paths:
        console.print(f"[yellow]No notes found for {stamp}.[/yellow]")
        raise typer.Exit(0)

    console.print(f"[green]Found {len(paths)} note(s) for {stamp}:[/green]")
    for index, path in enumerate(paths, start=1):
        console.print(f"  {index}. {escape(str(path))}", soft_wrap=True, highlight=False)


@app.command(name="extract")
def extract_cmd(
    ctx: typer.Context,
    note_file: Annotated[
        Path,
        typer.Argument(help="Markdown note to parse.", exists=True, dir_okay=False),
    ],
    key_only: Annotated[
        bool,
        typer.Option("--key-only", help="Keep only summary and key-point sections."),
    ] = False,
) -> None:
    """Parse a note and print the extracted record as JSON."""
    try:
        config = _config(ctx, key_content_only=key_only or None)
        note = _reader(config).parse(note_file, config.publish.key_content_only)
    except NotedraftError as exc:
        raise _fail(str(exc)) from exc

    data = note.model_dump(mode="json", exclude={"raw_content"})
    console.print_json(json.dumps(data, ensure_ascii=False))


@app.command(name="preview")
def preview_cmd(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date key (YYYY-MM-DD). Defaults to yesterday."),
    ] = None,
    note_file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Render one note file instead of a date.", dir_okay=False),
    ] = None,
    merge: Annotated[
        bool,
        typer.Option("--merge/--separate", help="Combine all notes of the date into one article."),
    ] = False,
    key_only: Annotated[
        bool,
        typer.Option("--key-only", help="Keep only summary and key-point sections."),
    ] = False,
    notes_root: Annotated[
        Optional[Path],
        typer.Option("--notes-root", help="Directory holding the dated notes."),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--out", "-o", help="Directory for the preview HTML files."),
    ] = Path("./draft"),
) -> None:
    """Render notes to local HTML previews without uploading anything.

    Images keep their local paths, so the preview shows the final layout
    and styling but not the uploaded image URLs.
    """
    stamp = day or yesterday_stamp()
    try:
        config = _config(ctx, notes_root=notes_root, key_content_only=key_only or None)
        reader = _reader(config)
        options = config.to_publish_options()

        notes: list[NoteRecord] = []
        if note_file is not None:
            notes.append(reader.parse(note_file, options.key_content_only))
        else:
            paths = _locator(config).find_all_by_date(stamp)
            if merge and paths:
                notes.append(
                    reader.merge(paths, stamp, options.key_content_only, options.merge_title)
                )
            else:
                notes.extend(reader.parse(p, options.key_content_only) for p in paths)
    except NotedraftError as exc:
        raise _fail(str(exc)) from exc

    if not notes:
        console.print(f"[yellow]No notes found for {stamp}.[/yellow]")
        raise typer.Exit(0)

    renderer = ArticleRenderer(footer=config.to_footer_config())
    output.mkdir(parents=True, exist_ok=True)

    for index, note in enumerate(notes, start=1):
        title = prepare_note(note, options).title
        fragment = renderer.render(note)
        name = preview_filename(stamp, index if len(notes) > 1 else None)
        target = output / name
        target.write_text(wrap_preview_document(fragment, title), encoding="utf-8")
        console.print(
            f"[green]Wrote[/green] {escape(str(target))} "
            f"({escape(title)}, {len(note.images)} image(s))",
            soft_wrap=True,
            highlight=False,
        )


if __name__ == "__main__":
    app()
