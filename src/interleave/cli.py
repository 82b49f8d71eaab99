"""CLI for interleave: take notes on a PDF, page by page."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from interleave.config import InterleaveConfig, load_config
from interleave.core.navigation import index_for
from interleave.core.notes_file import open_or_create_notes_file, save_notes
from interleave.core.outline.index import OutlineIndex
from interleave.core.outline.org import OrgOutline
from interleave.core.session.lifecycle import SessionLifecycle
from interleave.errors import InterleaveError
from interleave.layout import WindowLayout
from interleave.logging_config import configure_logging
from interleave.models.outline import Direction
from interleave.viewer import PdfViewer

app = typer.Typer(help="Interleave: keep a PDF and its org notes on the same page.")

_SESSION_HELP = (
    "n/p: next/previous note   ]/[: next/previous page   g N: go to page N\n"
    "s: turn PDF to this note   a: add note for this page   l: list notes   q: quit"
)


class TyperPrompter:
    """Ask questions on the terminal."""

    def ask_document_path(self, message: str) -> str | None:
        answer: str = typer.prompt(message, default="", show_default=False)
        return answer.strip() or None

    def confirm(self, message: str) -> bool:
        return typer.confirm(message, default=False)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (TOML, [interleave] table)"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose)
    try:
        ctx.obj = load_config(config_file)
    except ValueError as e:
        logger.error("Bad configuration: {}", e)
        raise typer.Exit(1) from e


def _load_outline(notes: Path, at: str | None) -> OrgOutline:
    """Read a notes file, with point on the heading titled ``at`` if given."""
    if not notes.is_file():
        logger.error("Notes file not found: {}", notes)
        raise typer.Exit(1)
    outline = OrgOutline.load(notes)
    if at is not None:
        match = next((h for h in outline.headings if h.title == at), None)
        if match is None:
            logger.error("No heading titled {!r} in {}", at, notes)
            raise typer.Exit(1)
        outline.goto(match)
    return outline


def _start(config: InterleaveConfig, outline: OrgOutline) -> SessionLifecycle:
    lifecycle = SessionLifecycle(WindowLayout(), TyperPrompter(), config)
    try:
        lifecycle.start(outline, PdfViewer)
    except InterleaveError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    return lifecycle


@app.command()
def notes(
    ctx: typer.Context,
    pdf: Path = typer.Argument(..., help="PDF to take notes on"),
) -> None:
    """Print the notes file for a PDF, creating it if there is none."""
    try:
        path = open_or_create_notes_file(pdf, ctx.obj)
    except InterleaveError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    typer.echo(str(path))


@app.command()
def add(
    ctx: typer.Context,
    notes_file: Path = typer.Argument(..., help="Org notes file"),
    page: int = typer.Option(..., "--page", "-p", min=1, help="Page to add notes for"),
    at: Annotated[
        str | None,
        typer.Option("--at", help="Start on the heading with this title (multi-PDF files)"),
    ] = None,
) -> None:
    """Open or create the notes section for a page, then save the file."""
    outline = _load_outline(notes_file, at)
    lifecycle = _start(ctx.obj, outline)
    heading = lifecycle.authoring.create_or_open_note_for_page(page)
    title = heading.title
    lifecycle.quit()
    save_notes(outline)
    typer.echo(title)


def _describe(lifecycle: SessionLifecycle, outline: OrgOutline) -> str:
    pairing = lifecycle.state.require()
    viewer = pairing.viewer
    index = index_for(pairing)
    section = index.enclosing_page_section(outline.point)
    # Point stays on the previous note when the new page has none
    if section is None or index.page_of(section) != viewer.current_page():
        note = "(no notes for this page)"
    else:
        note = section.title
    return f"[page {viewer.current_page()}/{viewer.page_count}] {note}"


def _list_outline(outline: OrgOutline) -> None:
    index = OutlineIndex(outline)
    for h in outline.visible_headings():
        marker = ">" if h is outline.point else " "
        page = index.page_of(h)
        suffix = f"  (p. {page})" if page is not None else ""
        typer.echo(f"{marker} {'  ' * (h.level - 1)}{h.title}{suffix}")


def _run_command(lifecycle: SessionLifecycle, outline: OrgOutline, command: str) -> bool:
    """Execute one session command. Returns False when the session should end."""
    viewer = lifecycle.state.require().viewer
    name, _, arg = command.partition(" ")

    if name == "q":
        return False
    if name == "n":
        lifecycle.navigation.advance(Direction.NEXT)
    elif name == "p":
        lifecycle.navigation.advance(Direction.PREVIOUS)
    elif name == "]":
        viewer.jump_to_page(viewer.current_page() + 1)
    elif name == "[":
        viewer.jump_to_page(viewer.current_page() - 1)
    elif name == "g":
        if not arg.strip().isdigit():
            typer.echo("usage: g PAGE")
            return True
        viewer.jump_to_page(int(arg))
    elif name == "s":
        lifecycle.navigation.sync_viewer_to_current_note()
    elif name == "a":
        lifecycle.authoring.create_or_open_note_for_current_page()
    elif name == "l":
        _list_outline(outline)
        return True
    else:
        typer.echo(_SESSION_HELP)
        return True

    typer.echo(_describe(lifecycle, outline))
    return True


@app.command()
def session(
    ctx: typer.Context,
    notes_file: Path = typer.Argument(..., help="Org notes file"),
    at: Annotated[
        str | None,
        typer.Option("--at", help="Start on the heading with this title (multi-PDF files)"),
    ] = None,
) -> None:
    """Read a PDF alongside its notes; the notes follow the page you are on."""
    outline = _load_outline(notes_file, at)
    lifecycle = _start(ctx.obj, outline)
    typer.echo(_SESSION_HELP)
    typer.echo(_describe(lifecycle, outline))

    try:
        while True:
            try:
                command = typer.prompt("", prompt_suffix="> ").strip()
            except typer.Abort:
                # End of input or Ctrl-C ends the session like "q"
                typer.echo()
                break
            try:
                if not _run_command(lifecycle, outline, command):
                    break
            except InterleaveError as e:
                logger.error("{}", e)
    finally:
        lifecycle.quit()
        path = save_notes(outline)
        typer.echo(f"Saved notes to {path}")
