"""Find, create and save the notes file belonging to a PDF."""

import os
from pathlib import Path

from loguru import logger

from interleave.config import PDF_PROPERTY, InterleaveConfig
from interleave.core.outline.org import OrgOutline
from interleave.errors import DocumentPathError

NOTES_SUFFIX = ".org"
# Where a session's notes go when the file was edited elsewhere meanwhile
CONFLICT_SUFFIX = ".conflict.org"


def _expand_directory(directory: str, pdf_path: Path) -> Path:
    # "." stands for the directory the PDF lives in
    if directory == ".":
        return pdf_path.parent
    return Path(directory).expanduser()


def record_path(path: Path, directory: Path | None, *, relative: bool) -> str:
    """Spell ``path`` the way it gets written into a notes file."""
    absolute = path.expanduser().resolve()
    if relative and directory is not None:
        try:
            return os.path.relpath(absolute, directory.resolve())
        except ValueError:
            # No relative path between different Windows drives
            pass
    return str(absolute)


def find_notes_file(pdf_path: Path, directories: tuple[str, ...]) -> Path | None:
    """Return the first existing ``<pdf stem>.org`` in ``directories``."""
    name = pdf_path.stem + NOTES_SUFFIX
    for directory in directories:
        candidate = _expand_directory(directory, pdf_path) / name
        if candidate.is_file():
            return candidate
    return None


def open_or_create_notes_file(pdf_path: Path, config: InterleaveConfig) -> Path:
    """Return the notes file for ``pdf_path``, creating it if needed.

    A new file goes into the first configured directory and declares the PDF
    with a ``#+INTERLEAVE_PDF:`` keyword.

    Raises:
        DocumentPathError: If the PDF does not exist or no notes directory
            is configured.
    """
    pdf_path = pdf_path.expanduser().resolve()
    if not pdf_path.is_file():
        msg = f"PDF not found: {pdf_path}"
        raise DocumentPathError(msg)

    existing = find_notes_file(pdf_path, config.notes_directories)
    if existing is not None:
        logger.debug("Found notes file {}", existing)
        return existing

    if not config.notes_directories:
        msg = "No notes directories configured"
        raise DocumentPathError(msg)

    notes_dir = _expand_directory(config.notes_directories[0], pdf_path)
    notes_dir.mkdir(parents=True, exist_ok=True)
    notes_path = notes_dir / (pdf_path.stem + NOTES_SUFFIX)

    recorded = record_path(pdf_path, notes_dir, relative=config.insert_relative_path)
    notes_path.write_text(f"#+{PDF_PROPERTY}: {recorded}\n\n", encoding="utf-8")
    logger.info("Created notes file {}", notes_path)
    return notes_path


def save_notes(outline: OrgOutline) -> Path:
    """Write ``outline`` back to the file it was loaded from.

    If that file was edited elsewhere since it was read, it is left alone and
    the outline goes to ``<stem>.conflict.org`` next to it instead.

    Returns:
        The path written.
    """
    if outline.path is not None and outline.changed_on_disk():
        conflict = outline.path.with_name(outline.path.stem + CONFLICT_SUFFIX)
        logger.warning(
            "{} was changed outside this session; writing the session's notes to {}",
            outline.path,
            conflict,
        )
        return outline.save(conflict)
    return outline.save()
