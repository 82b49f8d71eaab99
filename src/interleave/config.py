"""Configuration for interleave."""

import tomllib
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
from typing import Any

# Config file location. First file found is used.
CONFIG_FILES: list[Path] = [
    Path("~/.config/interleave/config.toml").expanduser(),
    Path("~/.interleave.toml").expanduser(),
]

# Directories searched for notes files. "." means the PDF's own directory.
NOTES_DIRECTORIES: tuple[str, ...] = ("~/org/interleave_notes", ".")

# Property and keyword names of the on-disk format.
PDF_PROPERTY = "INTERLEAVE_PDF"
PAGE_NOTE_PROPERTY = "interleave_page_note"

NOTE_TITLE_TEMPLATE = "Notes for page {page}"


class SortOrder(StrEnum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class SplitOrientation(StrEnum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class InterleaveConfig:
    """User-tunable options."""

    notes_directories: tuple[str, ...] = NOTES_DIRECTORIES
    sort_order: SortOrder = SortOrder.ASCENDING
    split_orientation: SplitOrientation = SplitOrientation.VERTICAL
    # None splits the frame equally; otherwise grows (or shrinks) the notes pane
    split_size: int | None = None
    disable_narrowing: bool = False
    insert_relative_path: bool = True


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(InterleaveConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        msg = f"Unknown config keys: {unknown!r}"
        raise ValueError(msg)

    out = dict(values)
    if "notes_directories" in out:
        out["notes_directories"] = tuple(str(d) for d in out["notes_directories"])
    if "sort_order" in out:
        out["sort_order"] = SortOrder(out["sort_order"])
    if "split_orientation" in out:
        out["split_orientation"] = SplitOrientation(out["split_orientation"])
    if "split_size" in out and out["split_size"] is not None:
        out["split_size"] = int(out["split_size"])
    return out


def load_config(path: Path | None = None) -> InterleaveConfig:
    """Load options from the ``[interleave]`` table of a TOML file.

    Args:
        path: Explicit config file. If None, the first existing file in
            CONFIG_FILES is used, and defaults apply when there is none.

    Raises:
        ValueError: On unknown keys or invalid enum values.
    """
    candidates = [path] if path is not None else CONFIG_FILES
    for candidate in candidates:
        if candidate.is_file():
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
            return InterleaveConfig(**_coerce(data.get("interleave", {})))
    if path is not None:
        msg = f"Config file not found: {path}"
        raise ValueError(msg)
    return InterleaveConfig()
