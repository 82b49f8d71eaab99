"""Domain models for the window layout."""

from dataclasses import dataclass

from interleave.config import SplitOrientation


@dataclass(frozen=True)
class LayoutSnapshot:
    """Window arrangement saved at session start."""

    panes: tuple[str, ...]
    orientation: SplitOrientation | None
    split_size: int | None
    focused: str | None
