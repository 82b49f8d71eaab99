"""In-memory model of the window arrangement hosting the viewer and the notes."""

from loguru import logger

from interleave.config import SplitOrientation
from interleave.models.layout import LayoutSnapshot

VIEWER_PANE = "viewer"
NOTES_PANE = "notes"


class WindowLayout:
    """Tracks which panes are shown, how they are split and which has focus."""

    def __init__(self, panes: tuple[str, ...] = (VIEWER_PANE,)) -> None:
        self.panes = panes
        self.orientation: SplitOrientation | None = None
        self.split_size: int | None = None
        self.focused: str | None = panes[0] if panes else None

    def snapshot(self) -> LayoutSnapshot:
        return LayoutSnapshot(
            panes=self.panes,
            orientation=self.orientation,
            split_size=self.split_size,
            focused=self.focused,
        )

    def restore(self, snapshot: LayoutSnapshot) -> None:
        self.panes = snapshot.panes
        self.orientation = snapshot.orientation
        self.split_size = snapshot.split_size
        self.focused = snapshot.focused

    def split(self, orientation: SplitOrientation, size: int | None) -> None:
        """Show the viewer and the notes next to each other.

        A vertical split puts them side by side, a horizontal one stacks them.
        """
        self.panes = (VIEWER_PANE, NOTES_PANE)
        self.orientation = orientation
        self.split_size = size
        logger.debug("Split {} (size {!r})", orientation, size)

    def focus(self, pane: str) -> None:
        if pane not in self.panes:
            msg = f"No such pane: {pane!r}"
            raise ValueError(msg)
        self.focused = pane
