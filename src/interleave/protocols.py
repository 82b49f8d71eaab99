"""Protocols for the collaborators a notes session drives."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from interleave.config import SplitOrientation
from interleave.models.layout import LayoutSnapshot
from interleave.models.outline import Heading, InsertionPoint


@runtime_checkable
class OutlineProtocol(Protocol):
    """Protocol for outline documents (headings, properties, narrowing)."""

    path: Path | None
    headings: list[Heading]
    point: Heading | None
    restriction: Heading | None

    def goto(self, heading: Heading | None) -> None:
        """Move point to a heading (None = before the first heading)."""
        ...

    def file_keyword(self, name: str) -> str | None:
        """Return a ``#+NAME:`` file keyword value."""
        ...

    def set_file_keyword(self, name: str, value: str) -> None:
        """Set or add a ``#+NAME:`` file keyword."""
        ...

    def get_property(self, heading: Heading, name: str, *, inherit: bool = False) -> str | None:
        """Return a heading property, optionally looking at ancestors too."""
        ...

    def set_property(self, heading: Heading, name: str, value: str) -> None:
        """Set a heading property."""
        ...

    def parent(self, heading: Heading) -> Heading | None:
        """Return the parent heading, or None for a top-level heading."""
        ...

    def ancestors(self, heading: Heading) -> Iterator[Heading]:
        """Yield ancestors, nearest first."""
        ...

    def children(self, heading: Heading | None) -> list[Heading]:
        """Return direct children (top-level headings for None)."""
        ...

    def subtree(self, heading: Heading) -> list[Heading]:
        """Return a heading and all of its descendants in document order."""
        ...

    def subtree_end(self, heading: Heading) -> int:
        """Return the index just past a heading's subtree."""
        ...

    def promote(self, heading: Heading) -> None:
        """Decrease a heading's level by one."""
        ...

    def demote(self, heading: Heading) -> None:
        """Increase a heading's level by one."""
        ...

    def insert_heading(self, at: InsertionPoint, title: str = "") -> Heading:
        """Insert a heading and move point to it."""
        ...

    def sort_children(
        self,
        parent: Heading | None,
        key: Callable[[Heading], Any],
        *,
        reverse: bool = False,
    ) -> None:
        """Reorder the children of a heading, each carrying its subtree."""
        ...

    def narrow_to(self, heading: Heading) -> None:
        """Restrict the view to a heading's subtree."""
        ...

    def widen(self) -> None:
        """Remove any restriction."""
        ...

    def show_subtree(self, heading: Heading) -> None:
        """Unfold a heading and all of its descendants."""
        ...

    def hide_drawers(self, heading: Heading) -> None:
        """Fold property drawers in a heading's subtree."""
        ...

    def overview(self) -> None:
        """Fold everything down to top-level headings."""
        ...

    def recenter(self, heading: Heading) -> None:
        """Scroll the view to a heading without changing what is visible."""
        ...


@runtime_checkable
class ViewerProtocol(Protocol):
    """Protocol for paginated document viewers."""

    path: Path
    page_count: int

    def current_page(self) -> int:
        """Return the 1-based page currently shown."""
        ...

    def jump_to_page(self, page: int) -> None:
        """Show a page."""
        ...

    def on_page_change(self, callback: Callable[[int], object]) -> None:
        """Register a callback fired with the new page after a page change."""
        ...

    def close(self) -> None:
        """Release the document."""
        ...


@runtime_checkable
class LayoutProtocol(Protocol):
    """Protocol for the window layout hosting both views."""

    def snapshot(self) -> LayoutSnapshot:
        """Capture the current arrangement."""
        ...

    def restore(self, snapshot: LayoutSnapshot) -> None:
        """Return to a captured arrangement."""
        ...

    def split(self, orientation: SplitOrientation, size: int | None) -> None:
        """Show the viewer and the notes side by side."""
        ...

    def focus(self, pane: str) -> None:
        """Give input focus to a pane."""
        ...


@runtime_checkable
class PrompterProtocol(Protocol):
    """Protocol for asking the user questions."""

    def ask_document_path(self, message: str) -> str | None:
        """Ask for a document path. None or empty means the user declined."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...
