"""Locate note sections by page, without keeping an index.

Every query rescans the outline, so results always reflect the latest edits.
"""

from collections.abc import Iterator

from loguru import logger

from interleave.config import PAGE_NOTE_PROPERTY, PDF_PROPERTY, SortOrder
from interleave.errors import OutlineError
from interleave.models.outline import Heading, InsertionPoint
from interleave.protocols import OutlineProtocol

# Sort key for headings without a valid page number
MISSING_PAGE = -1


def parse_page(value: str | None) -> int | None:
    """Return a page number if ``value`` is a positive integer, else None."""
    if value is None:
        return None
    try:
        page = int(value.strip())
    except ValueError:
        return None
    return page if page > 0 else None


class OutlineIndex:
    """Page lookups over an outline, scoped to one document's notes.

    With a ``document_path``, the outline is a multi-document notes file and
    every query is limited to the subtree of the heading whose
    ``INTERLEAVE_PDF`` property equals that path.
    """

    def __init__(self, outline: OutlineProtocol, *, document_path: str | None = None) -> None:
        self.outline = outline
        self.document_path = document_path

    @property
    def multi_document(self) -> bool:
        return self.document_path is not None

    def page_of(self, heading: Heading) -> int | None:
        return parse_page(self.outline.get_property(heading, PAGE_NOTE_PROPERTY))

    def enclosing_page_section(self, heading: Heading | None) -> Heading | None:
        """Return ``heading`` or its nearest ancestor with a valid page number."""
        current = heading
        while current is not None:
            if self.page_of(current) is not None:
                return current
            current = self.outline.parent(current)
        return None

    def find_document_root(self, document_path: str) -> Heading | None:
        """Find the heading that scopes the notes of ``document_path``.

        Ascends from point first, then scans the whole document.
        """
        current = self.outline.point
        while current is not None:
            if self.outline.get_property(current, PDF_PROPERTY) == document_path:
                return current
            current = self.outline.parent(current)

        for h in self.outline.headings:
            if self.outline.get_property(h, PDF_PROPERTY) == document_path:
                return h
        return None

    def active_root(self) -> Heading | None:
        if self.document_path is None:
            return None
        return self.find_document_root(self.document_path)

    def _scope(self) -> list[Heading]:
        """Headings a query may look at, in document order."""
        if self.document_path is None:
            return list(self.outline.headings)
        root = self.active_root()
        if root is None:
            logger.debug("No document root for {!r}", self.document_path)
            return []
        return self.outline.subtree(root)[1:]

    def iter_page_sections(self) -> Iterator[tuple[Heading, int]]:
        for h in self._scope():
            page = self.page_of(h)
            if page is not None:
                yield h, page

    def find_page_section(self, page: int) -> Heading | None:
        """Return the first note section for ``page`` in document order."""
        for h, h_page in self.iter_page_sections():
            if h_page == page:
                return h
        return None

    def find_insertion_anchor(self) -> InsertionPoint:
        """Where a new note section goes: the end of the scope."""
        root = self.active_root()
        if root is not None:
            return InsertionPoint(index=self.outline.subtree_end(root), level=root.level)

        headings = self.outline.headings
        level = headings[-1].level if headings else 1
        return InsertionPoint(index=len(headings), level=level)

    def has_any_sections(self) -> bool:
        return bool(self._scope())

    def sort_by_page(self, order: SortOrder) -> None:
        """Reorder sibling note sections by page number.

        Headings without a page number sort as MISSING_PAGE. Nothing to sort
        is not an error.
        """
        parent = self.active_root() if self.multi_document else None
        if self.multi_document and parent is None:
            logger.debug("Not sorting: no document root for {!r}", self.document_path)
            return

        def key(h: Heading) -> int:
            page = self.page_of(h)
            return MISSING_PAGE if page is None else page

        try:
            self.outline.sort_children(parent, key, reverse=order is SortOrder.DESCENDING)
        except OutlineError as e:
            logger.debug("Not sorting: {}", e)
