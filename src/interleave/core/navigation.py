"""Keep the outline and the viewer on the same page."""

from loguru import logger

from interleave.config import InterleaveConfig
from interleave.core.outline.index import OutlineIndex
from interleave.core.session.state import SessionState
from interleave.models.outline import Direction, Heading
from interleave.models.session import DocumentPairing


def index_for(pairing: DocumentPairing) -> OutlineIndex:
    """Build a fresh index scoped to the paired document."""
    return OutlineIndex(
        pairing.outline,
        document_path=pairing.document_path if pairing.multi_document else None,
    )


class NavigationEngine:
    """Page and note navigation for the active session.

    Every operation requires an active pairing and raises NotSyncedError
    otherwise.
    """

    def __init__(self, state: SessionState, config: InterleaveConfig) -> None:
        self._state = state
        self._config = config
        self._following_outline = False

    def focus_heading(self, pairing: DocumentPairing, heading: Heading) -> None:
        """Make ``heading`` the visible note, per the narrowing policy."""
        outline = pairing.outline
        if self._config.disable_narrowing:
            outline.recenter(heading)
            return
        outline.widen()
        outline.goto(heading)
        outline.narrow_to(heading)
        outline.show_subtree(heading)
        outline.hide_drawers(heading)

    def go_to_page(self, page: int) -> Heading | None:
        """Show the note section for ``page``, returning it if there is one."""
        pairing = self._state.require()
        heading = index_for(pairing).find_page_section(page)
        if heading is None:
            logger.debug("No notes for page {}", page)
            return None
        self.focus_heading(pairing, heading)
        logger.debug("Showing notes {!r} for page {}", heading.title, page)
        return heading

    def sync_viewer_to_current_note(self) -> int | None:
        """Turn the viewer to the page of the note at point.

        Missing or malformed page numbers are ignored.
        """
        pairing = self._state.require()
        index = index_for(pairing)
        section = index.enclosing_page_section(pairing.outline.point)
        if section is None:
            return None
        page = index.page_of(section)
        if page is None:
            return None
        # The viewer's page-change hook must not move point off this section
        self._following_outline = True
        try:
            pairing.viewer.jump_to_page(page)
        finally:
            self._following_outline = False
        return page

    def sync_outline_to_current_page(self, *_args: object) -> Heading | None:
        """Show the notes of the page the viewer is on.

        Accepts and ignores the viewer's page-change arguments, so it can be
        registered as a page-change callback directly.
        """
        pairing = self._state.require()
        if self._following_outline:
            return None
        return self.go_to_page(pairing.viewer.current_page())

    def advance(self, direction: Direction) -> Heading | None:
        """Move to the next or previous note section and turn the viewer with it.

        At the first or last sibling the current section stays put.
        """
        pairing = self._state.require()
        outline = pairing.outline
        index = index_for(pairing)
        outline.widen()

        root = index.active_root()
        anchor = index.enclosing_page_section(outline.point)
        if anchor is not None and root is not None and anchor not in outline.subtree(root):
            anchor = None

        if anchor is None:
            if root is not None:
                scope = outline.children(root)
            else:
                scope = [] if index.multi_document else outline.headings
            if not scope:
                logger.debug("No note sections to move to")
                return None
            target = scope[0]
        else:
            siblings = outline.children(outline.parent(anchor))
            pos = next(i for i, h in enumerate(siblings) if h is anchor)
            step = 1 if direction is Direction.NEXT else -1
            if 0 <= pos + step < len(siblings):
                target = siblings[pos + step]
            else:
                logger.debug("No {} note after {!r}", direction, anchor.title)
                target = anchor

        self.focus_heading(pairing, target)
        self.sync_viewer_to_current_note()
        return target
