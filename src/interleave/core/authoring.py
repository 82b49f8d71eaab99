"""Create note sections for pages that have none yet."""

from loguru import logger

from interleave.config import NOTE_TITLE_TEMPLATE, PAGE_NOTE_PROPERTY, InterleaveConfig
from interleave.core.navigation import NavigationEngine, index_for
from interleave.core.session.state import SessionState
from interleave.layout import NOTES_PANE
from interleave.models.outline import Heading
from interleave.protocols import LayoutProtocol, OutlineProtocol


def normalize_level(outline: OutlineProtocol, heading: Heading, target: int) -> None:
    """Promote or demote ``heading`` one step at a time until it sits at ``target``."""
    for _ in range(abs(heading.level - target)):
        if heading.level > target:
            outline.promote(heading)
        else:
            outline.demote(heading)


class NoteAuthoring:
    """Open the note section for a page, creating it when missing."""

    def __init__(
        self,
        state: SessionState,
        navigation: NavigationEngine,
        layout: LayoutProtocol,
        config: InterleaveConfig,
    ) -> None:
        self._state = state
        self._navigation = navigation
        self._layout = layout
        self._config = config

    def create_or_open_note_for_page(self, page: int, *, insert_newline: bool = False) -> Heading:
        """Focus the notes for ``page``, creating a section if there is none.

        Args:
            page: 1-based page number.
            insert_newline: Append an empty body line to an existing section,
                ready for typing.

        Returns:
            The existing or newly created section.
        """
        pairing = self._state.require()
        outline = pairing.outline

        existing = self._navigation.go_to_page(page)
        if existing is not None:
            if insert_newline:
                existing.body.append("")
            self._layout.focus(NOTES_PANE)
            return existing

        index = index_for(pairing)
        root = index.active_root()
        target_level = root.level + 1 if root is not None else 1

        outline.widen()
        heading = outline.insert_heading(
            index.find_insertion_anchor(), NOTE_TITLE_TEMPLATE.format(page=page)
        )
        normalize_level(outline, heading, target_level)
        outline.set_property(heading, PAGE_NOTE_PROPERTY, str(page))

        self._navigation.focus_heading(pairing, heading)
        self._layout.focus(NOTES_PANE)
        logger.info("Created {!r}", heading.title)
        return heading

    def create_or_open_note_for_current_page(self, *, insert_newline: bool = False) -> Heading:
        """Same as create_or_open_note_for_page, for the page the viewer shows."""
        pairing = self._state.require()
        return self.create_or_open_note_for_page(
            pairing.viewer.current_page(), insert_newline=insert_newline
        )
