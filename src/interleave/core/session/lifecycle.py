"""Start and end a notes session."""

from collections.abc import Callable
from pathlib import Path

from loguru import logger

from interleave.config import PDF_PROPERTY, InterleaveConfig
from interleave.core.authoring import NoteAuthoring
from interleave.core.navigation import NavigationEngine, index_for
from interleave.core.notes_file import record_path
from interleave.core.session.state import SessionState
from interleave.errors import DocumentPathError, SessionActiveError
from interleave.models.session import DocumentPairing
from interleave.protocols import LayoutProtocol, OutlineProtocol, PrompterProtocol, ViewerProtocol

ViewerFactory = Callable[[Path], ViewerProtocol]


class SessionLifecycle:
    """Pairs an outline with a viewer, and undoes it on quit.

    Owns the session state and hands it to the navigation engine and the
    note authoring it creates.
    """

    def __init__(
        self,
        layout: LayoutProtocol,
        prompter: PrompterProtocol,
        config: InterleaveConfig,
        *,
        state: SessionState | None = None,
    ) -> None:
        self.state = state or SessionState()
        self.config = config
        self._layout = layout
        self._prompter = prompter
        self.navigation = NavigationEngine(self.state, config)
        self.authoring = NoteAuthoring(self.state, self.navigation, layout, config)

    def _resolve_document_path(self, outline: OutlineProtocol) -> tuple[str, bool, bool]:
        """Find the PDF for ``outline``.

        Returns:
            (document path, multi-document flag, whether the path came from
            the user and still has to be recorded in the outline).
        """
        if outline.point is not None:
            value = outline.get_property(outline.point, PDF_PROPERTY, inherit=True)
            if value:
                return value, True, False

        value = outline.file_keyword(PDF_PROPERTY)
        if value:
            return value, False, False

        answer = self._prompter.ask_document_path("PDF file for these notes")
        if not answer:
            msg = "No PDF given for these notes"
            raise DocumentPathError(msg)
        path = record_path(
            Path(answer),
            outline.path.parent if outline.path is not None else None,
            relative=self.config.insert_relative_path,
        )

        has_properties = any(h.properties for h in outline.headings)
        if (
            outline.point is not None
            and has_properties
            and self._prompter.confirm("Does this file hold notes for several PDFs?")
        ):
            return path, True, True
        return path, False, True

    @staticmethod
    def _document_file(document_path: str, outline: OutlineProtocol) -> Path:
        path = Path(document_path).expanduser()
        if not path.is_absolute() and outline.path is not None:
            path = outline.path.parent / path
        return path

    def start(self, outline: OutlineProtocol, viewer_factory: ViewerFactory) -> DocumentPairing:
        """Open the PDF for ``outline`` and show the notes for page 1.

        Raises:
            SessionActiveError: A session is already active.
            DocumentPathError: The PDF is unknown or cannot be opened.
        """
        if self.state.is_synced:
            msg = "An interleave session is already active"
            raise SessionActiveError(msg)

        document_path, multi_document, from_user = self._resolve_document_path(outline)
        try:
            viewer = viewer_factory(self._document_file(document_path, outline))
        except (OSError, RuntimeError) as e:
            msg = f"Cannot open {document_path!r}: {e}"
            raise DocumentPathError(msg) from e

        if from_user:
            if multi_document and outline.point is not None:
                outline.set_property(outline.point, PDF_PROPERTY, document_path)
            else:
                outline.set_file_keyword(PDF_PROPERTY, document_path)

        pairing = DocumentPairing(
            outline=outline,
            viewer=viewer,
            document_path=document_path,
            multi_document=multi_document,
            layout_snapshot=self._layout.snapshot(),
        )
        self.state.pair(pairing)
        self._layout.split(self.config.split_orientation, self.config.split_size)
        viewer.on_page_change(self.navigation.sync_outline_to_current_page)

        root = index_for(pairing).active_root()
        if root is not None:
            outline.goto(root)
        self.navigation.go_to_page(1)

        logger.info(
            "Started session for {}{}",
            document_path,
            " (multi-document notes)" if multi_document else "",
        )
        return pairing

    def quit(self) -> DocumentPairing:
        """Sort and collapse the notes, restore the layout and close the viewer."""
        pairing = self.state.require()
        outline = pairing.outline
        outline.widen()

        index = index_for(pairing)
        if index.has_any_sections():
            index.sort_by_page(self.config.sort_order)
            outline.overview()

        self.state.clear()
        self._layout.restore(pairing.layout_snapshot)
        pairing.viewer.close()
        logger.info("Ended session for {}", pairing.document_path)
        return pairing
