"""Fake implementations for testing notes sessions."""

from collections.abc import Callable
from pathlib import Path

from interleave.core.session.lifecycle import SessionLifecycle
from interleave.layout import WindowLayout


class FakeViewer:
    """In-memory fake for PdfViewer.

    Records every page it is asked to show, for assertions.
    """

    def __init__(self, path: Path, page_count: int = 10) -> None:
        self.path = path
        self.page_count = page_count
        self.page = 1
        self.jumps: list[int] = []
        self.callbacks: list[Callable[[int], object]] = []
        self.closed = False

    def current_page(self) -> int:
        return self.page

    def jump_to_page(self, page: int) -> None:
        """Clamp to the document and fire callbacks when the page changes."""
        self.jumps.append(page)
        page = max(1, min(page, self.page_count))
        if page == self.page:
            return
        self.page = page
        for callback in list(self.callbacks):
            callback(page)

    def on_page_change(self, callback: Callable[[int], object]) -> None:
        self.callbacks.append(callback)

    def close(self) -> None:
        self.closed = True


class FakePrompter:
    """Answers prompts from canned values and records the questions asked."""

    def __init__(self, answer: str | None = None, *, confirm: bool = False) -> None:
        self.answer = answer
        self.confirm_answer = confirm
        self.questions: list[str] = []

    def ask_document_path(self, message: str) -> str | None:
        self.questions.append(message)
        return self.answer

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.confirm_answer


# Signature of the start_session fixture
StartSession = Callable[..., tuple[SessionLifecycle, FakeViewer, WindowLayout]]
