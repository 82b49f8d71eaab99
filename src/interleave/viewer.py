"""Headless PDF viewer: tracks the page shown and notifies on page changes."""

from collections.abc import Callable
from pathlib import Path

import fitz
from loguru import logger


class PdfViewer:
    """Page position over a PDF opened with PyMuPDF.

    Nothing is rendered; the document is opened only to learn its length.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        if not path.is_file():
            msg = f"PDF not found: {path}"
            raise FileNotFoundError(msg)
        doc = fitz.open(str(path))
        try:
            self.page_count: int = doc.page_count
        finally:
            doc.close()
        if self.page_count < 1:
            msg = f"PDF has no pages: {path}"
            raise RuntimeError(msg)

        self._page = 1
        self._callbacks: list[Callable[[int], object]] = []
        self.closed = False
        logger.debug("Opened {} ({} pages)", path, self.page_count)

    def current_page(self) -> int:
        return self._page

    def on_page_change(self, callback: Callable[[int], object]) -> None:
        self._callbacks.append(callback)

    def jump_to_page(self, page: int) -> None:
        """Show ``page``, clamped to the document. Callbacks fire only on a change."""
        page = max(1, min(page, self.page_count))
        if page == self._page:
            return
        self._page = page
        for callback in list(self._callbacks):
            callback(page)

    def next_page(self) -> None:
        self.jump_to_page(self._page + 1)

    def previous_page(self) -> None:
        self.jump_to_page(self._page - 1)

    def close(self) -> None:
        self._callbacks.clear()
        self.closed = True
