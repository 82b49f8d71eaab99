"""Keep a PDF and its org notes on the same page."""

from interleave.core.outline.index import OutlineIndex
from interleave.core.outline.org import OrgOutline
from interleave.core.session.lifecycle import SessionLifecycle
from interleave.layout import WindowLayout
from interleave.viewer import PdfViewer

__all__ = ["OrgOutline", "OutlineIndex", "PdfViewer", "SessionLifecycle", "WindowLayout"]
