"""Domain models for a notes session."""

from dataclasses import dataclass

from interleave.models.layout import LayoutSnapshot
from interleave.protocols import OutlineProtocol, ViewerProtocol


@dataclass(frozen=True)
class DocumentPairing:
    """An outline document paired with the viewer showing its PDF."""

    outline: OutlineProtocol
    viewer: ViewerProtocol
    document_path: str
    multi_document: bool
    layout_snapshot: LayoutSnapshot
