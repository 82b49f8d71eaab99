"""The single active document pairing."""

from loguru import logger

from interleave.errors import NotSyncedError, SessionActiveError
from interleave.models.session import DocumentPairing


class SessionState:
    """Holds at most one active pairing. Only the session lifecycle mutates it."""

    def __init__(self) -> None:
        self.pairing: DocumentPairing | None = None

    @property
    def is_synced(self) -> bool:
        return self.pairing is not None

    def require(self) -> DocumentPairing:
        """Return the active pairing, raising if there is none."""
        if self.pairing is None:
            msg = "No active interleave session"
            raise NotSyncedError(msg)
        return self.pairing

    def pair(self, pairing: DocumentPairing) -> None:
        if self.pairing is not None:
            msg = f"A session for {self.pairing.document_path!r} is already active"
            raise SessionActiveError(msg)
        self.pairing = pairing
        logger.debug(
            "Paired {!r} (multi_document {!r})", pairing.document_path, pairing.multi_document
        )

    def clear(self) -> None:
        self.pairing = None
