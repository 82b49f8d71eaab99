"""Exceptions raised by interleave."""


class InterleaveError(RuntimeError):
    """Base class for all interleave errors."""


class NotSyncedError(InterleaveError):
    """A command needing an active session was issued without one."""


class SessionActiveError(InterleaveError):
    """A session is already active."""


class DocumentPathError(InterleaveError):
    """The document for a notes file could not be resolved or opened."""


class OutlineError(InterleaveError):
    """An outline operation is not possible at the given location."""
