"""Errors raised by the record synchronisation engine.

Every error is resolved at the boundary of a single write and surfaced to the
caller; none of them is retried by the engine itself.
"""

from __future__ import annotations

from typing import Final

MSG_FORBIDDEN: Final[str] = "You do not have permission."
MSG_NOT_FOUND: Final[str] = "DMP does not exist."
MSG_UNKNOWN: Final[str] = "DMP does not exist. Try :create instead."
MSG_EXISTS: Final[str] = "DMP already exists. Try :update instead."
MSG_NO_HISTORICALS: Final[str] = "You cannot modify a historical version of the DMP."
MSG_NO_CHANGE: Final[str] = "The updated record has no changes."
MSG_UNABLE_TO_VERSION: Final[str] = "Unable to version this DMP."
MSG_UNABLE_TO_MINT: Final[str] = "Unable to mint a unique DMP ID."
MSG_UNABLE_TO_SAVE: Final[str] = "Unable to save the DMP at this time."


class DmpSyncError(RuntimeError):
    """Base class for engine errors."""


class ForbiddenError(DmpSyncError):
    """Writer is unidentified or may not perform the requested change."""

    def __init__(self, message: str = MSG_FORBIDDEN) -> None:
        super().__init__(message)


class NotFoundError(DmpSyncError):
    def __init__(self, message: str = MSG_NOT_FOUND) -> None:
        super().__init__(message)


class HistoricalVersionError(NotFoundError):
    def __init__(self, message: str = MSG_NO_HISTORICALS) -> None:
        super().__init__(message)


class AlreadyExistsError(DmpSyncError):
    def __init__(self, message: str = MSG_EXISTS) -> None:
        super().__init__(message)


class NoChangesError(DmpSyncError):
    """The proposed state equals the current one; nothing was written."""

    def __init__(self, message: str = MSG_NO_CHANGE) -> None:
        super().__init__(message)


class AllocationExhaustedError(DmpSyncError):
    def __init__(self, message: str = MSG_UNABLE_TO_MINT) -> None:
        super().__init__(message)


class StoreError(DmpSyncError):
    """The record store rejected a read or write."""

    def __init__(self, message: str = MSG_UNABLE_TO_SAVE) -> None:
        super().__init__(message)


class VersioningError(StoreError):
    def __init__(self, message: str = MSG_UNABLE_TO_VERSION) -> None:
        super().__init__(message)


class EventPublishError(DmpSyncError):
    """A notification could not be delivered; never fatal to a write."""


class ComparatorError(DmpSyncError):
    """The record lacks the information needed to build comparison features."""


class RecordParseError(DmpSyncError):
    """A document could not be parsed into the typed record model."""
