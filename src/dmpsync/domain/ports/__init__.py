"""Domain port definitions for adapters."""

from __future__ import annotations

from .events import EventPublisher
from .persistence import RecordStore
from .unit_of_work import (
    RepositoryCollection,
    SyncRepositories,
    SyncUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "EventPublisher",
    "RecordStore",
    "RepositoryCollection",
    "SyncRepositories",
    "SyncUnitOfWork",
    "UnitOfWork",
]
