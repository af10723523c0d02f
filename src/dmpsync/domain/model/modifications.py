"""Proposed changes awaiting a decision, and the harvester's per-work tracking."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .enums import Confidence, ModificationStatus

if TYPE_CHECKING:
    from datetime import datetime

    from .record import FundingEntry, RelatedIdentifierEntry


@dataclass(frozen=True, slots=True, kw_only=True)
class ProposedChanges:
    """One batch of candidate additions submitted to the ledger."""

    related_identifiers: tuple[RelatedIdentifierEntry, ...] = ()
    fundings: tuple[FundingEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.related_identifiers and not self.fundings


@dataclass(frozen=True, slots=True, kw_only=True)
class ModificationEntry:
    """A batch of proposed changes. Only ``status`` may change after creation."""

    id: str
    provenance: str
    timestamp: datetime
    status: ModificationStatus = ModificationStatus.PENDING
    note: str | None = None
    related_identifiers: tuple[RelatedIdentifierEntry, ...] = ()
    fundings: tuple[FundingEntry, ...] = ()

    def with_status(self, status: ModificationStatus) -> ModificationEntry:
        return replace(self, status=status)


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateWorkStatus:
    """Tracking entry for one harvested work, keyed by its identifier."""

    identifier: str
    provenance: str
    type: str = "doi"
    descriptor: str = "references"
    work_type: str | None = None
    citation: str | None = None
    score: int = 0
    confidence: Confidence = Confidence.NONE
    notes: tuple[str, ...] = ()
    status: ModificationStatus = ModificationStatus.PENDING
    discovered_at: datetime | None = None


@dataclass(slots=True, kw_only=True)
class HarvesterCandidateRecord:
    dmp_id: str
    works: dict[str, CandidateWorkStatus] = field(
        default_factory=dict[str, CandidateWorkStatus]
    )
    updated_at: datetime | None = None

    def knows(self, identifier: str) -> bool:
        wanted = identifier.strip().lower()
        return any(key.strip().lower() == wanted for key in self.works)

    def set_status(self, identifier: str, status: ModificationStatus) -> bool:
        wanted = identifier.strip().lower()
        for key, work in self.works.items():
            if key.strip().lower() == wanted:
                if work.status is not status:
                    self.works[key] = replace(work, status=status)
                    return True
                return False
        return False
