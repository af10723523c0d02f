"""Public domain model surface."""

from __future__ import annotations

from dmpsync.domain.model.comparison import ComparisonResult, ConfidenceBands, FeatureSet
from dmpsync.domain.model.enums import (
    Confidence,
    Descriptor,
    EventKind,
    FundingStatus,
    ModificationStatus,
    WorkType,
)
from dmpsync.domain.model.events import DomainEvent
from dmpsync.domain.model.harvest import (
    CandidateAffiliation,
    CandidateFunding,
    CandidatePerson,
    CandidateRepository,
    CandidateWork,
)
from dmpsync.domain.model.keys import LATEST, TOMBSTONE
from dmpsync.domain.model.modifications import (
    CandidateWorkStatus,
    HarvesterCandidateRecord,
    ModificationEntry,
    ProposedChanges,
)
from dmpsync.domain.model.record import (
    Affiliation,
    Dataset,
    Distribution,
    FundingEntry,
    GrantIdentifier,
    Host,
    Identifier,
    Person,
    Project,
    Record,
    RelatedIdentifierEntry,
    VersionLink,
    VersionSnapshot,
    normalize_id,
    records_equivalent,
)

__all__ = [
    "LATEST",
    "TOMBSTONE",
    "Affiliation",
    "CandidateAffiliation",
    "CandidateFunding",
    "CandidatePerson",
    "CandidateRepository",
    "CandidateWork",
    "CandidateWorkStatus",
    "ComparisonResult",
    "Confidence",
    "ConfidenceBands",
    "Dataset",
    "Descriptor",
    "Distribution",
    "DomainEvent",
    "EventKind",
    "FeatureSet",
    "FundingEntry",
    "FundingStatus",
    "GrantIdentifier",
    "HarvesterCandidateRecord",
    "Host",
    "Identifier",
    "ModificationEntry",
    "ModificationStatus",
    "Person",
    "Project",
    "ProposedChanges",
    "Record",
    "RelatedIdentifierEntry",
    "VersionLink",
    "VersionSnapshot",
    "WorkType",
    "normalize_id",
    "records_equivalent",
]
