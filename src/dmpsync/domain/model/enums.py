"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class FundingStatus(StrEnum):
    PLANNED = "planned"
    APPLIED = "applied"
    GRANTED = "granted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in {FundingStatus.GRANTED, FundingStatus.REJECTED}


class ModificationStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Confidence(StrEnum):
    """Confidence tier attached to a comparison score."""

    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    ABSOLUTE = "Absolute"


class EventKind(StrEnum):
    REGISTRATION_UPDATE = "registration-update"
    CITATION_FETCH = "citation-fetch"


class Descriptor(StrEnum):
    """Relationship descriptors with special handling in the engine."""

    REFERENCES = "references"
    IS_METADATA_FOR = "is_metadata_for"


class WorkType(StrEnum):
    PUBLICATION = "publication"
    DATASET = "dataset"
    SOFTWARE = "software"
    OUTPUT_MANAGEMENT_PLAN = "output_management_plan"
