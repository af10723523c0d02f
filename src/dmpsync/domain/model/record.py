"""Record aggregate: the canonical DMP and the entries writers contribute to it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .keys import LATEST

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import FundingStatus
    from .modifications import ModificationEntry


def normalize_id(value: str | None) -> str | None:
    """Comparison form for identifiers: trimmed and case-insensitive."""

    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


@dataclass(frozen=True, slots=True, kw_only=True)
class Identifier:
    type: str
    identifier: str

    @property
    def normalized(self) -> str | None:
        return normalize_id(self.identifier)


@dataclass(frozen=True, slots=True, kw_only=True)
class GrantIdentifier:
    """Grant id of a funding entry; carries who set it and when."""

    type: str
    identifier: str
    provenance_id: str | None = None
    created_at: datetime | None = None

    @property
    def normalized(self) -> str | None:
        return normalize_id(self.identifier)


@dataclass(frozen=True, slots=True, kw_only=True)
class Affiliation:
    name: str | None = None
    affiliation_id: Identifier | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class Person:
    name: str | None = None
    mbox: str | None = None
    identifier: Identifier | None = None
    affiliation: Affiliation | None = None
    roles: tuple[str, ...] = ()
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)

    @property
    def last_name(self) -> str | None:
        if not self.name or not self.name.strip():
            return None
        name = self.name.strip()
        if "," in name:
            return name.split(",", 1)[0].strip() or None
        return name.split()[-1]


@dataclass(frozen=True, slots=True, kw_only=True)
class Host:
    name: str | None = None
    url: str | None = None
    host_id: Identifier | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class Distribution:
    title: str | None = None
    host: Host | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class Dataset:
    title: str | None = None
    keywords: tuple[str, ...] = ()
    distributions: tuple[Distribution, ...] = ()
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)

    @property
    def hosts(self) -> tuple[Host, ...]:
        return tuple(item.host for item in self.distributions if item.host is not None)


@dataclass(frozen=True, slots=True, kw_only=True)
class Project:
    """Project metadata.

    The funding of the record's primary project lives in ``Record.fundings``,
    where writers reconcile it; ``fundings`` here is only filled for the
    additional projects, which are carried as submitted.
    """

    title: str | None = None
    description: str | None = None
    start: str | None = None
    end: str | None = None
    fundings: tuple[FundingEntry, ...] = ()
    extras: dict[str, object] = field(default_factory=dict[str, object], hash=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class FundingEntry:
    name: str | None = None
    funder_id: Identifier | None = None
    status: FundingStatus | None = None
    grant_id: GrantIdentifier | None = None
    opportunity_id: Identifier | None = None
    provenance_id: str | None = None
    created_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not None and self.status.is_terminal

    @property
    def funder_key(self) -> str | None:
        if self.funder_id is not None and self.funder_id.normalized:
            return self.funder_id.normalized
        return normalize_id(self.name)

    def same_funder(self, other: FundingEntry) -> bool:
        if self.funder_id is not None and other.funder_id is not None:
            return self.funder_id.normalized == other.funder_id.normalized
        mine = normalize_id(self.name)
        return mine is not None and mine == normalize_id(other.name)

    def signature(self) -> tuple[str | None, ...]:
        """Content of the entry without its provenance stamps."""

        return (
            self.funder_key,
            normalize_id(self.name),
            self.status.value if self.status is not None else None,
            self.grant_id.normalized if self.grant_id is not None else None,
            self.opportunity_id.normalized if self.opportunity_id is not None else None,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RelatedIdentifierEntry:
    identifier: str
    type: str = "doi"
    descriptor: str | None = None
    work_type: str | None = None
    citation: str | None = None
    provenance_id: str | None = None

    @property
    def normalized(self) -> str | None:
        return normalize_id(self.identifier)


@dataclass(frozen=True, slots=True, kw_only=True)
class VersionLink:
    timestamp: str
    url: str


@dataclass(slots=True, kw_only=True)
class Record:
    """One DMP. ``provenance_id`` is the owning provenance system."""

    dmp_id: Identifier
    title: str
    provenance_id: str | None = None
    description: str | None = None
    created: datetime | None = None
    modified: datetime | None = None
    contact: Person | None = None
    contributors: tuple[Person, ...] = ()
    project: Project | None = None
    additional_projects: tuple[Project, ...] = ()
    datasets: tuple[Dataset, ...] = ()
    fundings: tuple[FundingEntry, ...] = ()
    related_identifiers: tuple[RelatedIdentifierEntry, ...] = ()
    modifications: tuple[ModificationEntry, ...] = ()
    extras: dict[str, object] = field(default_factory=dict[str, object])
    version: str = LATEST
    tombstoned_at: datetime | None = None
    versions: tuple[VersionLink, ...] = ()

    @property
    def is_tombstoned(self) -> bool:
        return self.tombstoned_at is not None

    def has_related_identifier(self, identifier: str) -> bool:
        wanted = normalize_id(identifier)
        return any(entry.normalized == wanted for entry in self.related_identifiers)


def records_equivalent(left: Record, right: Record) -> bool:
    """Compare two records ignoring version bookkeeping and timestamps."""

    return _comparable(left) == _comparable(right)


def _comparable(record: Record) -> Record:
    return replace(record, created=None, modified=None, version=LATEST, versions=())


@dataclass(frozen=True, slots=True, kw_only=True)
class VersionSnapshot:
    """Immutable copy of a record as it was at ``timestamp``."""

    dmp_id: str
    timestamp: datetime
    record: Record
