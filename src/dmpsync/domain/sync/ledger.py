"""Modification ledger: queue proposed additions and promote approved ones.

``propose`` turns a batch of candidate changes into one pending
``ModificationEntry``, skipping anything the record already knows about.
``promote`` runs during an owner write and folds approved harvester candidates
into the authoritative related identifiers.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from dmpsync.domain.model import (
    CandidateWorkStatus,
    FundingEntry,
    FundingStatus,
    GrantIdentifier,
    HarvesterCandidateRecord,
    Identifier,
    ModificationEntry,
    ModificationStatus,
    ProposedChanges,
    RelatedIdentifierEntry,
    WorkType,
    normalize_id,
)
from dmpsync.domain.model.keys import dmp_id_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from dmpsync.domain.model import CandidateWork, ComparisonResult, Record

log = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR = "references"


def propose(
    record: Record,
    writer: str,
    changes: ProposedChanges,
    note: str | None = None,
    *,
    now: datetime | None = None,
    token: Callable[[int], str] = secrets.token_hex,
) -> ModificationEntry | None:
    """Build a pending entry from ``changes``; ``None`` when nothing is new."""

    known_works = _known_works(record)
    own_id = record.dmp_id.normalized
    if own_id is not None:
        known_works.add(own_id)
    known_awards = _known_awards(record)

    related: list[RelatedIdentifierEntry] = []
    for entry in changes.related_identifiers:
        key = entry.normalized
        if key is None or key in known_works:
            continue
        known_works.add(key)
        related.append(replace(entry, provenance_id=writer))

    fundings: list[FundingEntry] = []
    for entry in changes.fundings:
        key = entry.grant_id.normalized if entry.grant_id is not None else None
        if key is None or key in known_awards:
            continue
        known_awards.add(key)
        fundings.append(replace(entry, provenance_id=writer))

    if not related and not fundings:
        log.debug("Nothing new to propose for %s from %s", record.dmp_id.identifier, writer)
        return None

    timestamp = now or datetime.now(tz=UTC)
    return ModificationEntry(
        id=f"{timestamp:%Y-%m-%d}-{token(4)}",
        provenance=writer,
        timestamp=timestamp,
        note=note,
        related_identifiers=tuple(related),
        fundings=tuple(fundings),
    )


def append_modification(record: Record, entry: ModificationEntry) -> Record:
    return replace(record, modifications=(*record.modifications, entry))


def _known_works(record: Record) -> set[str]:
    entries = [*record.related_identifiers]
    for modification in record.modifications:
        entries.extend(modification.related_identifiers)
    return {entry.normalized for entry in entries if entry.normalized is not None}


def _known_awards(record: Record) -> set[str]:
    fundings = [*record.fundings]
    for modification in record.modifications:
        fundings.extend(modification.fundings)

    known: set[str] = set()
    for entry in fundings:
        for value in (
            entry.grant_id.normalized if entry.grant_id is not None else None,
            entry.opportunity_id.normalized if entry.opportunity_id is not None else None,
        ):
            if value is not None:
                known.add(value)
    return known


def changes_from_works(works: Iterable[CandidateWork]) -> ProposedChanges:
    """Translate harvested works into ledger candidates."""

    related: list[RelatedIdentifierEntry] = []
    fundings: list[FundingEntry] = []
    for work in works:
        if not work.identifier:
            continue
        related.append(
            RelatedIdentifierEntry(
                identifier=work.identifier,
                type=identifier_type(work.identifier),
                descriptor=DEFAULT_DESCRIPTOR,
                work_type=_work_type(work.work_type),
                citation=work.citation,
            )
        )
        for funding in work.fundings:
            grant = funding.preferred_grant_id
            if grant is None:
                continue
            fundings.append(
                FundingEntry(
                    name=funding.funder_name,
                    status=FundingStatus.GRANTED,
                    grant_id=GrantIdentifier(type=identifier_type(grant), identifier=grant),
                    funder_id=(
                        Identifier(type=_funder_type(funding.funder_id), identifier=funding.funder_id)
                        if funding.funder_id
                        else None
                    ),
                )
            )
    return ProposedChanges(related_identifiers=tuple(related), fundings=tuple(fundings))


def identifier_type(value: str) -> str:
    lowered = value.strip().lower()
    if "doi" in lowered or lowered.startswith("10."):
        return "doi"
    if lowered.startswith("http"):
        return "url"
    return "other"


def _funder_type(value: str | None) -> str:
    lowered = (value or "").strip().lower()
    if "ror" in lowered:
        return "ror"
    if lowered.startswith("http"):
        return "url"
    return "other"


def _work_type(value: str | None) -> str:
    work_type = (value or "text").strip().lower()
    return WorkType.PUBLICATION.value if work_type == "text" else work_type


def track_candidates(
    candidates: HarvesterCandidateRecord,
    scored: Iterable[tuple[CandidateWork, ComparisonResult]],
    *,
    provenance: str,
    now: datetime | None = None,
) -> int:
    """Record newly discovered works as pending candidates; returns how many."""

    timestamp = now or datetime.now(tz=UTC)
    added = 0
    for work, result in scored:
        if not work.identifier or candidates.knows(work.identifier):
            continue
        candidates.works[work.identifier] = CandidateWorkStatus(
            identifier=work.identifier,
            provenance=provenance,
            type=identifier_type(work.identifier),
            descriptor=DEFAULT_DESCRIPTOR,
            work_type=_work_type(work.work_type),
            citation=work.citation,
            score=result.score,
            confidence=result.confidence,
            notes=result.notes,
            discovered_at=timestamp,
        )
        added += 1
    if added:
        candidates.updated_at = timestamp
    return added


def promote(
    record: Record,
    candidates: HarvesterCandidateRecord,
) -> tuple[Record, HarvesterCandidateRecord]:
    """Fold approved candidates into ``record``; drop promoted ones later rejected.

    Decisions recorded on the record's modification entries are copied onto the
    candidate record first. Pending candidates are left for a later cycle.
    """

    updated = HarvesterCandidateRecord(
        dmp_id=candidates.dmp_id,
        works=dict(candidates.works),
        updated_at=candidates.updated_at,
    )
    for modification in record.modifications:
        if modification.status is ModificationStatus.PENDING:
            continue
        for entry in modification.related_identifiers:
            if updated.set_status(entry.identifier, modification.status):
                log.debug(
                    "Candidate %s marked %s by modification %s",
                    entry.identifier,
                    modification.status,
                    modification.id,
                )

    own_id = dmp_id_path(record.dmp_id.identifier).lower()
    related = list(record.related_identifiers)
    for key, work in updated.works.items():
        normalized = normalize_id(key)
        if work.status is ModificationStatus.APPROVED:
            if normalized is None or dmp_id_path(key).lower() == own_id:
                continue
            if any(entry.normalized == normalized for entry in related):
                continue
            related.append(
                RelatedIdentifierEntry(
                    identifier=key,
                    type=work.type,
                    descriptor=work.descriptor,
                    work_type=work.work_type,
                    citation=work.citation,
                    provenance_id=work.provenance,
                )
            )
            log.info("Promoted %s onto %s", key, record.dmp_id.identifier)
        elif work.status is ModificationStatus.REJECTED:
            related = [
                entry
                for entry in related
                if not (entry.normalized == normalized and entry.provenance_id == work.provenance)
            ]

    return replace(record, related_identifiers=tuple(related)), updated
