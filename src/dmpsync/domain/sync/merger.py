"""Owner-aware reconciliation of a writer's proposed record against the current one.

The owner controls the free-form fields and its own funding and related
identifier entries. Every other writer may only contribute funding and related
identifier entries, each tagged with its provenance id. Nothing a writer does
removes or rewrites entries tagged by a different provenance, and terminal
funding entries are append-only.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dmpsync.domain.model import (
        FundingEntry,
        ModificationEntry,
        Record,
        RelatedIdentifierEntry,
    )

log = logging.getLogger(__name__)


def reconcile(
    owner_id: str | None,
    writer_id: str,
    current: Record,
    proposed: Record,
    *,
    now: datetime | None = None,
) -> Record:
    """Return the record that results from ``writer_id`` submitting ``proposed``."""

    timestamp = now or datetime.now(tz=UTC)
    is_owner = owner_id is not None and writer_id == owner_id

    if is_owner:
        base = replace(
            proposed,
            dmp_id=current.dmp_id,
            provenance_id=current.provenance_id,
            created=current.created,
            modified=current.modified,
            version=current.version,
            tombstoned_at=current.tombstoned_at,
            versions=(),
            modifications=merge_modifications(current.modifications, proposed.modifications),
        )
    else:
        if _free_form_changed(current, proposed):
            log.info(
                "Ignoring free-form changes from %s to %s; only the owner may edit them",
                writer_id,
                current.dmp_id.identifier,
            )
        base = replace(current, versions=())

    return replace(
        base,
        fundings=merge_fundings(
            current.fundings,
            proposed.fundings,
            owner_id=owner_id,
            writer_id=writer_id,
            now=timestamp,
        ),
        related_identifiers=merge_related_identifiers(
            current.related_identifiers,
            proposed.related_identifiers,
            owner_id=owner_id,
            writer_id=writer_id,
        ),
    )


def _free_form_changed(current: Record, proposed: Record) -> bool:
    return (
        current.title != proposed.title
        or current.description != proposed.description
        or current.contact != proposed.contact
        or current.contributors != proposed.contributors
        or current.project != proposed.project
        or current.additional_projects != proposed.additional_projects
        or current.datasets != proposed.datasets
        or current.extras != proposed.extras
    )


def merge_modifications(
    current: Sequence[ModificationEntry],
    proposed: Iterable[ModificationEntry],
) -> tuple[ModificationEntry, ...]:
    """Keep every entry's payload and only take status decisions from ``proposed``."""

    decisions = {entry.id: entry.status for entry in proposed}
    merged: list[ModificationEntry] = []
    for entry in current:
        status = decisions.get(entry.id, entry.status)
        if status is not entry.status:
            log.info("Modification %s moved from %s to %s", entry.id, entry.status, status)
            entry = entry.with_status(status)
        merged.append(entry)
    return tuple(merged)


# Funding entries -----------------------------------------------------------


def merge_fundings(
    current: Sequence[FundingEntry],
    proposed: Iterable[FundingEntry],
    *,
    owner_id: str | None,
    writer_id: str,
    now: datetime,
) -> tuple[FundingEntry, ...]:
    """Apply ``writer_id``'s funding deltas to ``current``.

    A delta only updates an open entry the writer owns: its own tagged entries,
    or the untagged ones when the writer is the owner. Anything else is appended.
    """

    is_owner = owner_id is not None and writer_id == owner_id
    writer_tags = {None, writer_id}
    owned_tags: set[str | None] = writer_tags if is_owner else {writer_id}
    merged = list(current)
    claimed: set[int] = set()

    for delta in proposed:
        if delta.provenance_id not in writer_tags:
            continue
        unchanged = _index_of_signature(merged, delta)
        if unchanged is not None:
            claimed.add(unchanged)
            continue
        if delta.status is None and delta.grant_id is None:
            log.debug("Skipping funding delta without status or grant from %s", writer_id)
            continue

        target = _newest_open_match(merged, delta, owned_tags)
        if target is not None:
            merged[target] = _apply_funding_delta(
                merged[target], delta, writer_id=writer_id, is_owner=is_owner, now=now
            )
            claimed.add(target)
            continue

        merged.append(_new_funding_entry(delta, writer_id=writer_id, is_owner=is_owner, now=now))
        claimed.add(len(merged) - 1)

    if not is_owner:
        return tuple(merged)

    # The owner's submission replaces its own open entries; terminal ones stay.
    return tuple(
        entry
        for index, entry in enumerate(merged)
        if index in claimed or entry.is_terminal or entry.provenance_id not in writer_tags
    )


def _index_of_signature(entries: Sequence[FundingEntry], delta: FundingEntry) -> int | None:
    signature = delta.signature()
    for index, entry in enumerate(entries):
        if entry.signature() == signature:
            return index
    return None


def _newest_open_match(
    entries: Sequence[FundingEntry],
    delta: FundingEntry,
    writer_tags: set[str | None],
) -> int | None:
    candidates = [
        index
        for index, entry in enumerate(entries)
        if not entry.is_terminal
        and entry.provenance_id in writer_tags
        and entry.same_funder(delta)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda index: (_created_key(entries[index]), index))


def _created_key(entry: FundingEntry) -> datetime:
    if entry.created_at is None:
        return datetime.min.replace(tzinfo=UTC)
    if entry.created_at.tzinfo is None:
        return entry.created_at.replace(tzinfo=UTC)
    return entry.created_at


def _apply_funding_delta(
    existing: FundingEntry,
    delta: FundingEntry,
    *,
    writer_id: str,
    is_owner: bool,
    now: datetime,
) -> FundingEntry:
    grant = existing.grant_id
    if delta.grant_id is not None and (
        grant is None or grant.normalized != delta.grant_id.normalized
    ):
        grant = replace(
            delta.grant_id,
            provenance_id=None if is_owner else writer_id,
            created_at=now,
        )
    return replace(
        existing,
        name=delta.name or existing.name,
        funder_id=existing.funder_id or delta.funder_id,
        status=delta.status if is_owner else (delta.status or existing.status),
        grant_id=grant,
        opportunity_id=delta.opportunity_id or existing.opportunity_id,
        provenance_id=existing.provenance_id if is_owner else writer_id,
        created_at=existing.created_at or now,
    )


def _new_funding_entry(
    delta: FundingEntry,
    *,
    writer_id: str,
    is_owner: bool,
    now: datetime,
) -> FundingEntry:
    tag = None if is_owner else writer_id
    grant = delta.grant_id
    if grant is not None:
        grant = replace(grant, provenance_id=tag, created_at=grant.created_at or now)
    return replace(delta, provenance_id=tag, grant_id=grant, created_at=delta.created_at or now)


# Related identifiers -------------------------------------------------------


def merge_related_identifiers(
    current: Sequence[RelatedIdentifierEntry],
    proposed: Iterable[RelatedIdentifierEntry],
    *,
    owner_id: str | None,
    writer_id: str,
) -> tuple[RelatedIdentifierEntry, ...]:
    """Replace the writer's own entries with its submission, keeping everyone else's.

    Entries keep their position in ``current``; new contributions go last.
    """

    is_owner = owner_id is not None and writer_id == owner_id
    writer_tags = {None, writer_id}
    tag = None if is_owner else writer_id

    def is_writers(entry: RelatedIdentifierEntry) -> bool:
        if is_owner:
            return entry.provenance_id in writer_tags
        return entry.provenance_id == writer_id

    retained_keys = {entry.normalized for entry in current if not is_writers(entry)}
    contributed: dict[str, RelatedIdentifierEntry] = {}
    for entry in proposed:
        key = entry.normalized
        if entry.provenance_id not in writer_tags or key is None:
            continue
        if key in retained_keys or key in contributed:
            continue
        contributed[key] = replace(entry, provenance_id=tag)

    merged: list[RelatedIdentifierEntry] = []
    for entry in current:
        if not is_writers(entry):
            merged.append(entry)
            continue
        key = entry.normalized
        if key is not None and key in contributed:
            merged.append(contributed.pop(key))
    merged.extend(contributed.values())
    return tuple(merged)
