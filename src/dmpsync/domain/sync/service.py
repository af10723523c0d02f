"""Record write service: the one place where versioning, merging and promotion meet.

Every public method runs inside a single unit of work. Any failure before
``commit`` rolls back the snapshot together with the authoritative write, and
events are only published once the transaction has committed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from dmpsync.domain.errors import (
    MSG_UNKNOWN,
    AllocationExhaustedError,
    AlreadyExistsError,
    ForbiddenError,
    HistoricalVersionError,
    NoChangesError,
    NotFoundError,
)
from dmpsync.domain.model import (
    LATEST,
    TOMBSTONE,
    HarvesterCandidateRecord,
    Identifier,
    records_equivalent,
)
from dmpsync.domain.model.keys import is_historical, same_dmp_id, version_label

from .identifiers import DEFAULT_ATTEMPTS, allocate_dmp_id
from .ledger import append_modification, changes_from_works, promote, propose, track_candidates
from .merger import reconcile
from .notifications import events_for_write, publish_all
from .versioner import DEFAULT_DEBOUNCE, list_versions, should_snapshot, snapshot

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from dmpsync.domain.model import (
        CandidateWork,
        ComparisonResult,
        ModificationEntry,
        ProposedChanges,
        Record,
        VersionLink,
    )
    from dmpsync.domain.ports import EventPublisher, RecordStore, SyncUnitOfWork

log = getLogger(__name__)

DEFAULT_DMP_ID_BASE_URL = "https://doi.org/"
DEFAULT_API_BASE_URL = "https://api.dmphub.example.org/"
OBSOLETE_PREFIX = "OBSOLETE: "


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class HarvestOutcome:
    """What a harvest submission added to one record."""

    dmp_id: str
    modification: ModificationEntry | None
    tracked: int


@dataclass(slots=True, kw_only=True)
class RecordService:
    unit_of_work_factory: Callable[[], SyncUnitOfWork]
    publisher: EventPublisher | None = None
    dmp_id_shoulder: str | None = None
    dmp_id_base_url: str = DEFAULT_DMP_ID_BASE_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    version_debounce: timedelta = DEFAULT_DEBOUNCE
    id_allocation_attempts: int = DEFAULT_ATTEMPTS
    clock: Callable[[], datetime] = field(default=_utcnow)

    # Reads ---------------------------------------------------------------

    def get(self, dmp_id: str, version: str = LATEST) -> Record:
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            record = store.get(dmp_id, version)
            if record is None and is_historical(version):
                # The newest entry in the version list is the latest state itself.
                latest = store.get(dmp_id)
                if latest is not None and latest.modified is not None:
                    if version_label(latest.modified) == version:
                        record = latest
            if record is None:
                raise NotFoundError()
            return replace(record, versions=self._versions(store, dmp_id))

    def versions(self, dmp_id: str) -> tuple[VersionLink, ...]:
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            if not store.exists(dmp_id):
                raise NotFoundError()
            return self._versions(store, dmp_id)

    # Writes --------------------------------------------------------------

    def create(self, draft: Record, *, writer_id: str | None) -> Record:
        """Register ``draft`` as a new record owned by ``writer_id``."""

        writer = _require_writer(writer_id)
        now = self.clock()
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            dmp_id = self._resolve_new_id(draft, store)
            record = replace(
                draft,
                dmp_id=dmp_id,
                provenance_id=writer,
                created=now,
                modified=now,
                version=LATEST,
                tombstoned_at=None,
                versions=(),
            )
            store.put(record)
            uow.commit()
        log.info("Created %s for %s", record.dmp_id.identifier, writer)

        publish_all(self.publisher, events_for_write(record, writer))
        return record

    def update(self, dmp_id: str, proposed: Record, *, writer_id: str | None) -> Record:
        """Reconcile ``proposed`` from ``writer_id`` into the latest version of ``dmp_id``.

        Raises ``NoChangesError`` when the reconciled record equals the current one.
        """

        writer = _require_writer(writer_id)
        if not same_dmp_id(proposed.dmp_id.identifier, dmp_id):
            log.warning(
                "Writer %s submitted %s for %s", writer, proposed.dmp_id.identifier, dmp_id
            )
            raise ForbiddenError()
        if is_historical(proposed.version) or proposed.version == TOMBSTONE:
            raise HistoricalVersionError()

        now = self.clock()
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            current = store.get(dmp_id)
            if current is None:
                raise NotFoundError(MSG_UNKNOWN)

            owner = current.provenance_id
            merged = reconcile(owner, writer, current, proposed, now=now)

            candidates: HarvesterCandidateRecord | None = None
            if writer == owner:
                existing = store.get_candidates(dmp_id)
                if existing is not None:
                    merged, candidates = promote(merged, existing)
                    if candidates.works == existing.works:
                        candidates = None

            if records_equivalent(merged, current):
                raise NoChangesError()

            if should_snapshot(current, writer, now=now, debounce=self.version_debounce):
                snapshot(current, store=store, now=now)
            else:
                log.debug("Collapsing write into the latest version of %s", dmp_id)

            updated = replace(merged, modified=now, version=LATEST, versions=())
            store.put(updated)
            if candidates is not None:
                candidates.updated_at = now
                store.put_candidates(candidates)
            uow.commit()
            versions = self._versions(store, dmp_id)

        log.info("Updated %s by %s", dmp_id, writer)
        publish_all(self.publisher, events_for_write(updated, writer))
        return replace(updated, versions=versions)

    def tombstone(self, dmp_id: str, *, writer_id: str | None, version: str = LATEST) -> Record:
        """Retire ``dmp_id``. Only the owner may do this, and only to the latest version."""

        writer = _require_writer(writer_id)
        if version != LATEST:
            raise HistoricalVersionError()

        now = self.clock()
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            current = store.get(dmp_id)
            if current is None:
                raise NotFoundError()
            if current.provenance_id != writer:
                raise ForbiddenError()

            tombstoned = replace(
                current,
                title=f"{OBSOLETE_PREFIX}{current.title}",
                modified=now,
                tombstoned_at=now,
                version=TOMBSTONE,
                versions=(),
            )
            store.put(tombstoned)
            store.delete(dmp_id, LATEST)
            uow.commit()

        log.info("Tombstoned %s by %s", dmp_id, writer)
        publish_all(self.publisher, events_for_write(tombstoned, writer))
        return tombstoned

    def propose(
        self,
        dmp_id: str,
        changes: ProposedChanges,
        *,
        writer_id: str | None,
        note: str | None = None,
    ) -> ModificationEntry | None:
        """Queue ``changes`` for review; ``None`` when everything was already known.

        Queuing does not version the record or touch its ``modified`` stamp.
        """

        writer = _require_writer(writer_id)
        now = self.clock()
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            current = store.get(dmp_id)
            if current is None:
                raise NotFoundError(MSG_UNKNOWN)
            entry = propose(current, writer, changes, note, now=now)
            if entry is None:
                return None
            store.put(append_modification(current, entry))
            uow.commit()
        log.info(
            "Queued modification %s on %s from %s (%d works, %d fundings)",
            entry.id,
            dmp_id,
            writer,
            len(entry.related_identifiers),
            len(entry.fundings),
        )
        return entry

    def record_harvest(
        self,
        dmp_id: str,
        scored: Sequence[tuple[CandidateWork, ComparisonResult]],
        *,
        writer_id: str | None,
        note: str | None = None,
    ) -> HarvestOutcome:
        """Queue matched works and remember them as harvester candidates."""

        writer = _require_writer(writer_id)
        now = self.clock()
        with self.unit_of_work_factory() as uow:
            store = uow.repositories.records
            current = store.get(dmp_id)
            if current is None:
                raise NotFoundError(MSG_UNKNOWN)

            changes = changes_from_works(work for work, _result in scored)
            entry = propose(current, writer, changes, note, now=now)
            candidates = store.get_candidates(dmp_id) or HarvesterCandidateRecord(
                dmp_id=current.dmp_id.identifier
            )
            tracked = track_candidates(candidates, scored, provenance=writer, now=now)

            if entry is not None:
                store.put(append_modification(current, entry))
            if tracked:
                store.put_candidates(candidates)
            if entry is not None or tracked:
                uow.commit()

        return HarvestOutcome(dmp_id=dmp_id, modification=entry, tracked=tracked)

    # Helpers -------------------------------------------------------------

    def _resolve_new_id(self, draft: Record, store: RecordStore) -> Identifier:
        requested = draft.dmp_id.identifier.strip()
        if requested:
            if store.exists(requested) or store.exists(requested, TOMBSTONE):
                raise AlreadyExistsError()
            return Identifier(type=draft.dmp_id.type or "doi", identifier=requested)

        if not self.dmp_id_shoulder:
            raise AllocationExhaustedError("No DMP ID shoulder is configured.")
        minted = allocate_dmp_id(
            lambda candidate: store.exists(candidate) or store.exists(candidate, TOMBSTONE),
            shoulder=self.dmp_id_shoulder,
            base_url=self.dmp_id_base_url,
            attempts=self.id_allocation_attempts,
        )
        return Identifier(type="doi", identifier=minted)

    def _versions(self, store: RecordStore, dmp_id: str) -> tuple[VersionLink, ...]:
        return list_versions(dmp_id, store=store, api_base_url=self.api_base_url)


def _require_writer(writer_id: str | None) -> str:
    if writer_id is None or not writer_id.strip():
        raise ForbiddenError()
    return writer_id.strip()
