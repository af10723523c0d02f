"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dmpsync.adapters.datacite import DataCiteClient, find_related_works, search_years
from dmpsync.adapters.events import HttpEventPublisher, LoggingEventPublisher
from dmpsync.adapters.sqlalchemy.unit_of_work import SqlAlchemySyncUnitOfWork, is_started, startup
from dmpsync.config import get_datacite_config, get_events_config, get_sync_config
from dmpsync.domain.errors import DmpSyncError
from dmpsync.domain.ports import SyncUnitOfWork
from dmpsync.domain.sync import Comparator, HarvestOutcome, RecordService, changes_from_works
from dmpsync.harvest import BatchReport, run_chunked
from dmpsync.harvest.pool import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_WORKERS

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dmpsync.adapters.datacite.fetcher import GraphQLClient
    from dmpsync.config import DataCiteConfig, SyncConfig
    from dmpsync.domain.model import CandidateWork, ComparisonResult, ModificationEntry
    from dmpsync.domain.ports import EventPublisher

UnitOfWorkFactory = Callable[[], SyncUnitOfWork]

log = getLogger(__name__)

HARVEST_NOTE = "data received from DataCite"


def build_event_publisher() -> EventPublisher:
    """Webhook publisher when ``DMPSYNC_EVENTS_URL`` is set, log-only otherwise."""

    config = get_events_config()
    if config is None:
        return LoggingEventPublisher()
    return HttpEventPublisher(config=config.resilience, path=config.path)


def build_record_service(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    publisher: EventPublisher | None = None,
    config: SyncConfig | None = None,
) -> RecordService:
    """Wire a ``RecordService`` to the configured store and publisher."""

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_config = config or get_sync_config()
    return RecordService(
        unit_of_work_factory=unit_of_work_factory or SqlAlchemySyncUnitOfWork,
        publisher=publisher or build_event_publisher(),
        dmp_id_shoulder=effective_config.dmp_id_shoulder,
        dmp_id_base_url=effective_config.dmp_id_base_url,
        api_base_url=effective_config.api_base_url,
        version_debounce=effective_config.version_debounce,
        id_allocation_attempts=effective_config.id_allocation_attempts,
    )


def compare_works(
    dmp_id: str,
    works: Iterable[CandidateWork],
    *,
    service: RecordService,
    config: SyncConfig | None = None,
) -> list[tuple[CandidateWork, ComparisonResult]]:
    """Score ``works`` against the latest version of ``dmp_id``."""

    record = service.get(dmp_id)
    bands = (config or get_sync_config()).confidence_bands
    comparator = Comparator.for_record(record, bands=bands)
    return [(work, comparator.compare(work)) for work in works]


def propose_works(
    dmp_id: str,
    works: Iterable[CandidateWork],
    *,
    writer_id: str,
    service: RecordService,
    note: str | None = None,
) -> ModificationEntry | None:
    """Queue ``works`` (and their awards) for the owner's review."""

    return service.propose(dmp_id, changes_from_works(works), writer_id=writer_id, note=note)


@dataclass(slots=True)
class HarvestSummary:
    report: BatchReport
    outcomes: list[HarvestOutcome] = field(default_factory=list[HarvestOutcome])

    @property
    def modifications(self) -> list[ModificationEntry]:
        return [outcome.modification for outcome in self.outcomes if outcome.modification]


def harvest_related_works(
    dmp_ids: Sequence[str],
    *,
    service: RecordService | None = None,
    client: GraphQLClient | None = None,
    datacite_config: DataCiteConfig | None = None,
    sync_config: SyncConfig | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
    include_researchers: bool = False,
    include_affiliations: bool = False,
) -> HarvestSummary:
    """Search DataCite for works related to each record and queue the matches."""

    effective_service = service or build_record_service(config=sync_config)
    effective_datacite = datacite_config or get_datacite_config()
    effective_sync = sync_config or get_sync_config()
    effective_client = client or DataCiteClient(config=effective_datacite)
    writer_id = effective_datacite.provenance_id

    outcomes: list[HarvestOutcome] = []
    lock = threading.Lock()

    def handle(chunk: Sequence[str]) -> None:
        for dmp_id in chunk:
            try:
                record = effective_service.get(dmp_id)
                comparator = Comparator.for_record(record, bands=effective_sync.confidence_bands)
            except DmpSyncError as exc:
                log.warning("Skipping harvest for %s: %s", dmp_id, exc)
                continue

            years = search_years(record)
            scored = find_related_works(
                comparator,
                years,
                client=effective_client,
                include_researchers=include_researchers,
                include_affiliations=include_affiliations,
            )
            if scored:
                outcome = effective_service.record_harvest(
                    dmp_id, scored, writer_id=writer_id, note=HARVEST_NOTE
                )
            else:
                outcome = HarvestOutcome(dmp_id=dmp_id, modification=None, tracked=0)
            with lock:
                outcomes.append(outcome)

    log.info(
        "Starting DataCite harvest: records=%d, chunk_size=%d, max_workers=%d",
        len(dmp_ids),
        chunk_size,
        max_workers,
    )
    report = run_chunked(dmp_ids, handle, chunk_size=chunk_size, max_workers=max_workers)
    summary = HarvestSummary(report=report, outcomes=outcomes)
    log.info(
        "Finished DataCite harvest: queued=%d, failed_chunks=%d",
        len(summary.modifications),
        report.failed,
    )
    return summary
