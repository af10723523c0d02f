"""Events to announce once a write has been persisted."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dmpsync.domain.errors import EventPublishError
from dmpsync.domain.model import Descriptor, DomainEvent, EventKind, WorkType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dmpsync.domain.model import Record, RelatedIdentifierEntry
    from dmpsync.domain.ports import EventPublisher

log = logging.getLogger(__name__)


def citable_related_identifiers(record: Record) -> tuple[RelatedIdentifierEntry, ...]:
    """Entries a citation can still be fetched for.

    Skips the plan's own metadata link and DOIs that already carry a citation.
    """

    citable: list[RelatedIdentifierEntry] = []
    for entry in record.related_identifiers:
        if (
            (entry.work_type or "").lower() == WorkType.OUTPUT_MANAGEMENT_PLAN
            and (entry.descriptor or "").lower() == Descriptor.IS_METADATA_FOR
        ):
            continue
        if (entry.type or "").lower() == "doi" and entry.citation:
            continue
        citable.append(entry)
    return tuple(citable)


def events_for_write(record: Record, writer_id: str) -> list[DomainEvent]:
    dmp_id = record.dmp_id.identifier
    events: list[DomainEvent] = []
    if writer_id == record.provenance_id:
        events.append(
            DomainEvent(kind=EventKind.REGISTRATION_UPDATE, dmp_id=dmp_id, source=writer_id)
        )
    citable = citable_related_identifiers(record)
    if citable:
        events.append(
            DomainEvent(
                kind=EventKind.CITATION_FETCH,
                dmp_id=dmp_id,
                source=writer_id,
                detail={"identifiers": [entry.identifier for entry in citable]},
            )
        )
    return events


def publish_all(publisher: EventPublisher | None, events: Iterable[DomainEvent]) -> int:
    """Deliver ``events``; failures are logged and never raised. Returns deliveries."""

    if publisher is None:
        return 0
    delivered = 0
    for event in events:
        try:
            publisher.publish(event)
        except EventPublishError as exc:
            log.warning("Unable to publish %s for %s: %s", event.kind, event.dmp_id, exc)
            continue
        delivered += 1
    return delivered
