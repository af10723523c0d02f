from __future__ import annotations

from dmpsync.domain.errors import EventPublishError
from dmpsync.domain.model import DomainEvent, EventKind, RelatedIdentifierEntry
from dmpsync.domain.sync import citable_related_identifiers, events_for_write, publish_all
from tests.helpers.records import OWNER, RecordingPublisher, make_record, make_related


def test_citable_identifiers_skip_cited_dois_and_own_metadata() -> None:
    record = make_record(
        related_identifiers=(
            make_related("https://doi.org/10.1/a"),
            RelatedIdentifierEntry(identifier="https://example.org/a", type="url"),
            RelatedIdentifierEntry(identifier="https://doi.org/10.1/b", citation="Doe (2024)"),
            make_related(
                "https://doi.org/10.1/plan",
                descriptor="is_metadata_for",
                work_type="output_management_plan",
            ),
        )
    )

    citable = citable_related_identifiers(record)

    assert [entry.identifier for entry in citable] == [
        "https://doi.org/10.1/a",
        "https://example.org/a",
    ]


def test_owner_write_announces_registration_and_citations() -> None:
    record = make_record(related_identifiers=(make_related("https://doi.org/10.1/a"),))

    owner_events = events_for_write(record, OWNER)
    harvester_events = events_for_write(record, "datacite")

    assert [event.kind for event in owner_events] == [
        EventKind.REGISTRATION_UPDATE,
        EventKind.CITATION_FETCH,
    ]
    assert owner_events[1].detail == {"identifiers": ["https://doi.org/10.1/a"]}
    assert [event.kind for event in harvester_events] == [EventKind.CITATION_FETCH]


def test_publish_failures_are_logged_not_raised() -> None:
    class FlakyPublisher(RecordingPublisher):
        def publish(self, event: DomainEvent) -> None:
            if event.kind is EventKind.REGISTRATION_UPDATE:
                raise EventPublishError("webhook down")
            super().publish(event)

    publisher = FlakyPublisher()
    events = [
        DomainEvent(kind=EventKind.REGISTRATION_UPDATE, dmp_id="x", source=OWNER),
        DomainEvent(kind=EventKind.CITATION_FETCH, dmp_id="x", source=OWNER),
    ]

    assert publish_all(publisher, events) == 1
    assert [event.kind for event in publisher.events] == [EventKind.CITATION_FETCH]
    assert publish_all(None, events) == 0
