"""Port for the notification collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dmpsync.domain.model import DomainEvent


@runtime_checkable
class EventPublisher(Protocol):
    """Deliver an event; raise ``EventPublishError`` when delivery fails."""

    def publish(self, event: DomainEvent) -> None: ...
