"""Events emitted after a record write has been persisted."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .enums import EventKind


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainEvent:
    kind: EventKind
    dmp_id: str
    source: str
    detail: Mapping[str, object] = field(default_factory=dict[str, object])
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
