"""Ports for persisting records, their versions and harvester scratch space."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from dmpsync.domain.model import LATEST

if TYPE_CHECKING:
    from datetime import datetime

    from dmpsync.domain.model import HarvesterCandidateRecord, Record, VersionSnapshot


@runtime_checkable
class RecordStore(Protocol):
    """Key-value style store addressed by record identifier and version selector.

    ``version`` is ``"latest"``, ``"tombstone"`` or a snapshot timestamp label.
    Write failures surface as ``StoreError``.
    """

    def get(self, dmp_id: str, version: str = LATEST) -> Record | None: ...

    def exists(self, dmp_id: str, version: str = LATEST) -> bool: ...

    def put(self, record: Record) -> None: ...

    def put_snapshot(self, snapshot: VersionSnapshot) -> None: ...

    def delete(self, dmp_id: str, version: str = LATEST) -> None: ...

    def list_version_timestamps(self, dmp_id: str) -> tuple[datetime, ...]: ...

    def get_candidates(self, dmp_id: str) -> HarvesterCandidateRecord | None: ...

    def put_candidates(self, candidates: HarvesterCandidateRecord) -> None: ...
