"""Snapshot gating and version listing."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final

from dmpsync.domain.errors import StoreError, VersioningError
from dmpsync.domain.model import VersionLink, VersionSnapshot
from dmpsync.domain.model.keys import dmp_id_path, version_label

if TYPE_CHECKING:
    from dmpsync.domain.model import Record
    from dmpsync.domain.ports import RecordStore

log = logging.getLogger(__name__)

DEFAULT_DEBOUNCE: Final[timedelta] = timedelta(hours=1)


def should_snapshot(
    current: Record,
    writer_id: str,
    *,
    now: datetime,
    debounce: timedelta = DEFAULT_DEBOUNCE,
) -> bool:
    """Whether ``current`` has to be preserved before ``writer_id`` overwrites it.

    Non-owner writes always snapshot. Owner writes snapshot once the debounce
    window since the last modification has passed, so a burst of owner edits
    collapses into the latest version.
    """

    if writer_id != current.provenance_id:
        return True
    if current.modified is None:
        return True
    return now - _aware(current.modified) >= debounce


def snapshot(current: Record, *, store: RecordStore, now: datetime) -> VersionSnapshot:
    """Persist an immutable copy of ``current`` keyed by its last modification."""

    timestamp = _aware(current.modified) if current.modified is not None else now
    label = version_label(timestamp)
    frozen = replace(current, version=label, versions=())
    taken = VersionSnapshot(dmp_id=current.dmp_id.identifier, timestamp=timestamp, record=frozen)
    try:
        store.put_snapshot(taken)
    except StoreError as exc:
        log.error("Snapshot of %s at %s failed: %s", current.dmp_id.identifier, label, exc)
        raise VersioningError() from exc
    log.info("Versioned %s at %s", current.dmp_id.identifier, label)
    return taken


def list_versions(
    dmp_id: str,
    *,
    store: RecordStore,
    api_base_url: str,
) -> tuple[VersionLink, ...]:
    """Return ascending version links; empty when the record was never versioned."""

    timestamps = sorted({version_label(ts) for ts in store.list_version_timestamps(dmp_id)})
    if len(timestamps) <= 1:
        return ()
    base = api_base_url if api_base_url.endswith("/") else f"{api_base_url}/"
    path = dmp_id_path(dmp_id)
    return tuple(
        VersionLink(timestamp=label, url=f"{base}dmps/{path}?version={label}")
        for label in timestamps
    )


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
