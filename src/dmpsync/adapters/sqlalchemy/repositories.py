"""Record store backed by a SQLAlchemy session."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from dmpsync.adapters.documents import dump_candidates, dump_record, parse_candidates, parse_record
from dmpsync.adapters.sqlalchemy.mappings import StoredItem, dmp_item_table
from dmpsync.domain.errors import StoreError
from dmpsync.domain.model import LATEST
from dmpsync.domain.model.keys import (
    SK_HARVESTER_MODS,
    SK_PREFIX,
    SK_TOMBSTONE,
    pk_for,
    sk_for,
    version_from_sk,
    version_label,
)

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.orm import Session

    from dmpsync.domain.model import HarvesterCandidateRecord, Record, VersionSnapshot

log = logging.getLogger(__name__)


class SqlAlchemyRecordStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, dmp_id: str, version: str = LATEST) -> Record | None:
        item = self._item(pk_for(dmp_id), sk_for(version))
        if item is None:
            return None
        return replace(parse_record(item.payload), version=version_from_sk(item.sk))

    def exists(self, dmp_id: str, version: str = LATEST) -> bool:
        return self._item(pk_for(dmp_id), sk_for(version)) is not None

    def put(self, record: Record) -> None:
        self._upsert(
            pk_for(record.dmp_id.identifier),
            sk_for(record.version),
            dump_record(replace(record, versions=())),
            record.modified,
        )

    def put_snapshot(self, snapshot: VersionSnapshot) -> None:
        """Store ``snapshot`` once; snapshots are immutable.

        Re-sending the stored state is a no-op. A different state under an
        existing label raises ``StoreError``.
        """

        pk = pk_for(snapshot.dmp_id)
        sk = sk_for(version_label(snapshot.timestamp))
        payload = dump_record(snapshot.record)
        existing = self._item(pk, sk)
        if existing is not None:
            if existing.payload != payload:
                raise StoreError(f"A different snapshot is already stored as {pk} {sk}")
            log.debug("Snapshot %s %s already stored", pk, sk)
            return
        self._upsert(pk, sk, payload, snapshot.timestamp)

    def delete(self, dmp_id: str, version: str = LATEST) -> None:
        item = self._item(pk_for(dmp_id), sk_for(version))
        if item is None:
            return
        self.session.delete(item)
        self._flush()

    def list_version_timestamps(self, dmp_id: str) -> tuple[datetime, ...]:
        stmt = (
            select(dmp_item_table.c.modified_at)
            .where(dmp_item_table.c.pk == pk_for(dmp_id))
            .where(dmp_item_table.c.sk.startswith(SK_PREFIX))
            .where(dmp_item_table.c.sk != SK_TOMBSTONE)
            .where(dmp_item_table.c.modified_at.is_not(None))
            .order_by(dmp_item_table.c.modified_at)
        )
        return tuple(self.session.execute(stmt).scalars())

    def get_candidates(self, dmp_id: str) -> HarvesterCandidateRecord | None:
        item = self._item(pk_for(dmp_id), SK_HARVESTER_MODS)
        if item is None:
            return None
        return parse_candidates(item.payload)

    def put_candidates(self, candidates: HarvesterCandidateRecord) -> None:
        self._upsert(
            pk_for(candidates.dmp_id),
            SK_HARVESTER_MODS,
            dump_candidates(candidates),
            candidates.updated_at,
        )

    def _item(self, pk: str, sk: str) -> StoredItem | None:
        try:
            return self.session.get(StoredItem, (pk, sk))
        except SQLAlchemyError as exc:
            raise StoreError(f"Unable to read {pk} {sk}: {exc}") from exc

    def _upsert(
        self,
        pk: str,
        sk: str,
        payload: dict[str, object],
        modified_at: datetime | None,
    ) -> None:
        item = self._item(pk, sk)
        if item is None:
            self.session.add(StoredItem(pk=pk, sk=sk, payload=payload, modified_at=modified_at))
        else:
            item.payload = payload
            item.modified_at = modified_at
        self._flush()

    def _flush(self) -> None:
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            log.error("Record store write failed: %s", exc)
            raise StoreError() from exc
