"""SQLAlchemy mapping metadata for the record store.

Records, snapshots, tombstones and harvester candidates share one item table
keyed by ``(pk, sk)``; the payload is the rendered JSON document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Column, DateTime, Dialect, String, Table, TypeDecorator, orm
from sqlalchemy.orm import configure_mappers

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


@dataclass(kw_only=True)
class StoredItem:
    """One row of the item table."""

    pk: str
    sk: str
    payload: dict[str, object]
    modified_at: datetime | None = None


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

dmp_item_table = Table(
    "dmp_item",
    mapper_registry.metadata,
    Column("pk", String(255), primary_key=True),
    Column("sk", String(255), primary_key=True),
    Column("payload", JSON, nullable=False),
    Column("modified_at", UTCDateTime(), nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the item table."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(StoredItem, dmp_item_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
