"""SQLAlchemy adapter package for dmpsync."""

from __future__ import annotations

from .mappings import StoredItem, create_all_tables, dmp_item_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyRecordStore

__all__ = [
    "SqlAlchemyRecordStore",
    "StoredItem",
    "create_all_tables",
    "dmp_item_table",
    "mapper_registry",
    "start_mappers",
]
