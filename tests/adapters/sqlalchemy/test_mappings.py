from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import inspect, select

from dmpsync.adapters.sqlalchemy import create_all_tables, start_mappers
from dmpsync.adapters.sqlalchemy.mappings import StoredItem, dmp_item_table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_create_all_tables_registers_item_table(sqlite_engine: Engine) -> None:
    create_all_tables(sqlite_engine)

    assert "dmp_item" in set(inspect(sqlite_engine).get_table_names())


def test_modified_at_is_stored_as_utc(sqlite_session: Session) -> None:
    local = datetime(2024, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    sqlite_session.add(
        StoredItem(pk="DMP#doi.org/10.1/x", sk="VERSION#latest", payload={}, modified_at=local)
    )
    sqlite_session.commit()

    stored = sqlite_session.execute(select(dmp_item_table.c.modified_at)).scalar_one()

    assert stored == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert stored.tzinfo is not None
