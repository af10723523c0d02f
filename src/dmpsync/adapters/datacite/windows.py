"""Publication years worth searching for works related to a record."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dmpsync.domain.model import Record

MAX_SPAN_YEARS = 3


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _year(value: str | None) -> int | None:
    if value is None:
        return None
    head = value.strip()[:4]
    return int(head) if head.isdigit() else None


def search_years(record: Record, *, clock: Clock = _utcnow) -> list[str]:
    """Years from the project start to one year past its end.

    Missing bounds are derived from each other (or from the record's creation
    year). The window never reaches past the current year and spans at most
    four years, keeping the most recent ones.
    """

    current = clock().year
    created = record.created.year if record.created is not None else current
    project = record.project

    start = _year(project.start) if project is not None else None
    end = _year(project.end) if project is not None else None

    if start is None:
        start = end - 1 if end is not None else created
    if end is None:
        end = start + 1

    if start > current:
        return []
    if start == end:
        return [str(start)]

    end = min(end + 1, current)
    if end - start > MAX_SPAN_YEARS:
        start = end - MAX_SPAN_YEARS
    return [str(year) for year in range(start, end + 1)]


__all__ = ["Clock", "search_years"]
