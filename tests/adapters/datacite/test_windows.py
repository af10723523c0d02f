from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dmpsync.adapters.datacite import search_years
from dmpsync.domain.model import Project
from tests.helpers.records import make_record


def _clock() -> datetime:
    return datetime(2025, 6, 1, tzinfo=UTC)


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("2022-01-01", "2024-12-31", ["2022", "2023", "2024", "2025"]),
        ("2015-01-01", "2024-12-31", ["2022", "2023", "2024", "2025"]),
        ("2023-01-01", "2023-06-30", ["2023"]),
        (None, "2024-12-31", ["2023", "2024", "2025"]),
        ("2026-01-01", "2028-12-31", []),
    ],
)
def test_search_years_follow_the_project_dates(
    start: str | None, end: str | None, expected: list[str]
) -> None:
    record = make_record(project=Project(title="Soil", start=start, end=end))

    assert search_years(record, clock=_clock) == expected


def test_search_years_fall_back_to_the_creation_year() -> None:
    record = make_record(modified=datetime(2024, 2, 1, tzinfo=UTC))

    assert search_years(record, clock=_clock) == ["2024", "2025"]
