from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from dmpsync.harvest import chunked, run_chunked

if TYPE_CHECKING:
    from collections.abc import Sequence


def test_chunked_splits_and_keeps_the_remainder() -> None:
    assert chunked(range(5), 2) == [[0, 1], [2, 3], [4]]
    assert chunked([], 3) == []
    with pytest.raises(ValueError, match="at least 1"):
        chunked([1], 0)


def test_run_chunked_processes_every_chunk() -> None:
    seen: list[int] = []
    lock = threading.Lock()

    def handler(chunk: Sequence[int]) -> None:
        with lock:
            seen.extend(chunk)

    report = run_chunked(range(10), handler, chunk_size=3, max_workers=2)

    assert sorted(seen) == list(range(10))
    assert report.ok
    assert (report.succeeded, report.failed, report.processed_items) == (4, 0, 10)


def test_a_failed_chunk_does_not_stop_the_others() -> None:
    seen: list[int] = []
    lock = threading.Lock()

    def handler(chunk: Sequence[int]) -> None:
        if 2 in chunk:
            raise RuntimeError("bad chunk")
        with lock:
            seen.extend(chunk)

    report = run_chunked([1, 2, 3, 4, 5, 6], handler, chunk_size=2, max_workers=3)

    assert not report.ok
    assert sorted(seen) == [3, 4, 5, 6]
    assert (report.succeeded, report.failed, report.processed_items) == (2, 1, 4)
    [failure] = report.errors
    assert (failure.index, failure.size) == (0, 2)
    assert isinstance(failure.error, RuntimeError)


def test_run_chunked_with_nothing_to_do() -> None:
    report = run_chunked([], lambda _chunk: None)

    assert report.ok
    assert report.processed_items == 0


def test_max_workers_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_workers"):
        run_chunked([1], lambda _chunk: None, max_workers=0)
