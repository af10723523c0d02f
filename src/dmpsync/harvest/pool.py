"""Chunked fan-out for bulk harvests.

Each chunk is handed to a worker thread; the handler is expected to open its
own unit of work so the record service still sees one reconciliation at a
time per record.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

log = getLogger(__name__)

DEFAULT_CHUNK_SIZE = 25
DEFAULT_MAX_WORKERS = 4


@dataclass(slots=True)
class ChunkError:
    index: int
    size: int
    error: BaseException


@dataclass(slots=True)
class BatchReport:
    succeeded: int = 0
    failed: int = 0
    processed_items: int = 0
    errors: list[ChunkError] = field(default_factory=list[ChunkError])

    @property
    def ok(self) -> bool:
        return self.failed == 0


def chunked[T](items: Iterable[T], size: int) -> list[list[T]]:
    """Split ``items`` into lists of at most ``size`` elements."""

    if size < 1:
        raise ValueError("chunk size must be at least 1")
    chunks: list[list[T]] = []
    current: list[T] = []
    for item in items:
        current.append(item)
        if len(current) == size:
            chunks.append(current)
            current = []
    if current:
        chunks.append(current)
    return chunks


def run_chunked[T](
    items: Iterable[T],
    handler: Callable[[Sequence[T]], object],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> BatchReport:
    """Run ``handler`` over each chunk of ``items`` in a thread pool.

    A chunk whose handler raises is counted as failed and reported; the
    remaining chunks still run.
    """

    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")
    chunks = chunked(items, chunk_size)
    report = BatchReport()
    if not chunks:
        return report

    with ThreadPoolExecutor(max_workers=min(max_workers, len(chunks))) as executor:
        futures = {executor.submit(handler, chunk): index for index, chunk in enumerate(chunks)}
        for future in as_completed(futures):
            index = futures[future]
            size = len(chunks[index])
            error = future.exception()
            if error is not None:
                log.warning("Harvest chunk %d (%d items) failed: %s", index, size, error)
                report.failed += 1
                report.errors.append(ChunkError(index=index, size=size, error=error))
                continue
            report.succeeded += 1
            report.processed_items += size

    log.info(
        "Processed %d chunks: succeeded=%d, failed=%d",
        len(chunks),
        report.succeeded,
        report.failed,
    )
    return report


__all__ = ["BatchReport", "ChunkError", "chunked", "run_chunked"]
