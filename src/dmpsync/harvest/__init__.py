"""Bulk harvest orchestration helpers."""

from __future__ import annotations

from .pool import BatchReport, ChunkError, chunked, run_chunked

__all__ = ["BatchReport", "ChunkError", "chunked", "run_chunked"]
