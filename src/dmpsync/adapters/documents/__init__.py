"""DMP document parsing and rendering."""

from __future__ import annotations

from .translator import (
    dump_candidates,
    dump_record,
    parse_candidate_work,
    parse_candidate_works,
    parse_candidates,
    parse_record,
)

__all__ = [
    "dump_candidates",
    "dump_record",
    "parse_candidate_work",
    "parse_candidate_works",
    "parse_candidates",
    "parse_record",
]
