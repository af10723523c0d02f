"""Record synchronisation and entity resolution."""

from __future__ import annotations

from .comparator import Comparator, build_features, score
from .identifiers import allocate_dmp_id, mint_candidate
from .ledger import append_modification, changes_from_works, promote, propose, track_candidates
from .merger import merge_fundings, merge_modifications, merge_related_identifiers, reconcile
from .notifications import citable_related_identifiers, events_for_write, publish_all
from .service import HarvestOutcome, RecordService
from .text import cleanse_text, compare_arrays, white_similarity
from .versioner import list_versions, should_snapshot, snapshot

__all__ = [
    "Comparator",
    "HarvestOutcome",
    "RecordService",
    "allocate_dmp_id",
    "append_modification",
    "build_features",
    "changes_from_works",
    "citable_related_identifiers",
    "cleanse_text",
    "compare_arrays",
    "events_for_write",
    "list_versions",
    "merge_fundings",
    "merge_modifications",
    "merge_related_identifiers",
    "mint_candidate",
    "promote",
    "propose",
    "publish_all",
    "reconcile",
    "score",
    "should_snapshot",
    "snapshot",
    "track_candidates",
    "white_similarity",
]
