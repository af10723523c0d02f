from __future__ import annotations

import pytest

from dmpsync.domain.sync import cleanse_text, compare_arrays, white_similarity


def test_cleanse_text_drops_markup_and_stop_words() -> None:
    assert cleanse_text("<p>The Health of <b>Soil</b> and Water</p>") == "health soil water"
    assert cleanse_text("  the  ") is None
    assert cleanse_text(None) is None


def test_white_similarity_bounds() -> None:
    assert white_similarity("France", "france") == pytest.approx(1.0)
    assert white_similarity("Healed", "Sealed") == pytest.approx(0.8)
    assert white_similarity("abc", None) == 0.0


def test_compare_arrays_counts_distinct_shared_values() -> None:
    assert compare_arrays(("a", "b", "b"), ("b", "c", "a")) == 2
    assert compare_arrays((), ("a",)) == 0
