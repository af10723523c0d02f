"""Text normalization and similarity helpers shared by the comparator."""

from __future__ import annotations

import re
from collections import Counter
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

STOP_WORDS: Final[frozenset[str]] = frozenset(
    {"a", "an", "and", "if", "of", "or", "the", "then", "they"}
)

_TAG_RE = re.compile(r"<[^>]+>")


def cleanse_text(text: str | None) -> str | None:
    """Lowercase ``text``, strip markup and drop stop words."""

    if text is None:
        return None
    words = _TAG_RE.sub(" ", text).lower().split()
    cleansed = " ".join(word for word in words if word not in STOP_WORDS).strip()
    return cleansed or None


def normalize_value(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


def unique_normalized(values: Iterable[str | None]) -> tuple[str, ...]:
    """Normalize, drop blanks and dedupe while keeping first-seen order."""

    seen: dict[str, None] = {}
    for value in values:
        normalized = normalize_value(value)
        if normalized is not None:
            seen.setdefault(normalized, None)
    return tuple(seen)


def compare_arrays(left: Sequence[str], right: Sequence[str]) -> int:
    """Return how many distinct values the two sequences share."""

    return len(set(left) & set(right))


def _word_letter_pairs(text: str) -> list[str]:
    pairs: list[str] = []
    for word in text.upper().split():
        pairs.extend(word[index : index + 2] for index in range(len(word) - 1))
    return pairs


def white_similarity(left: str | None, right: str | None) -> float:
    """Simon White's letter-pair similarity in ``[0, 1]``.

    Twice the number of shared adjacent letter pairs (per word, counted with
    multiplicity) divided by the total number of pairs in both strings.
    """

    if not left or not right:
        return 0.0
    left_pairs = _word_letter_pairs(left)
    right_pairs = _word_letter_pairs(right)
    union = len(left_pairs) + len(right_pairs)
    if union == 0:
        return 1.0 if left.strip().upper() == right.strip().upper() else 0.0
    intersection = sum((Counter(left_pairs) & Counter(right_pairs)).values())
    return 2.0 * intersection / union
