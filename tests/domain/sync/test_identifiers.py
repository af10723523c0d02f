from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dmpsync.domain.errors import AllocationExhaustedError
from dmpsync.domain.sync import allocate_dmp_id, mint_candidate

if TYPE_CHECKING:
    from collections.abc import Callable


def _tokens(*values: str) -> Callable[[int], str]:
    remaining = list(values)

    def token(_size: int) -> str:
        return remaining.pop(0)

    return token


def test_mint_candidate_formats_shoulder_and_hex() -> None:
    minted = mint_candidate("10.80030/D1.", "https://doi.org", token=_tokens("1a2b", "3c4d"))

    assert minted == "https://doi.org/10.80030/D1.1A2B3C4D"


def test_allocation_retries_on_collision() -> None:
    taken = {"https://doi.org/10.80030/D1.AAAABBBB"}

    minted = allocate_dmp_id(
        taken.__contains__,
        shoulder="10.80030/D1.",
        base_url="https://doi.org/",
        token=_tokens("aaaa", "bbbb", "cccc", "dddd"),
    )

    assert minted == "https://doi.org/10.80030/D1.CCCCDDDD"


def test_allocation_gives_up_after_the_attempt_budget() -> None:
    calls: list[str] = []

    def exists(candidate: str) -> bool:
        calls.append(candidate)
        return True

    with pytest.raises(AllocationExhaustedError):
        allocate_dmp_id(exists, shoulder="10.80030/D1.", base_url="https://doi.org/", attempts=3)

    assert len(calls) == 3
