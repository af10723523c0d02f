from __future__ import annotations

import pytest

from dmpsync.domain.model import CandidateFunding, Confidence, ConfidenceBands


def test_default_bands() -> None:
    bands = ConfidenceBands()

    assert bands.tier_for(0) is Confidence.NONE
    assert bands.tier_for(1) is Confidence.LOW
    assert bands.tier_for(5) is Confidence.LOW
    assert bands.tier_for(6) is Confidence.MEDIUM
    assert bands.tier_for(11) is Confidence.HIGH


def test_reserved_tiers_cannot_be_configured() -> None:
    with pytest.raises(ValueError, match="not a configurable"):
        ConfidenceBands(((Confidence.ABSOLUTE, 50),))


def test_preferred_grant_id_favours_award_urls() -> None:
    funding = CandidateFunding(grant_ids=("123", "https://www.nsf.gov/awardsearch/123"))

    assert funding.preferred_grant_id == "https://www.nsf.gov/awardsearch/123"
    assert CandidateFunding(grant_ids=("123",)).preferred_grant_id == "123"
    assert CandidateFunding().preferred_grant_id is None
