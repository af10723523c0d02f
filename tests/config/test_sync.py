from __future__ import annotations

from datetime import timedelta

import pytest

from dmpsync.config import ConfigurationError, get_sync_config, parse_confidence_bands
from dmpsync.domain.model import Confidence, ConfidenceBands

_SYNC_ENV = (
    "DMP_ID_SHOULDER",
    "DMP_ID_BASE_URL",
    "DMPHUB_API_BASE_URL",
    "DMPSYNC_VERSION_DEBOUNCE_SECONDS",
    "DMPSYNC_ID_ALLOCATION_ATTEMPTS",
    "DMPSYNC_CONFIDENCE_BANDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SYNC_ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = get_sync_config()

    assert config.dmp_id_shoulder is None
    assert config.dmp_id_base_url == "https://doi.org/"
    assert config.version_debounce == timedelta(hours=1)
    assert config.id_allocation_attempts == 10
    assert config.confidence_bands == ConfidenceBands()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMP_ID_SHOULDER", "10.48321/D1")
    monkeypatch.setenv("DMPSYNC_VERSION_DEBOUNCE_SECONDS", "60")
    monkeypatch.setenv("DMPSYNC_ID_ALLOCATION_ATTEMPTS", "3")
    monkeypatch.setenv("DMPSYNC_CONFIDENCE_BANDS", "high:20, medium:8")

    config = get_sync_config()

    assert config.dmp_id_shoulder == "10.48321/D1"
    assert config.version_debounce == timedelta(minutes=1)
    assert config.id_allocation_attempts == 3
    assert config.confidence_bands.tier_for(21) is Confidence.HIGH
    assert config.confidence_bands.tier_for(5) is Confidence.NONE


def test_allocation_attempts_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMPSYNC_ID_ALLOCATION_ATTEMPTS", "0")

    with pytest.raises(ConfigurationError, match="at least 1"):
        get_sync_config()


def test_parse_confidence_bands() -> None:
    bands = parse_confidence_bands("High:10,Medium:5,Low:0,")

    assert bands.bands == (
        (Confidence.HIGH, 10),
        (Confidence.MEDIUM, 5),
        (Confidence.LOW, 0),
    )


@pytest.mark.parametrize("raw", ["", "High", "Extreme:3", "High:many", "Absolute:50"])
def test_parse_confidence_bands_rejects_bad_input(raw: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_confidence_bands(raw)
