"""Record synchronisation settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

from dmpsync.domain.model import Confidence, ConfidenceBands

from .env import env_float, env_int
from .errors import ConfigurationError

DEFAULT_DMP_ID_BASE_URL = "https://doi.org/"
DEFAULT_API_BASE_URL = "https://api.dmphub.example.org/"
DEFAULT_VERSION_DEBOUNCE_SECONDS = 3600.0
DEFAULT_ID_ALLOCATION_ATTEMPTS = 10


@dataclass(frozen=True, slots=True)
class SyncConfig:
    dmp_id_shoulder: str | None = None
    dmp_id_base_url: str = DEFAULT_DMP_ID_BASE_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    version_debounce: timedelta = timedelta(seconds=DEFAULT_VERSION_DEBOUNCE_SECONDS)
    id_allocation_attempts: int = DEFAULT_ID_ALLOCATION_ATTEMPTS
    confidence_bands: ConfidenceBands = field(default_factory=ConfidenceBands)


def parse_confidence_bands(raw: str) -> ConfidenceBands:
    """Parse ``"High:10,Medium:5,Low:0"`` into ``ConfidenceBands``."""

    bands: list[tuple[Confidence, int]] = []
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        name, sep, threshold = chunk.partition(":")
        if not sep:
            raise ConfigurationError(f"Confidence band {chunk!r} must look like 'Tier:score'")
        try:
            tier = Confidence(name.strip().capitalize())
            bands.append((tier, int(threshold)))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid confidence band {chunk!r}") from exc
    if not bands:
        raise ConfigurationError("DMPSYNC_CONFIDENCE_BANDS is empty")
    try:
        return ConfidenceBands(tuple(bands))
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def get_sync_config() -> SyncConfig:
    attempts = env_int("DMPSYNC_ID_ALLOCATION_ATTEMPTS", DEFAULT_ID_ALLOCATION_ATTEMPTS)
    if attempts < 1:
        raise ConfigurationError("DMPSYNC_ID_ALLOCATION_ATTEMPTS must be at least 1")
    debounce = env_float("DMPSYNC_VERSION_DEBOUNCE_SECONDS", DEFAULT_VERSION_DEBOUNCE_SECONDS)
    raw_bands = os.getenv("DMPSYNC_CONFIDENCE_BANDS")

    return SyncConfig(
        dmp_id_shoulder=os.getenv("DMP_ID_SHOULDER") or None,
        dmp_id_base_url=os.getenv("DMP_ID_BASE_URL") or DEFAULT_DMP_ID_BASE_URL,
        api_base_url=os.getenv("DMPHUB_API_BASE_URL") or DEFAULT_API_BASE_URL,
        version_debounce=timedelta(seconds=debounce),
        id_allocation_attempts=attempts,
        confidence_bands=(
            parse_confidence_bands(raw_bands) if raw_bands and raw_bands.strip() else ConfidenceBands()
        ),
    )
