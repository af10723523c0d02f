"""DMP identifier minting."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING, Final

from dmpsync.domain.errors import AllocationExhaustedError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

DEFAULT_ATTEMPTS: Final[int] = 10


def mint_candidate(shoulder: str, base_url: str, *, token: Callable[[int], str] = secrets.token_hex) -> str:
    """Return ``<base_url><shoulder><HEX4><HEX4>``, e.g. ``https://doi.org/10.80030/D1.1A2B3C4D``."""

    base = base_url if not base_url or base_url.endswith("/") else f"{base_url}/"
    return f"{base}{shoulder}{token(2).upper()}{token(2).upper()}"


def allocate_dmp_id(
    exists: Callable[[str], bool],
    *,
    shoulder: str,
    base_url: str,
    attempts: int = DEFAULT_ATTEMPTS,
    token: Callable[[int], str] = secrets.token_hex,
) -> str:
    """Mint an identifier not yet known to ``exists``, trying at most ``attempts`` times."""

    for attempt in range(1, attempts + 1):
        candidate = mint_candidate(shoulder, base_url, token=token)
        if not exists(candidate):
            return candidate
        log.warning("Minted DMP ID %s already exists (attempt %d/%d)", candidate, attempt, attempts)
    raise AllocationExhaustedError()
