"""Storage key conventions for records, versions and harvester scratch space.

Every item lives under a two-part key: ``PK`` identifies the record and ``SK``
selects the latest state, a timestamped snapshot, the tombstone or the
harvester candidate record.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Final

PK_PREFIX: Final[str] = "DMP#"
SK_PREFIX: Final[str] = "VERSION#"

LATEST: Final[str] = "latest"
TOMBSTONE: Final[str] = "tombstone"

SK_LATEST: Final[str] = f"{SK_PREFIX}{LATEST}"
SK_TOMBSTONE: Final[str] = f"{SK_PREFIX}{TOMBSTONE}"
SK_HARVESTER_MODS: Final[str] = "HARVESTER_MODS"

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_DOI_RE = re.compile(r"^(doi:)?\s*(10\.\d{4,}/\S+)$", re.IGNORECASE)


def strip_scheme(value: str) -> str:
    return _SCHEME_RE.sub("", value.strip())


def dmp_id_path(dmp_id: str) -> str:
    """Return ``dmp_id`` as ``host/path`` without scheme (bare DOIs land on doi.org)."""

    value = dmp_id.strip()
    match = _DOI_RE.match(value)
    if match is not None:
        return f"doi.org/{match.group(2)}"
    return strip_scheme(value)


def pk_for(dmp_id: str) -> str:
    value = dmp_id.strip()
    if value.startswith(PK_PREFIX):
        return value
    return f"{PK_PREFIX}{dmp_id_path(value)}"


def same_dmp_id(left: str, right: str) -> bool:
    return pk_for(left).casefold() == pk_for(right).casefold()


def sk_for(version: str) -> str:
    return f"{SK_PREFIX}{version}"


def version_from_sk(sk: str) -> str:
    return sk.removeprefix(SK_PREFIX)


def version_label(timestamp: datetime) -> str:
    """Render a snapshot timestamp the way it appears in ``SK`` and version links.

    Whole seconds render without a fraction; sub-second stamps keep their
    microseconds so writes inside the same second stay distinct versions.
    """

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC).isoformat()


def is_historical(version: str) -> bool:
    return version not in {LATEST, TOMBSTONE}
