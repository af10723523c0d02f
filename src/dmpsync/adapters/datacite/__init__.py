"""DataCite related-works harvesting adapter."""

from __future__ import annotations

from .client import DataCiteAPIError, DataCiteClient
from .fetcher import find_related_works
from .translator import translate_work
from .windows import search_years

__all__ = [
    "DataCiteAPIError",
    "DataCiteClient",
    "find_related_works",
    "search_years",
    "translate_work",
]
