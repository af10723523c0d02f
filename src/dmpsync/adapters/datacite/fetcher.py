"""Search DataCite for works related to a record."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .client import DataCiteAPIError, DataCiteClient
from .queries import affiliation_query, funder_query, researcher_query
from .translator import translate_work

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from dmpsync.config.datacite import DataCiteConfig
    from dmpsync.domain.model import CandidateWork, ComparisonResult
    from dmpsync.domain.sync import Comparator

    from .schema import DataCiteResponse

log = getLogger(__name__)

FUNDREF_MARKER = "10.13039/"
ORCID_MARKER = "orcid.org/"
ROR_MARKER = "ror.org/"


class GraphQLClient(Protocol):
    def query(self, body: Mapping[str, object]) -> DataCiteResponse: ...


type ScoredWork = tuple[CandidateWork, ComparisonResult]


def find_related_works(
    comparator: Comparator,
    years: Iterable[str],
    *,
    config: DataCiteConfig | None = None,
    client: GraphQLClient | None = None,
    include_researchers: bool = False,
    include_affiliations: bool = False,
) -> list[ScoredWork]:
    """Works funded by the record's funders, best first.

    Contributor ORCIDs and affiliation RORs are searched too when asked for.
    Only works scoring above zero are returned, each identifier once with its
    best score. A failed query is logged and skipped.
    """

    if client is None:
        if config is None:
            raise ValueError("find_related_works needs either a client or a config")
        client = DataCiteClient(config=config)

    features = comparator.features
    funder_ids = [value for value in features.funder_ids if FUNDREF_MARKER in value]
    researcher_ids = (
        [value for value in features.people_ids if ORCID_MARKER in value]
        if include_researchers
        else []
    )
    ror_ids = (
        [value for value in features.affiliation_ids if ROR_MARKER in value]
        if include_affiliations
        else []
    )
    bodies = [
        body
        for year in years
        for body in (
            *(funder_query(funder_id, year) for funder_id in funder_ids),
            *(researcher_query(orcid, year) for orcid in researcher_ids),
            *(affiliation_query(ror, year) for ror in ror_ids),
        )
    ]
    if not bodies:
        log.info("Nothing to search DataCite for: no usable ids or no years")
        return []

    best: dict[str, ScoredWork] = {}
    for body in bodies:
        try:
            response = client.query(body)
        except DataCiteAPIError as exc:
            log.warning("DataCite query %s failed: %s", body.get("variables"), exc)
            continue
        if response.data is None:
            continue

        for node in response.data.works():
            work = translate_work(node)
            if work is None or work.identifier is None:
                continue
            result = comparator.compare(work)
            if not result.is_match:
                continue
            key = work.identifier.lower()
            previous = best.get(key)
            if previous is None or previous[1].score < result.score:
                best[key] = (work, result)

    log.info("DataCite returned %d related works", len(best))
    return sorted(best.values(), key=lambda item: item[1].score, reverse=True)
