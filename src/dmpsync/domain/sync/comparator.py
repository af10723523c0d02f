"""Entity resolution: decide whether a harvested work belongs to a record.

``build_features`` reduces a record to normalized comparison features once;
``score`` then rates any number of candidate works against them. Scoring is
additive and short-circuits on an exact grant id match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from dmpsync.domain.errors import ComparatorError
from dmpsync.domain.model import (
    CandidateWork,
    ComparisonResult,
    Confidence,
    ConfidenceBands,
    FeatureSet,
)

from .crosswalk import fundref_for
from .text import cleanse_text, compare_arrays, unique_normalized, white_similarity

if TYPE_CHECKING:
    from dmpsync.domain.model import CandidatePerson, FundingEntry, Person, Record

log = logging.getLogger(__name__)

GRANT_MATCH_SCORE: Final[int] = 100
OPPORTUNITY_MATCH_POINTS: Final[int] = 5
PERSON_ID_MATCH_POINTS: Final[int] = 2
KEYWORD_MATCH_POINTS: Final[int] = 1
STRONG_SIMILARITY: Final[float] = 0.75
WEAK_SIMILARITY: Final[float] = 0.5
STRONG_SIMILARITY_POINTS: Final[int] = 5
WEAK_SIMILARITY_POINTS: Final[int] = 2

NOTE_GRANT = "the grant ID matched"
NOTE_OPPORTUNITY = "the funding opportunity number matched"
NOTE_PERSON_IDS = "contributor ORCIDs matched"
NOTE_PEOPLE = "contributor names and affiliations matched"
NOTE_REPOSITORIES = "repositories matched"
NOTE_KEYWORDS = "keywords matched"


def build_features(record: Record) -> FeatureSet:
    """Extract the comparison features of ``record``."""

    title = cleanse_text(record.title)
    if title is None:
        raise ComparatorError("No DMP or the DMP did not contain enough information to use.")

    people: list[Person] = [record.contact] if record.contact is not None else []
    people.extend(record.contributors)
    fundings = (
        *record.fundings,
        *(entry for project in record.additional_projects for entry in project.fundings),
    )
    hosts = [host for dataset in record.datasets for host in dataset.hosts]

    return FeatureSet(
        title=title,
        abstract=cleanse_text(record.description),
        keywords=unique_normalized(
            keyword for dataset in record.datasets for keyword in dataset.keywords
        ),
        last_names=unique_normalized(person.last_name for person in people),
        people_ids=unique_normalized(
            person.identifier.identifier for person in people if person.identifier
        ),
        affiliation_ids=unique_normalized(
            person.affiliation.affiliation_id.identifier
            for person in people
            if person.affiliation is not None and person.affiliation.affiliation_id is not None
        ),
        affiliations=unique_normalized(
            person.affiliation.name for person in people if person.affiliation is not None
        ),
        funder_ids=unique_normalized(_funder_variants(fundings)),
        opportunity_ids=unique_normalized(
            entry.opportunity_id.identifier for entry in fundings if entry.opportunity_id
        ),
        grant_ids=unique_normalized(_grant_variants(fundings)),
        repository_ids=unique_normalized(
            value
            for host in hosts
            for value in (host.url, host.host_id.identifier if host.host_id else None)
        ),
    )


def _funder_variants(fundings: tuple[FundingEntry, ...]) -> list[str | None]:
    values: list[str | None] = []
    for entry in fundings:
        if entry.funder_id is None:
            continue
        values.append(entry.funder_id.identifier)
        values.append(fundref_for(entry.funder_id.identifier))
    return values


def _grant_variants(fundings: tuple[FundingEntry, ...]) -> list[str | None]:
    """Grant ids as given plus, for award URLs, their final path segment."""

    values: list[str | None] = []
    for entry in fundings:
        if entry.grant_id is None:
            continue
        grant = entry.grant_id.identifier.strip()
        values.append(grant)
        if grant.startswith("http"):
            values.append(grant.rstrip("/").rsplit("/", 1)[-1])
    return values


def score(
    features: FeatureSet,
    work: object,
    *,
    bands: ConfidenceBands | None = None,
) -> ComparisonResult:
    """Score ``work`` against ``features``.

    Anything that is not a titled ``CandidateWork`` yields the empty result.
    """

    if not isinstance(work, CandidateWork) or not work.title or not work.title.strip():
        return ComparisonResult()

    grant_ids = unique_normalized(grant for funding in work.fundings for grant in funding.grant_ids)
    if compare_arrays(features.grant_ids, grant_ids) > 0:
        return ComparisonResult(
            score=GRANT_MATCH_SCORE,
            confidence=Confidence.ABSOLUTE,
            notes=(NOTE_GRANT,),
        )

    total = 0
    notes: list[str] = []

    if compare_arrays(features.opportunity_ids, grant_ids) > 0:
        total += OPPORTUNITY_MATCH_POINTS
        notes.append(NOTE_OPPORTUNITY)

    matched_ids = compare_arrays(
        features.people_ids, unique_normalized(person.identifier for person in work.people)
    )
    if matched_ids > 0:
        total += matched_ids * PERSON_ID_MATCH_POINTS
        notes.append(NOTE_PERSON_IDS)

    people_points = sum(1 for person in work.people if _person_matches(features, person))
    if people_points > 0:
        total += people_points
        notes.append(NOTE_PEOPLE)

    matched_repositories = compare_arrays(
        features.repository_ids,
        unique_normalized(
            identifier for repository in work.repositories for identifier in repository.identifiers
        ),
    )
    if matched_repositories > 0:
        total += matched_repositories
        notes.append(NOTE_REPOSITORIES)

    if compare_arrays(features.keywords, unique_normalized(work.keywords)) > 0:
        total += KEYWORD_MATCH_POINTS
        notes.append(NOTE_KEYWORDS)

    for label, known, incoming in (
        ("title", features.title, work.title),
        ("abstract", features.abstract, work.abstract),
    ):
        points = _text_points(label, known, incoming)
        if points > 0:
            total += points
            notes.append(f"{label}s are similar")

    effective_bands = bands or ConfidenceBands()
    return ComparisonResult(
        score=total,
        confidence=effective_bands.tier_for(total),
        notes=tuple(notes),
    )


def _person_matches(features: FeatureSet, person: CandidatePerson) -> bool:
    """Last name and at least one affiliation (by id or name) must match."""

    last_name = unique_normalized((person.last_name,))
    if compare_arrays(features.last_names, last_name) == 0:
        return False
    return (
        compare_arrays(
            features.affiliation_ids,
            unique_normalized(affiliation.identifier for affiliation in person.affiliations),
        )
        + compare_arrays(
            features.affiliations,
            unique_normalized(affiliation.name for affiliation in person.affiliations),
        )
        > 0
    )


def _text_points(label: str, known: str | None, incoming: str | None) -> int:
    cleansed = cleanse_text(incoming)
    if known is None or cleansed is None:
        return 0
    similarity = white_similarity(known, cleansed)
    log.debug("%s similarity %.3f between %r and %r", label, similarity, known, cleansed)
    if similarity >= STRONG_SIMILARITY:
        return STRONG_SIMILARITY_POINTS
    if similarity >= WEAK_SIMILARITY:
        return WEAK_SIMILARITY_POINTS
    return 0


@dataclass(slots=True)
class Comparator:
    """Features of one record, ready to score candidate works against."""

    features: FeatureSet
    bands: ConfidenceBands = field(default_factory=ConfidenceBands)

    @classmethod
    def for_record(cls, record: Record, *, bands: ConfidenceBands | None = None) -> Comparator:
        return cls(features=build_features(record), bands=bands or ConfidenceBands())

    def compare(self, work: object) -> ComparisonResult:
        return score(self.features, work, bands=self.bands)
