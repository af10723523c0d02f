"""Translate DataCite works into the harvester's candidate shape."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dmpsync.domain.model import (
    CandidateAffiliation,
    CandidateFunding,
    CandidatePerson,
    CandidateRepository,
    CandidateWork,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import DataCitePerson, DataCiteWork

DOI_BASE_URL = "https://doi.org/"
SOURCE_PREFIX = "DataCite"


def translate_work(work: DataCiteWork) -> CandidateWork | None:
    """Reduce ``work`` to a ``CandidateWork``; ``None`` when it has no usable id."""

    identifier = _work_identifier(work)
    if identifier is None:
        return None

    keywords = [subject.subject for subject in work.subjects]
    keywords.extend(field.name for field in work.fields_of_science)

    return CandidateWork(
        identifier=identifier,
        title=_joined(title.title for title in work.titles),
        abstract=_joined(description.description for description in work.descriptions),
        keywords=_compact(keywords),
        people=tuple(_translate_person(person) for person in (*work.creators, *work.contributors)),
        fundings=tuple(
            CandidateFunding(
                funder_id=reference.funder_identifier,
                funder_name=reference.funder_name,
                grant_ids=_compact(
                    value.strip().lower() if value else None
                    for value in (reference.award_uri, reference.award_number)
                ),
            )
            for reference in work.funding_references
        ),
        repositories=(
            (
                CandidateRepository(
                    name=work.repository.name,
                    identifiers=_compact((work.repository.url, work.repository.re3data_url)),
                ),
            )
            if work.repository is not None
            else ()
        ),
        related_identifiers=_compact(
            related.related_identifier for related in work.related_identifiers
        ),
        work_type=work.type,
        source=_source(work),
    )


def last_name_from(name: str | None) -> str | None:
    """``"Last, First"`` yields ``Last``; otherwise the final word."""

    if name is None or not name.strip():
        return None
    if "," in name:
        return name.split(",", 1)[0].strip() or None
    return name.split()[-1]


def _translate_person(person: DataCitePerson) -> CandidatePerson:
    return CandidatePerson(
        identifier=person.id,
        last_name=person.family_name or last_name_from(person.name),
        affiliations=tuple(
            CandidateAffiliation(identifier=affiliation.id, name=affiliation.name)
            for affiliation in person.affiliation
        ),
    )


def _work_identifier(work: DataCiteWork) -> str | None:
    if work.doi and work.doi.strip():
        doi = work.doi.strip()
        return doi if doi.lower().startswith("http") else f"{DOI_BASE_URL}{doi}"
    if work.id and work.id.strip():
        return work.id.strip()
    return None


def _source(work: DataCiteWork) -> str:
    publisher = work.publisher or (work.member.name if work.member is not None else None)
    return f"{SOURCE_PREFIX} - {publisher}" if publisher else SOURCE_PREFIX


def _joined(values: Iterable[str | None]) -> str | None:
    joined = " ".join(value.strip() for value in values if value and value.strip())
    return joined or None


def _compact(values: Iterable[str | None]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        if value and value.strip():
            seen.setdefault(value.strip(), None)
    return tuple(seen)
