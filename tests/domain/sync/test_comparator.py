from __future__ import annotations

from dataclasses import replace

import pytest

from dmpsync.domain.errors import ComparatorError
from dmpsync.domain.model import (
    CandidateAffiliation,
    CandidateFunding,
    CandidatePerson,
    CandidateRepository,
    CandidateWork,
    Confidence,
    ConfidenceBands,
    Dataset,
    Distribution,
    FundingEntry,
    GrantIdentifier,
    Host,
    Identifier,
    Project,
)
from dmpsync.domain.sync import Comparator, build_features, score
from tests.helpers.records import make_funding, make_person, make_record


def test_similar_titles_score_five_points() -> None:
    features = build_features(make_record("Example Research Project Soil Health Study"))
    work = CandidateWork(
        identifier="https://doi.org/10.1/soil",
        title="Example Research Project on Soil Health",
    )

    result = score(features, work)

    assert result.score == 5
    assert result.notes == ("titles are similar",)
    assert result.confidence is Confidence.LOW


def test_grant_match_short_circuits_to_absolute() -> None:
    record = make_record(fundings=(make_funding(grant="https://www.nsf.gov/awardsearch/2134567"),))
    work = CandidateWork(
        identifier="https://doi.org/10.1/grant",
        title="Completely unrelated",
        keywords=("soil",),
        fundings=(CandidateFunding(funder_name="NSF", grant_ids=("2134567",)),),
    )

    result = Comparator.for_record(record).compare(work)

    assert result.score == 100
    assert result.confidence is Confidence.ABSOLUTE
    assert result.notes == ("the grant ID matched",)


def test_grants_of_additional_projects_are_features() -> None:
    record = make_record(
        additional_projects=(Project(title="Phase two", fundings=(make_funding(grant="R01-42"),)),)
    )

    features = build_features(record)

    assert features.grant_ids == ("r01-42",)


def test_untitled_or_foreign_objects_score_zero() -> None:
    features = build_features(make_record())

    assert score(features, CandidateWork(identifier="x", title="   ")).score == 0
    assert score(features, {"title": "Example Research Project Soil Health Study"}).score == 0
    assert score(features, None).confidence is Confidence.NONE


def test_record_without_title_raises() -> None:
    with pytest.raises(ComparatorError):
        build_features(make_record("  "))


def test_opportunity_person_keyword_and_repository_points_add_up() -> None:
    record = make_record(
        "Coastal erosion monitoring",
        contact=make_person(
            "Doe, Jane",
            orcid="https://orcid.org/0000-0001-0000-0001",
            affiliation="Example University",
            ror="https://ror.org/00example",
        ),
        contributors=(make_person("John Smith", affiliation="Example University"),),
        datasets=(
            Dataset(
                title="Sediment cores",
                keywords=("Erosion",),
                distributions=(Distribution(host=Host(name="Dryad", url="https://datadryad.org")),),
            ),
        ),
        fundings=(
            FundingEntry(
                name="NSF",
                opportunity_id=Identifier(type="other", identifier="PD-19-1234"),
            ),
        ),
    )
    work = CandidateWork(
        identifier="https://doi.org/10.1/erosion",
        title="Unrelated heading",
        keywords=("erosion", "waves"),
        people=(
            CandidatePerson(identifier="https://orcid.org/0000-0001-0000-0001", last_name="Doe"),
            CandidatePerson(
                last_name="Smith",
                affiliations=(CandidateAffiliation(name="example university"),),
            ),
        ),
        fundings=(CandidateFunding(funder_name="NSF", grant_ids=("pd-19-1234",)),),
        repositories=(CandidateRepository(name="Dryad", identifiers=("https://datadryad.org",)),),
    )

    result = Comparator.for_record(record).compare(work)

    # opportunity 5 + one ORCID 2 + Smith/affiliation 1 + repository 1 + keywords 1
    assert result.score == 10
    assert result.confidence is Confidence.MEDIUM
    assert result.notes == (
        "the funding opportunity number matched",
        "contributor ORCIDs matched",
        "contributor names and affiliations matched",
        "repositories matched",
        "keywords matched",
    )


def test_last_name_without_affiliation_earns_nothing() -> None:
    record = make_record(
        "Ocean acidity",
        contributors=(make_person("Jane Doe", affiliation="Example University"),),
    )
    work = CandidateWork(
        identifier="https://doi.org/10.1/ocean",
        title="Glacier melt",
        people=(CandidatePerson(last_name="Doe"),),
    )

    assert Comparator.for_record(record).compare(work).score == 0


def test_custom_confidence_bands_are_applied() -> None:
    bands = ConfidenceBands(((Confidence.HIGH, 4), (Confidence.LOW, 0)))
    comparator = Comparator.for_record(make_record(), bands=bands)

    result = comparator.compare(
        CandidateWork(identifier="x", title="Example Research Project on Soil Health")
    )

    assert result.score == 5
    assert result.confidence is Confidence.HIGH


def test_ror_funder_gains_its_crossref_alias() -> None:
    record = make_record(
        fundings=(
            replace(
                make_funding(grant="123"),
                funder_id=Identifier(type="ror", identifier="https://ror.org/021nxhr62"),
                grant_id=GrantIdentifier(type="other", identifier="123"),
            ),
        )
    )

    features = build_features(record)

    assert "https://ror.org/021nxhr62" in features.funder_ids
    assert "https://doi.org/10.13039/100000001" in features.funder_ids
