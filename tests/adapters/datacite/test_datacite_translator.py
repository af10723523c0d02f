from __future__ import annotations

from dmpsync.adapters.datacite.schema import DataCiteWork
from dmpsync.adapters.datacite.translator import last_name_from, translate_work
from dmpsync.domain.model import CandidateAffiliation


def _work(**overrides: object) -> DataCiteWork:
    payload: dict[str, object] = {
        "id": "https://doi.org/10.5061/dryad.abc",
        "doi": "10.5061/dryad.abc",
        "type": "Dataset",
        "titles": [{"title": "Soil cores "}, {"title": "from Montana"}],
        "descriptions": [{"description": "Samples."}, {"description": None}],
        "creators": [
            {
                "id": "https://orcid.org/0000-0001",
                "name": "Doe, Jane",
                "familyName": "Doe",
                "affiliation": [{"id": "https://ror.org/00example", "name": "Example University"}],
            }
        ],
        "contributors": [{"name": "John Smith", "contributorType": "DataCurator"}],
        "fundingReferences": [
            {
                "funderIdentifier": "https://doi.org/10.13039/100000001",
                "funderName": "NSF",
                "awardUri": " HTTPS://www.nsf.gov/award/2134567 ",
                "awardNumber": "2134567",
            }
        ],
        "member": {"name": "Dryad"},
        "repository": {"name": "Dryad", "url": "https://datadryad.org"},
        "subjects": [{"subject": "soil"}, {"subject": "soil"}],
        "fieldsOfScience": [{"id": "1", "name": "Earth sciences"}],
        "relatedIdentifiers": [
            {"relationType": "IsCitedBy", "relatedIdentifier": "10.1/paper"},
            {"relationType": "References"},
        ],
    }
    payload.update(overrides)
    return DataCiteWork.model_validate(payload)


def test_translate_work_maps_the_datacite_shape() -> None:
    work = translate_work(_work())

    assert work is not None
    assert work.identifier == "https://doi.org/10.5061/dryad.abc"
    assert work.title == "Soil cores from Montana"
    assert work.abstract == "Samples."
    assert work.keywords == ("soil", "Earth sciences")
    assert [person.last_name for person in work.people] == ["Doe", "Smith"]
    assert work.people[0].affiliations == (
        CandidateAffiliation(identifier="https://ror.org/00example", name="Example University"),
    )
    assert work.fundings[0].grant_ids == ("https://www.nsf.gov/award/2134567", "2134567")
    assert work.repositories[0].identifiers == ("https://datadryad.org",)
    assert work.related_identifiers == ("10.1/paper",)
    assert work.work_type == "Dataset"
    assert work.source == "DataCite - Dryad"


def test_translate_work_falls_back_to_the_id_or_gives_up() -> None:
    by_id = translate_work(_work(doi=None, id="https://example.org/work/1"))
    assert by_id is not None
    assert by_id.identifier == "https://example.org/work/1"

    assert translate_work(_work(doi=" ", id=None)) is None


def test_publisher_takes_precedence_for_the_source() -> None:
    work = translate_work(_work(publisher="Zenodo"))

    assert work is not None
    assert work.source == "DataCite - Zenodo"


def test_last_name_from() -> None:
    assert last_name_from("Doe, Jane") == "Doe"
    assert last_name_from("Jane  Q. Doe") == "Doe"
    assert last_name_from("   ") is None
    assert last_name_from(None) is None
