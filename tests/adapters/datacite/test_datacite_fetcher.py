from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dmpsync.adapters.datacite import DataCiteAPIError, find_related_works
from dmpsync.adapters.datacite.schema import DataCiteResponse
from dmpsync.domain.model import Dataset
from dmpsync.domain.sync import Comparator
from tests.helpers.records import make_funding, make_person, make_record

if TYPE_CHECKING:
    from collections.abc import Mapping

SOIL_TITLE = "Example Research Project on Soil Health"


def _work(doi: str, title: str, **extra: object) -> dict[str, object]:
    return {"doi": doi, "titles": [{"title": title}], **extra}


def _response(*works: dict[str, object]) -> DataCiteResponse:
    return DataCiteResponse.model_validate(
        {"data": {"funder": {"id": "x", "publications": {"nodes": list(works)}}}}
    )


class FakeGraphQLClient:
    def __init__(self, *responses: DataCiteResponse | Exception) -> None:
        self._responses = list(responses)
        self.bodies: list[Mapping[str, object]] = []

    def query(self, body: Mapping[str, object]) -> DataCiteResponse:
        self.bodies.append(body)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _comparator() -> Comparator:
    record = make_record(
        fundings=(make_funding(funder_id="https://ror.org/021nxhr62"),),
        datasets=(Dataset(title="Cores", keywords=("soil",)),),
        contributors=(
            make_person(
                "Jane Doe",
                orcid="https://orcid.org/0000-0001",
                affiliation="Example University",
                ror="https://ror.org/00example",
            ),
        ),
    )
    return Comparator.for_record(record)


def test_find_related_works_keeps_the_best_score_per_work() -> None:
    client = FakeGraphQLClient(
        _response(
            _work("10.1/soil", SOIL_TITLE, subjects=[{"subject": "soil"}]),
            _work("10.1/whales", "Migration of Arctic whales"),
        ),
        _response(_work("10.1/SOIL", SOIL_TITLE)),
    )

    results = find_related_works(_comparator(), ["2023", "2024"], client=client)

    assert [(work.identifier, result.score) for work, result in results] == [
        ("https://doi.org/10.1/soil", 6)
    ]
    assert [body["operationName"] for body in client.bodies] == ["funderQuery", "funderQuery"]
    variables = client.bodies[0]["variables"]
    assert variables == {"fundref": "https://doi.org/10.13039/100000001", "year": "2023"}


def test_failed_queries_are_skipped() -> None:
    client = FakeGraphQLClient(
        DataCiteAPIError("boom"),
        _response(_work("10.1/soil", SOIL_TITLE)),
    )

    results = find_related_works(_comparator(), ["2023", "2024"], client=client)

    assert [work.identifier for work, _result in results] == ["https://doi.org/10.1/soil"]


def test_researcher_and_affiliation_queries_are_opt_in() -> None:
    client = FakeGraphQLClient(_response(), _response(), _response())

    find_related_works(
        _comparator(),
        ["2024"],
        client=client,
        include_researchers=True,
        include_affiliations=True,
    )

    assert [body["operationName"] for body in client.bodies] == [
        "funderQuery",
        "researcherQuery",
        "affiliationQuery",
    ]
    assert client.bodies[2]["variables"] == {"ror": "https://ror.org/00example", "year": "2024"}


def test_nothing_to_search_for() -> None:
    client = FakeGraphQLClient()

    assert find_related_works(Comparator.for_record(make_record()), ["2024"], client=client) == []
    assert find_related_works(_comparator(), [], client=client) == []
    assert client.bodies == []


def test_a_client_or_config_is_required() -> None:
    with pytest.raises(ValueError, match="client or a config"):
        find_related_works(_comparator(), ["2024"])
