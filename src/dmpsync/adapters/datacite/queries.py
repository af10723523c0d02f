"""GraphQL request bodies for the DataCite PID graph."""

from __future__ import annotations

from typing import Final

_BASIC: Final[str] = "{ id name }"

WORK_FRAGMENT: Final[str] = f"""{{
  id
  doi
  type
  titles {{ title }}
  descriptions {{ description }}
  creators {{ id name familyName givenName affiliation {_BASIC} }}
  contributors {{ id contributorType name familyName givenName affiliation {_BASIC} }}
  fundingReferences {{ funderIdentifier funderName awardUri awardTitle awardNumber }}
  publisher
  member {{ name rorId }}
  repository {{ uid name url description re3dataUrl re3dataDoi }}
  fieldsOfScience {_BASIC}
  subjects {{ subject }}
  publicationYear
  dates {{ dateType date }}
  registered
  registrationAgency {_BASIC}
  relatedIdentifiers {{
    relationType
    resourceTypeGeneral
    relatedIdentifierType
    relatedIdentifier
  }}
  bibtex
}}"""

_WORK_CONNECTIONS: Final[str] = f"""
    publications(published: $year) {{ nodes {WORK_FRAGMENT} }}
    datasets(published: $year) {{ nodes {WORK_FRAGMENT} }}
    softwares(published: $year) {{ nodes {WORK_FRAGMENT} }}"""


def funder_query(fundref: str, year: str) -> dict[str, object]:
    """Works funded by a Crossref Funder Registry id."""

    return {
        "operationName": "funderQuery",
        "variables": {"fundref": fundref, "year": year},
        "query": (
            "query funderQuery ($fundref: ID!, $year: String) {\n"
            f"  funder(id: $fundref) {{\n    id\n    name\n    alternateName{_WORK_CONNECTIONS}\n  }}\n}}"
        ),
    }


def affiliation_query(ror: str, year: str) -> dict[str, object]:
    """Works affiliated with a ROR organisation."""

    return {
        "operationName": "affiliationQuery",
        "variables": {"ror": ror, "year": year},
        "query": (
            "query affiliationQuery ($ror: ID!, $year: String) {\n"
            f"  organization(id: $ror) {{\n    id\n    name\n    alternateName{_WORK_CONNECTIONS}\n  }}\n}}"
        ),
    }


def researcher_query(orcid: str, year: str) -> dict[str, object]:
    """Works by an ORCID researcher."""

    return {
        "operationName": "researcherQuery",
        "variables": {"orcidId": orcid, "year": year},
        "query": (
            "query researcherQuery ($orcidId: ID!, $year: String) {\n"
            f"  person(id: $orcidId) {{\n    id\n    name{_WORK_CONNECTIONS}\n  }}\n}}"
        ),
    }
