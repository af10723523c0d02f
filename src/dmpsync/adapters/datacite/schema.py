"""DataCite GraphQL response schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class DataCiteBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "DataCite %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class DataCiteBasic(DataCiteBaseModel):
    id: str | None = None
    name: str | None = None


class DataCiteTitle(DataCiteBaseModel):
    title: str | None = None


class DataCiteDescription(DataCiteBaseModel):
    description: str | None = None


class DataCiteSubject(DataCiteBaseModel):
    subject: str | None = None


class DataCitePerson(DataCiteBaseModel):
    id: str | None = None
    name: str | None = None
    family_name: str | None = Field(default=None, alias="familyName")
    given_name: str | None = Field(default=None, alias="givenName")
    contributor_type: str | None = Field(default=None, alias="contributorType")
    affiliation: list[DataCiteBasic] = Field(default_factory=list["DataCiteBasic"])


class DataCiteFundingReference(DataCiteBaseModel):
    funder_identifier: str | None = Field(default=None, alias="funderIdentifier")
    funder_name: str | None = Field(default=None, alias="funderName")
    award_uri: str | None = Field(default=None, alias="awardUri")
    award_title: str | None = Field(default=None, alias="awardTitle")
    award_number: str | None = Field(default=None, alias="awardNumber")


class DataCiteMember(DataCiteBaseModel):
    name: str | None = None
    ror_id: str | None = Field(default=None, alias="rorId")


class DataCiteRepository(DataCiteBaseModel):
    uid: str | None = None
    name: str | None = None
    url: str | None = None
    description: str | None = None
    re3data_url: str | None = Field(default=None, alias="re3dataUrl")
    re3data_doi: str | None = Field(default=None, alias="re3dataDoi")


class DataCiteDate(DataCiteBaseModel):
    date_type: str | None = Field(default=None, alias="dateType")
    date: str | None = None


class DataCiteRelatedIdentifier(DataCiteBaseModel):
    relation_type: str | None = Field(default=None, alias="relationType")
    resource_type_general: str | None = Field(default=None, alias="resourceTypeGeneral")
    related_identifier_type: str | None = Field(default=None, alias="relatedIdentifierType")
    related_identifier: str | None = Field(default=None, alias="relatedIdentifier")


class DataCiteWork(DataCiteBaseModel):
    id: str | None = None
    doi: str | None = None
    type: str | None = None
    titles: list[DataCiteTitle] = Field(default_factory=list["DataCiteTitle"])
    descriptions: list[DataCiteDescription] = Field(default_factory=list["DataCiteDescription"])
    creators: list[DataCitePerson] = Field(default_factory=list["DataCitePerson"])
    contributors: list[DataCitePerson] = Field(default_factory=list["DataCitePerson"])
    funding_references: list[DataCiteFundingReference] = Field(
        default_factory=list["DataCiteFundingReference"], alias="fundingReferences"
    )
    publisher: str | None = None
    member: DataCiteMember | None = None
    repository: DataCiteRepository | None = None
    fields_of_science: list[DataCiteBasic] = Field(
        default_factory=list["DataCiteBasic"], alias="fieldsOfScience"
    )
    subjects: list[DataCiteSubject] = Field(default_factory=list["DataCiteSubject"])
    publication_year: int | None = Field(default=None, alias="publicationYear")
    dates: list[DataCiteDate] = Field(default_factory=list["DataCiteDate"])
    registered: str | None = None
    registration_agency: DataCiteBasic | None = Field(default=None, alias="registrationAgency")
    related_identifiers: list[DataCiteRelatedIdentifier] = Field(
        default_factory=list["DataCiteRelatedIdentifier"], alias="relatedIdentifiers"
    )
    bibtex: str | None = None


class DataCiteWorkConnection(DataCiteBaseModel):
    nodes: list[DataCiteWork] = Field(default_factory=list["DataCiteWork"])


class DataCiteNode(DataCiteBaseModel):
    """A funder, organization or person together with its works."""

    id: str | None = None
    name: str | None = None
    alternate_name: list[str] | None = Field(default=None, alias="alternateName")
    publications: DataCiteWorkConnection | None = None
    datasets: DataCiteWorkConnection | None = None
    softwares: DataCiteWorkConnection | None = None

    def works(self) -> list[DataCiteWork]:
        return [
            work
            for connection in (self.publications, self.datasets, self.softwares)
            if connection is not None
            for work in connection.nodes
        ]


class DataCiteData(DataCiteBaseModel):
    funder: DataCiteNode | None = None
    organization: DataCiteNode | None = None
    person: DataCiteNode | None = None

    def works(self) -> list[DataCiteWork]:
        return [
            work
            for node in (self.funder, self.organization, self.person)
            if node is not None
            for work in node.works()
        ]


class DataCiteError(DataCiteBaseModel):
    message: str


class DataCiteResponse(DataCiteBaseModel):
    data: DataCiteData | None = None
    errors: list[DataCiteError] = Field(default_factory=list["DataCiteError"])
