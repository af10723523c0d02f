"""Pydantic models for DMP documents (RDA DMP Common Standard plus DMPHub extensions)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from dmpsync.domain.model import Confidence, FundingStatus, ModificationStatus

log = logging.getLogger(__name__)


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = {f"{type(self).__name__}.{key}" for key in extras}.difference(
            self._logged_extra_keys
        )
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.info("DMP document: unmodeled keys: %s", ", ".join(sorted(new_keys)))


class IdentifierDoc(DocumentModel):
    type: str | None = None
    identifier: str | None = None


class AffiliationDoc(DocumentModel):
    name: str | None = None
    affiliation_id: IdentifierDoc | None = None


class PersonDoc(DocumentModel):
    name: str | None = None
    mbox: str | None = None
    contact_id: IdentifierDoc | None = None
    contributor_id: IdentifierDoc | None = None
    affiliation: AffiliationDoc | None = Field(default=None, alias="dmproadmap_affiliation")
    roles: list[str] = Field(default_factory=list[str], alias="role")


class HostDoc(DocumentModel):
    title: str | None = None
    url: str | None = None
    host_id: IdentifierDoc | None = Field(default=None, alias="dmproadmap_host_id")


class DistributionDoc(DocumentModel):
    title: str | None = None
    host: HostDoc | None = None


class DatasetDoc(DocumentModel):
    title: str | None = None
    keywords: list[str] = Field(default_factory=list[str], alias="keyword")
    distributions: list[DistributionDoc] = Field(
        default_factory=list["DistributionDoc"], alias="distribution"
    )


class GrantIdDoc(DocumentModel):
    type: str | None = None
    identifier: str | None = None
    provenance_id: str | None = Field(default=None, alias="dmphub_provenance_id")
    created_at: datetime | None = Field(default=None, alias="dmphub_created_at")


class FundingDoc(DocumentModel):
    name: str | None = None
    funder_id: IdentifierDoc | None = None
    status: FundingStatus | None = Field(default=None, alias="funding_status")
    grant_id: GrantIdDoc | None = None
    opportunity_id: IdentifierDoc | None = Field(
        default=None, alias="dmproadmap_funding_opportunity_id"
    )
    provenance_id: str | None = Field(default=None, alias="dmphub_provenance_id")
    created_at: datetime | None = Field(default=None, alias="dmphub_created_at")


class ProjectDoc(DocumentModel):
    title: str | None = None
    description: str | None = None
    start: str | None = None
    end: str | None = None
    funding: list[FundingDoc] = Field(default_factory=list["FundingDoc"])


class RelatedIdentifierDoc(DocumentModel):
    identifier: str | None = None
    type: str | None = None
    descriptor: str | None = None
    work_type: str | None = None
    citation: str | None = None
    provenance_id: str | None = Field(default=None, alias="dmphub_provenance_id")


class ModificationDoc(DocumentModel):
    id: str
    provenance: str
    timestamp: datetime
    status: ModificationStatus = ModificationStatus.PENDING
    note: str | None = None
    related_identifiers: list[RelatedIdentifierDoc] = Field(
        default_factory=list["RelatedIdentifierDoc"], alias="dmproadmap_related_identifiers"
    )
    funding: list[FundingDoc] = Field(default_factory=list["FundingDoc"])


class VersionDoc(DocumentModel):
    timestamp: str
    url: str


class DmpDoc(DocumentModel):
    dmp_id: IdentifierDoc
    title: str
    description: str | None = None
    created: datetime | None = None
    modified: datetime | None = None
    contact: PersonDoc | None = None
    contributors: list[PersonDoc] = Field(default_factory=list["PersonDoc"], alias="contributor")
    projects: list[ProjectDoc] = Field(default_factory=list["ProjectDoc"], alias="project")
    datasets: list[DatasetDoc] = Field(default_factory=list["DatasetDoc"], alias="dataset")
    related_identifiers: list[RelatedIdentifierDoc] = Field(
        default_factory=list["RelatedIdentifierDoc"], alias="dmproadmap_related_identifiers"
    )
    provenance_id: str | None = Field(default=None, alias="dmphub_provenance_id")
    modifications: list[ModificationDoc] = Field(
        default_factory=list["ModificationDoc"], alias="dmphub_modifications"
    )
    versions: list[VersionDoc] = Field(default_factory=list["VersionDoc"], alias="dmphub_versions")
    tombstoned_at: datetime | None = Field(default=None, alias="dmphub_tombstoned_at")


# Harvester scratch space and harvested works -------------------------------


class CandidateWorkStatusDoc(DocumentModel):
    provenance: str
    type: str = "doi"
    descriptor: str = "references"
    work_type: str | None = None
    citation: str | None = None
    score: int = 0
    confidence: Confidence = Confidence.NONE
    notes: list[str] = Field(default_factory=list[str])
    status: ModificationStatus = ModificationStatus.PENDING
    discovered_at: datetime | None = None


class HarvesterCandidatesDoc(DocumentModel):
    dmp_id: str
    updated_at: datetime | None = None
    works: dict[str, CandidateWorkStatusDoc] = Field(
        default_factory=dict[str, CandidateWorkStatusDoc]
    )


class CandidateAffiliationDoc(DocumentModel):
    identifier: str | None = None
    name: str | None = None


class CandidatePersonDoc(DocumentModel):
    identifier: str | None = None
    last_name: str | None = None
    affiliations: list[CandidateAffiliationDoc] = Field(
        default_factory=list["CandidateAffiliationDoc"]
    )


class CandidateFundingDoc(DocumentModel):
    funder_id: str | None = None
    funder_name: str | None = None
    grant_ids: list[str] = Field(default_factory=list[str])


class CandidateRepositoryDoc(DocumentModel):
    name: str | None = None
    identifiers: list[str] = Field(default_factory=list[str])


class CandidateWorkDoc(DocumentModel):
    identifier: str | None = None
    title: str | None = None
    abstract: str | None = None
    keywords: list[str] = Field(default_factory=list[str])
    people: list[CandidatePersonDoc] = Field(default_factory=list["CandidatePersonDoc"])
    fundings: list[CandidateFundingDoc] = Field(default_factory=list["CandidateFundingDoc"])
    repositories: list[CandidateRepositoryDoc] = Field(
        default_factory=list["CandidateRepositoryDoc"]
    )
    related_identifiers: list[str] = Field(default_factory=list[str])
    work_type: str | None = None
    citation: str | None = None
    source: str | None = None
