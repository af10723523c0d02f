"""Translate DMP documents to and from the typed domain model.

Documents are validated once here; everything past this module works with
``Record`` and friends only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from dmpsync.domain.errors import RecordParseError
from dmpsync.domain.model import (
    Affiliation,
    CandidateAffiliation,
    CandidateFunding,
    CandidatePerson,
    CandidateRepository,
    CandidateWork,
    CandidateWorkStatus,
    Dataset,
    Distribution,
    FundingEntry,
    GrantIdentifier,
    HarvesterCandidateRecord,
    Host,
    Identifier,
    ModificationEntry,
    Person,
    Project,
    Record,
    RelatedIdentifierEntry,
    VersionLink,
)

from .schema import (
    AffiliationDoc,
    CandidateWorkDoc,
    DatasetDoc,
    DmpDoc,
    FundingDoc,
    HarvesterCandidatesDoc,
    HostDoc,
    IdentifierDoc,
    PersonDoc,
    ProjectDoc,
    RelatedIdentifierDoc,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from pydantic import BaseModel


def _validate[TModel: BaseModel](model: type[TModel], payload: object, what: str) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RecordParseError(f"Invalid {what}: {exc}") from exc


# Records -------------------------------------------------------------------


def parse_record(payload: Mapping[str, object]) -> Record:
    """Parse a DMP document (optionally wrapped in ``{"dmp": ...}``).

    Keys the schema does not model are kept on the record or on the nested
    object they belong to, so a parse and dump cycle returns what was submitted.
    """

    inner = payload.get("dmp", payload)
    doc = _validate(DmpDoc, inner, "DMP document")
    dmp_id = (doc.dmp_id.identifier or "").strip()

    primary = doc.projects[0] if doc.projects else None

    return Record(
        dmp_id=Identifier(type=doc.dmp_id.type or "doi", identifier=dmp_id),
        title=doc.title,
        provenance_id=doc.provenance_id,
        description=doc.description,
        created=doc.created,
        modified=doc.modified,
        contact=_person(doc.contact) if doc.contact is not None else None,
        contributors=tuple(_person(person) for person in doc.contributors),
        project=_project(primary, with_fundings=False) if primary is not None else None,
        additional_projects=tuple(
            _project(project, with_fundings=True) for project in doc.projects[1:]
        ),
        datasets=tuple(_dataset(dataset) for dataset in doc.datasets),
        fundings=tuple(_funding(funding) for funding in primary.funding) if primary else (),
        related_identifiers=_related(doc.related_identifiers),
        modifications=tuple(
            ModificationEntry(
                id=modification.id,
                provenance=modification.provenance,
                timestamp=modification.timestamp,
                status=modification.status,
                note=modification.note,
                related_identifiers=_related(modification.related_identifiers),
                fundings=tuple(_funding(funding) for funding in modification.funding),
            )
            for modification in doc.modifications
        ),
        extras=_extras(doc),
        tombstoned_at=doc.tombstoned_at,
        versions=tuple(
            VersionLink(timestamp=version.timestamp, url=version.url) for version in doc.versions
        ),
    )


def _extras(doc: BaseModel) -> dict[str, object]:
    return dict(doc.model_extra or {})


def _identifier(doc: IdentifierDoc | None) -> Identifier | None:
    if doc is None or not doc.identifier:
        return None
    return Identifier(type=doc.type or "other", identifier=doc.identifier)


def _affiliation(doc: AffiliationDoc | None) -> Affiliation | None:
    if doc is None:
        return None
    return Affiliation(
        name=doc.name, affiliation_id=_identifier(doc.affiliation_id), extras=_extras(doc)
    )


def _person(doc: PersonDoc) -> Person:
    return Person(
        name=doc.name,
        mbox=doc.mbox,
        identifier=_identifier(doc.contact_id or doc.contributor_id),
        affiliation=_affiliation(doc.affiliation),
        roles=tuple(doc.roles),
        extras=_extras(doc),
    )


def _project(doc: ProjectDoc, *, with_fundings: bool) -> Project:
    return Project(
        title=doc.title,
        description=doc.description,
        start=doc.start,
        end=doc.end,
        fundings=tuple(_funding(funding) for funding in doc.funding) if with_fundings else (),
        extras=_extras(doc),
    )


def _host(doc: HostDoc | None) -> Host | None:
    if doc is None:
        return None
    return Host(name=doc.title, url=doc.url, host_id=_identifier(doc.host_id), extras=_extras(doc))


def _dataset(doc: DatasetDoc) -> Dataset:
    return Dataset(
        title=doc.title,
        keywords=tuple(doc.keywords),
        distributions=tuple(
            Distribution(
                title=distribution.title,
                host=_host(distribution.host),
                extras=_extras(distribution),
            )
            for distribution in doc.distributions
        ),
        extras=_extras(doc),
    )


def _funding(doc: FundingDoc) -> FundingEntry:
    grant = None
    if doc.grant_id is not None and doc.grant_id.identifier:
        grant = GrantIdentifier(
            type=doc.grant_id.type or "other",
            identifier=doc.grant_id.identifier,
            provenance_id=doc.grant_id.provenance_id,
            created_at=doc.grant_id.created_at,
        )
    return FundingEntry(
        name=doc.name,
        funder_id=_identifier(doc.funder_id),
        status=doc.status,
        grant_id=grant,
        opportunity_id=_identifier(doc.opportunity_id),
        provenance_id=doc.provenance_id,
        created_at=doc.created_at,
    )


def _related(docs: Iterable[RelatedIdentifierDoc]) -> tuple[RelatedIdentifierEntry, ...]:
    return tuple(
        RelatedIdentifierEntry(
            identifier=doc.identifier,
            type=doc.type or "doi",
            descriptor=doc.descriptor,
            work_type=doc.work_type,
            citation=doc.citation,
            provenance_id=doc.provenance_id,
        )
        for doc in docs
        if doc.identifier
    )


def dump_record(record: Record) -> dict[str, object]:
    """Render ``record`` as a DMP document (without the ``{"dmp": ...}`` wrapper)."""

    return _with_extras(
        record.extras,
        {
            "dmp_id": {"type": record.dmp_id.type, "identifier": record.dmp_id.identifier},
            "title": record.title,
            "description": record.description,
            "created": _timestamp(record.created),
            "modified": _timestamp(record.modified),
            "contact": _dump_person(record.contact, id_key="contact_id"),
            "contributor": [
                _dump_person(person, id_key="contributor_id") for person in record.contributors
            ],
            "project": _dump_projects(record),
            "dataset": [_dump_dataset(dataset) for dataset in record.datasets],
            "dmproadmap_related_identifiers": [
                _dump_related(entry) for entry in record.related_identifiers
            ],
            "dmphub_provenance_id": record.provenance_id,
            "dmphub_modifications": [
                _compact(
                    {
                        "id": entry.id,
                        "provenance": entry.provenance,
                        "timestamp": _timestamp(entry.timestamp),
                        "status": entry.status.value,
                        "note": entry.note,
                        "dmproadmap_related_identifiers": [
                            _dump_related(item) for item in entry.related_identifiers
                        ],
                        "funding": [_dump_funding(item) for item in entry.fundings],
                    }
                )
                for entry in record.modifications
            ],
            "dmphub_versions": [
                {"timestamp": link.timestamp, "url": link.url} for link in record.versions
            ],
            "dmphub_tombstoned_at": _timestamp(record.tombstoned_at),
        },
    )


def _compact(values: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in values.items() if value not in (None, [], {})}


def _with_extras(extras: Mapping[str, object], values: dict[str, object]) -> dict[str, object]:
    document = dict(extras)
    document.update(_compact(values))
    return document


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dump_identifier(identifier: Identifier | None) -> dict[str, object] | None:
    if identifier is None:
        return None
    return {"type": identifier.type, "identifier": identifier.identifier}


def _dump_person(person: Person | None, *, id_key: str) -> dict[str, object] | None:
    if person is None:
        return None
    affiliation = None
    if person.affiliation is not None:
        affiliation = _with_extras(
            person.affiliation.extras,
            {
                "name": person.affiliation.name,
                "affiliation_id": _dump_identifier(person.affiliation.affiliation_id),
            },
        )
    return _with_extras(
        person.extras,
        {
            "name": person.name,
            "mbox": person.mbox,
            id_key: _dump_identifier(person.identifier),
            "dmproadmap_affiliation": affiliation,
            "role": list(person.roles),
        },
    )


def _dump_projects(record: Record) -> list[dict[str, object]]:
    """The primary project (carrying ``Record.fundings``) first, then the others as kept."""

    primary: dict[str, object] = {}
    if record.project is not None:
        primary = _dump_project(record.project)
    if record.fundings:
        primary["funding"] = [_dump_funding(entry) for entry in record.fundings]
    others = [_dump_project(project) for project in record.additional_projects]
    if not primary and record.project is None and not others:
        return []
    return [primary, *others]


def _dump_project(project: Project) -> dict[str, object]:
    return _with_extras(
        project.extras,
        {
            "title": project.title,
            "description": project.description,
            "start": project.start,
            "end": project.end,
            "funding": [_dump_funding(entry) for entry in project.fundings],
        },
    )


def _dump_dataset(dataset: Dataset) -> dict[str, object]:
    distributions: list[dict[str, object]] = []
    for distribution in dataset.distributions:
        host = None
        if distribution.host is not None:
            host = _with_extras(
                distribution.host.extras,
                {
                    "title": distribution.host.name,
                    "url": distribution.host.url,
                    "dmproadmap_host_id": _dump_identifier(distribution.host.host_id),
                },
            )
        distributions.append(
            _with_extras(distribution.extras, {"title": distribution.title, "host": host})
        )
    return _with_extras(
        dataset.extras,
        {
            "title": dataset.title,
            "keyword": list(dataset.keywords),
            "distribution": distributions,
        },
    )


def _dump_funding(entry: FundingEntry) -> dict[str, object]:
    grant = None
    if entry.grant_id is not None:
        grant = _compact(
            {
                "type": entry.grant_id.type,
                "identifier": entry.grant_id.identifier,
                "dmphub_provenance_id": entry.grant_id.provenance_id,
                "dmphub_created_at": _timestamp(entry.grant_id.created_at),
            }
        )
    return _compact(
        {
            "name": entry.name,
            "funder_id": _dump_identifier(entry.funder_id),
            "funding_status": entry.status.value if entry.status is not None else None,
            "grant_id": grant,
            "dmproadmap_funding_opportunity_id": _dump_identifier(entry.opportunity_id),
            "dmphub_provenance_id": entry.provenance_id,
            "dmphub_created_at": _timestamp(entry.created_at),
        }
    )


def _dump_related(entry: RelatedIdentifierEntry) -> dict[str, object]:
    return _compact(
        {
            "identifier": entry.identifier,
            "type": entry.type,
            "descriptor": entry.descriptor,
            "work_type": entry.work_type,
            "citation": entry.citation,
            "dmphub_provenance_id": entry.provenance_id,
        }
    )




# Harvester candidates --------------------------------------------------------


def parse_candidates(payload: Mapping[str, object]) -> HarvesterCandidateRecord:
    doc = _validate(HarvesterCandidatesDoc, payload, "harvester candidate record")
    return HarvesterCandidateRecord(
        dmp_id=doc.dmp_id,
        updated_at=doc.updated_at,
        works={
            key: CandidateWorkStatus(
                identifier=key,
                provenance=work.provenance,
                type=work.type,
                descriptor=work.descriptor,
                work_type=work.work_type,
                citation=work.citation,
                score=work.score,
                confidence=work.confidence,
                notes=tuple(work.notes),
                status=work.status,
                discovered_at=work.discovered_at,
            )
            for key, work in doc.works.items()
        },
    )


def dump_candidates(candidates: HarvesterCandidateRecord) -> dict[str, object]:
    return _compact(
        {
            "dmp_id": candidates.dmp_id,
            "updated_at": _timestamp(candidates.updated_at),
            "works": {
                key: _compact(
                    {
                        "provenance": work.provenance,
                        "type": work.type,
                        "descriptor": work.descriptor,
                        "work_type": work.work_type,
                        "citation": work.citation,
                        "score": work.score,
                        "confidence": work.confidence.value,
                        "notes": list(work.notes),
                        "status": work.status.value,
                        "discovered_at": _timestamp(work.discovered_at),
                    }
                )
                for key, work in candidates.works.items()
            },
        }
    )


# Harvested works ---------------------------------------------------------------


def parse_candidate_work(payload: Mapping[str, object]) -> CandidateWork:
    doc = _validate(CandidateWorkDoc, payload, "candidate work")
    return CandidateWork(
        identifier=doc.identifier,
        title=doc.title,
        abstract=doc.abstract,
        keywords=tuple(doc.keywords),
        people=tuple(
            CandidatePerson(
                identifier=person.identifier,
                last_name=person.last_name,
                affiliations=tuple(
                    CandidateAffiliation(identifier=affiliation.identifier, name=affiliation.name)
                    for affiliation in person.affiliations
                ),
            )
            for person in doc.people
        ),
        fundings=tuple(
            CandidateFunding(
                funder_id=funding.funder_id,
                funder_name=funding.funder_name,
                grant_ids=tuple(funding.grant_ids),
            )
            for funding in doc.fundings
        ),
        repositories=tuple(
            CandidateRepository(name=repository.name, identifiers=tuple(repository.identifiers))
            for repository in doc.repositories
        ),
        related_identifiers=tuple(doc.related_identifiers),
        work_type=doc.work_type,
        citation=doc.citation,
        source=doc.source,
    )


def parse_candidate_works(payload: object) -> list[CandidateWork]:
    """Parse a single work object or a list of them."""

    if isinstance(payload, list):
        items = cast("list[object]", payload)
    else:
        items = [payload]
    works: list[CandidateWork] = []
    for item in items:
        if not isinstance(item, dict):
            raise RecordParseError("Invalid candidate work: expected a JSON object")
        works.append(parse_candidate_work(cast("dict[str, object]", item)))
    return works
