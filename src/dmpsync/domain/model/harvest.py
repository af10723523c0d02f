"""Minimal common shape of a work supplied by a harvesting source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateAffiliation:
    identifier: str | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidatePerson:
    identifier: str | None = None
    last_name: str | None = None
    affiliations: tuple[CandidateAffiliation, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateFunding:
    funder_id: str | None = None
    funder_name: str | None = None
    grant_ids: tuple[str, ...] = ()

    @property
    def preferred_grant_id(self) -> str | None:
        """An award URL when one is known, otherwise the first award number."""

        for grant in self.grant_ids:
            if grant.startswith("http"):
                return grant
        return self.grant_ids[0] if self.grant_ids else None


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateRepository:
    name: str | None = None
    identifiers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateWork:
    identifier: str | None = None
    title: str | None = None
    abstract: str | None = None
    keywords: tuple[str, ...] = ()
    people: tuple[CandidatePerson, ...] = ()
    fundings: tuple[CandidateFunding, ...] = ()
    repositories: tuple[CandidateRepository, ...] = ()
    related_identifiers: tuple[str, ...] = ()
    work_type: str | None = None
    citation: str | None = None
    source: str | None = None
