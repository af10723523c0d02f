"""Comparator inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Confidence


@dataclass(frozen=True, slots=True, kw_only=True)
class FeatureSet:
    """Normalized view of a record used for scoring candidate works."""

    title: str
    abstract: str | None = None
    keywords: tuple[str, ...] = ()
    last_names: tuple[str, ...] = ()
    people_ids: tuple[str, ...] = ()
    affiliation_ids: tuple[str, ...] = ()
    affiliations: tuple[str, ...] = ()
    funder_ids: tuple[str, ...] = ()
    opportunity_ids: tuple[str, ...] = ()
    grant_ids: tuple[str, ...] = ()
    repository_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ComparisonResult:
    score: int = 0
    confidence: Confidence = Confidence.NONE
    notes: tuple[str, ...] = ()

    @property
    def is_match(self) -> bool:
        return self.score > 0


@dataclass(frozen=True, slots=True)
class ConfidenceBands:
    """Score thresholds for the intermediate tiers.

    A score strictly greater than a band's threshold earns that tier; bands are
    checked from the highest threshold down. Zero always maps to ``None``.
    """

    bands: tuple[tuple[Confidence, int], ...] = field(
        default_factory=lambda: (
            (Confidence.HIGH, 10),
            (Confidence.MEDIUM, 5),
            (Confidence.LOW, 0),
        )
    )

    def __post_init__(self) -> None:
        for tier, _threshold in self.bands:
            if tier in {Confidence.NONE, Confidence.ABSOLUTE}:
                raise ValueError(f"{tier} is not a configurable confidence band")

    def tier_for(self, score: int) -> Confidence:
        if score <= 0:
            return Confidence.NONE
        for tier, threshold in sorted(self.bands, key=lambda band: band[1], reverse=True):
            if score > threshold:
                return tier
        return Confidence.NONE
