from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from dmpsync.domain.model import FundingStatus, ModificationEntry, ModificationStatus
from dmpsync.domain.sync import merge_fundings, merge_related_identifiers, reconcile
from tests.helpers.records import OWNER, T0, make_funding, make_record, make_related

NOW = datetime(2024, 6, 1, tzinfo=UTC)


def test_non_owner_grant_is_appended_beside_the_owners_terminal_entry() -> None:
    current = make_record(fundings=(make_funding("NSF", grant="123"),))
    proposed = replace(
        current,
        title="A title the owner never wrote",
        fundings=(make_funding("NSF", grant="999"),),
    )

    merged = reconcile(OWNER, "crossref", current, proposed, now=NOW)

    assert merged.title == current.title
    assert merged.fundings[0] == current.fundings[0]
    added = merged.fundings[1]
    assert added.status is FundingStatus.GRANTED
    assert added.grant_id is not None
    assert added.grant_id.identifier == "999"
    assert added.provenance_id == "crossref"
    assert added.grant_id.provenance_id == "crossref"
    assert added.created_at == NOW


def test_owner_controls_free_form_fields_but_not_bookkeeping() -> None:
    current = make_record("Old title", description="old")
    proposed = replace(
        current,
        title="New title",
        description="new",
        provenance_id="someone-else",
        created=NOW,
        modified=NOW,
    )

    merged = reconcile(OWNER, OWNER, current, proposed, now=NOW)

    assert (merged.title, merged.description) == ("New title", "new")
    assert merged.provenance_id == OWNER
    assert merged.created == T0
    assert merged.modified == T0


def test_non_owner_cannot_claim_the_owners_open_entry() -> None:
    open_entry = make_funding("NIH", status=FundingStatus.APPLIED, created_at=T0)

    merged = merge_fundings(
        (open_entry,),
        [make_funding("NIH", status=FundingStatus.GRANTED, grant="R01-42")],
        owner_id=OWNER,
        writer_id="crossref",
        now=NOW,
    )

    assert merged[0] == open_entry
    added = merged[1]
    assert added.status is FundingStatus.GRANTED
    assert added.provenance_id == "crossref"
    assert added.grant_id is not None
    assert added.grant_id.provenance_id == "crossref"


def test_non_owner_updates_its_own_open_entry_in_place() -> None:
    own = make_funding(
        "NIH", status=FundingStatus.APPLIED, provenance_id="nih-reporter", created_at=T0
    )

    merged = merge_fundings(
        (own,),
        [make_funding("NIH", status=None, grant="R01-42")],
        owner_id=OWNER,
        writer_id="nih-reporter",
        now=NOW,
    )

    assert len(merged) == 1
    updated = merged[0]
    assert updated.status is FundingStatus.APPLIED
    assert updated.grant_id is not None
    assert updated.grant_id.identifier == "R01-42"
    assert updated.grant_id.provenance_id == "nih-reporter"
    assert updated.grant_id.created_at == NOW
    assert updated.provenance_id == "nih-reporter"
    assert updated.created_at == T0


def test_owner_claims_its_untagged_open_entry() -> None:
    open_entry = make_funding("NIH", status=FundingStatus.APPLIED, created_at=T0)

    merged = merge_fundings(
        (open_entry,),
        [make_funding("NIH", status=FundingStatus.GRANTED, grant="R01-42")],
        owner_id=OWNER,
        writer_id=OWNER,
        now=NOW,
    )

    assert len(merged) == 1
    assert merged[0].status is FundingStatus.GRANTED
    assert merged[0].provenance_id is None
    assert merged[0].grant_id is not None
    assert merged[0].grant_id.provenance_id is None


def test_newest_open_entry_of_the_funder_is_updated() -> None:
    older = make_funding(
        "NIH", status=FundingStatus.PLANNED, provenance_id="nih-reporter", created_at=T0
    )
    newer = make_funding(
        "NIH", status=FundingStatus.APPLIED, provenance_id="nih-reporter", created_at=NOW
    )

    merged = merge_fundings(
        (older, newer),
        [make_funding("NIH", status=FundingStatus.GRANTED, grant="R01-1")],
        owner_id=OWNER,
        writer_id="nih-reporter",
        now=NOW,
    )

    assert merged[0] == older
    assert merged[1].status is FundingStatus.GRANTED


@pytest.mark.parametrize("writer", [OWNER, "nih-reporter"])
def test_delta_without_status_or_grant_is_ignored(writer: str) -> None:
    current = (make_funding("NSF", grant="123"),)

    merged = merge_fundings(
        current,
        [make_funding("NSF", grant="123"), make_funding("NIH", status=None)],
        owner_id=OWNER,
        writer_id=writer,
        now=NOW,
    )

    assert merged == current


def test_entries_of_other_provenances_are_never_rewritten() -> None:
    theirs = make_funding("NSF", status=FundingStatus.APPLIED, provenance_id="crossref")
    current = (theirs,)

    from_owner = merge_fundings(current, [], owner_id=OWNER, writer_id=OWNER, now=NOW)
    from_third = merge_fundings(
        current,
        [make_funding("NSF", status=FundingStatus.GRANTED, grant="1", provenance_id="crossref")],
        owner_id=OWNER,
        writer_id="nih-reporter",
        now=NOW,
    )

    assert from_owner == current
    assert from_third == current


def test_owner_submission_drops_its_unclaimed_open_entries_only() -> None:
    open_own = make_funding("NIH", status=FundingStatus.PLANNED)
    granted_own = make_funding("NSF", grant="123")

    merged = merge_fundings(
        (open_own, granted_own),
        [],
        owner_id=OWNER,
        writer_id=OWNER,
        now=NOW,
    )

    assert merged == (granted_own,)


def test_echoing_the_current_state_changes_nothing() -> None:
    current = make_record(
        fundings=(make_funding("NSF", grant="123"),),
        related_identifiers=(
            make_related("https://doi.org/10.1/a"),
            make_related("https://doi.org/10.1/b", provenance_id="datacite"),
        ),
    )

    merged = reconcile(OWNER, OWNER, current, current, now=NOW)

    assert merged.fundings == current.fundings
    assert merged.related_identifiers == current.related_identifiers


def test_related_identifiers_are_isolated_per_provenance() -> None:
    current = (
        make_related("https://doi.org/10.1/owner"),
        make_related("https://doi.org/10.1/harvested", provenance_id="datacite"),
    )

    from_owner = merge_related_identifiers(
        current,
        [make_related("https://doi.org/10.1/owner-new")],
        owner_id=OWNER,
        writer_id=OWNER,
    )
    from_harvester = merge_related_identifiers(
        current,
        [make_related("https://doi.org/10.1/owner"), make_related("https://doi.org/10.1/more")],
        owner_id=OWNER,
        writer_id="datacite",
    )

    assert [entry.identifier for entry in from_owner] == [
        "https://doi.org/10.1/harvested",
        "https://doi.org/10.1/owner-new",
    ]
    assert [(entry.identifier, entry.provenance_id) for entry in from_harvester] == [
        ("https://doi.org/10.1/owner", None),
        ("https://doi.org/10.1/more", "datacite"),
    ]


def test_owner_only_changes_modification_status() -> None:
    entry = ModificationEntry(
        id="2024-05-02-beef",
        provenance="datacite",
        timestamp=T0,
        related_identifiers=(make_related("https://doi.org/10.1/a"),),
    )
    current = make_record(modifications=(entry,))
    tampered = replace(
        entry, status=ModificationStatus.APPROVED, related_identifiers=(), note="edited"
    )
    proposed = replace(current, modifications=(tampered,))

    merged = reconcile(OWNER, OWNER, current, proposed, now=NOW)
    ignored = reconcile(OWNER, "datacite", current, proposed, now=NOW)

    assert merged.modifications == (entry.with_status(ModificationStatus.APPROVED),)
    assert ignored.modifications == (entry,)
