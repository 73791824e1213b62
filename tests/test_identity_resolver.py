"""Tests for item reference resolution."""

import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.content import ItemType
from app.services.identity_resolver import (
    MatchRule,
    ResolutionStatus,
    is_canonical_id,
    resolve,
)
from tests.helpers.seed import create_interview, create_note, create_problem

LOW_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")
MID_ID = uuid.UUID("00000000-0000-4000-8000-000000000002")
HIGH_ID = uuid.UUID("00000000-0000-4000-8000-000000000003")


class NoStorageSession:
    """Session stand-in that fails the test if it is touched."""

    def __getattr__(self, name):
        raise AssertionError(f"storage accessed: {name}")


class BrokenSession:
    """Session stand-in whose queries fail like an unreachable database."""

    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))


@pytest.mark.parametrize(
    "reference,expected",
    [
        ("3f2b8c1e-7d4a-4b6e-9f10-2a3b4c5d6e7f", True),
        ("3F2B8C1E-7D4A-4B6E-9F10-2A3B4C5D6E7F", True),
        ("00000000-0000-0000-0000-000000000000", False),  # version nibble 0
        ("3f2b8c1e-7d4a-4b6e-7f10-2a3b4c5d6e7f", False),  # variant nibble 7
        ("3f2b8c1e7d4a4b6e9f102a3b4c5d6e7f", False),
        ("Two Sum", False),
    ],
)
def test_is_canonical_id(reference: str, expected: bool) -> None:
    assert is_canonical_id(reference) is expected


def test_canonical_id_is_returned_without_a_lookup() -> None:
    """A canonical id short-circuits even when no such item exists."""
    reference = "3f2b8c1e-7d4a-4b6e-9f10-2a3b4c5d6e7f"

    resolution = resolve(NoStorageSession(), reference, ItemType.PROBLEM)

    assert resolution.status == ResolutionStatus.FOUND
    assert resolution.rule == MatchRule.CANONICAL_ID
    assert resolution.item_id == uuid.UUID(reference)


@pytest.mark.parametrize("reference", ["", "   ", None])
def test_empty_reference_is_not_found(reference) -> None:
    resolution = resolve(NoStorageSession(), reference, ItemType.NOTE)

    assert resolution.status == ResolutionStatus.NOT_FOUND
    assert resolution.item_id is None


def test_exact_title_is_case_insensitive(db: Session) -> None:
    problem = create_problem(db, title="Two Sum")
    db.commit()

    resolution = resolve(db, "two SUM", ItemType.PROBLEM)

    assert resolution.found
    assert resolution.item_id == problem.id
    assert resolution.rule == MatchRule.EXACT_TITLE


def test_exact_title_beats_fuzzy_match_with_lower_id(db: Session) -> None:
    create_problem(db, id=LOW_ID, title="Two Sum")
    exact = create_problem(db, id=HIGH_ID, title="Sum")
    db.commit()

    resolution = resolve(db, "sum", ItemType.PROBLEM)

    assert resolution.item_id == exact.id
    assert resolution.rule == MatchRule.EXACT_TITLE


def test_duplicate_titles_resolve_to_lowest_id(db: Session) -> None:
    create_note(db, id=HIGH_ID, title="Closures")
    create_note(db, id=LOW_ID, title="Closures")
    db.commit()

    for _ in range(3):
        assert resolve(db, "closures", ItemType.NOTE).item_id == LOW_ID


def test_fuzzy_matches_title_substring(db: Session) -> None:
    problem = create_problem(db, title="Reverse String", category="String")
    db.commit()

    resolution = resolve(db, "verse", ItemType.PROBLEM)

    assert resolution.item_id == problem.id
    assert resolution.rule == MatchRule.FUZZY


def test_fuzzy_matches_category_substring(db: Session) -> None:
    interview = create_interview(db, title="Hooks Q&A", category="React")
    db.commit()

    resolution = resolve(db, "rea", ItemType.INTERVIEW)

    assert resolution.item_id == interview.id
    assert resolution.rule == MatchRule.FUZZY


def test_fuzzy_matches_exact_tag_only(db: Session) -> None:
    problem = create_problem(db, title="Two Sum", category="Array", tags=["array", "Hash-Table"])
    db.commit()

    assert resolve(db, "hash-table", ItemType.PROBLEM).item_id == problem.id
    # Tags match whole values, not substrings
    assert resolve(db, "hash", ItemType.PROBLEM).status == ResolutionStatus.NOT_FOUND


def test_fuzzy_tie_break_spans_text_and_tag_matches(db: Session) -> None:
    """The lowest id wins even when it only matches by tag."""
    create_problem(db, id=HIGH_ID, title="Graphs and Trees", category="Graph")
    tagged = create_problem(db, id=LOW_ID, title="Course Schedule", category="Sorting", tags=["graphs"])
    db.commit()

    resolution = resolve(db, "graphs", ItemType.PROBLEM)

    assert resolution.item_id == tagged.id
    assert resolution.rule == MatchRule.FUZZY


def test_fuzzy_prefers_lower_id_text_match(db: Session) -> None:
    text_match = create_problem(db, id=LOW_ID, title="Graph Coloring", category="Graph")
    create_problem(db, id=MID_ID, title="Course Schedule", category="Sorting", tags=["graph"])
    db.commit()

    assert resolve(db, "graph", ItemType.PROBLEM).item_id == text_match.id


def test_resolution_is_scoped_to_item_type(db: Session) -> None:
    create_note(db, title="Binary Search")
    db.commit()

    resolution = resolve(db, "Binary Search", ItemType.PROBLEM)

    assert resolution.status == ResolutionStatus.NOT_FOUND


def test_like_wildcards_are_literal(db: Session) -> None:
    create_problem(db, title="Two Sum", category="Array")
    db.commit()

    assert resolve(db, "%", ItemType.PROBLEM).status == ResolutionStatus.NOT_FOUND
    assert resolve(db, "Two_Sum", ItemType.PROBLEM).status == ResolutionStatus.NOT_FOUND


def test_uuid_shaped_but_not_canonical_goes_through_text_rules(db: Session) -> None:
    resolution = resolve(db, "00000000-0000-0000-0000-000000000000", ItemType.PROBLEM)

    assert resolution.status == ResolutionStatus.NOT_FOUND


def test_storage_failure_is_distinct_from_not_found() -> None:
    resolution = resolve(BrokenSession(), "Two Sum", ItemType.PROBLEM)

    assert resolution.status == ResolutionStatus.LOOKUP_FAILED
    assert not resolution.found
    assert isinstance(resolution.error, OperationalError)


def test_exact_non_ascii_title_beats_fuzzy_match_with_lower_id(db: Session) -> None:
    create_problem(db, id=LOW_ID, title="Ärger Sort Variant")
    exact = create_problem(db, id=HIGH_ID, title="Ärger Sort")
    db.commit()

    resolution = resolve(db, "Ärger Sort", ItemType.PROBLEM)

    assert resolution.item_id == exact.id
    assert resolution.rule == MatchRule.EXACT_TITLE
