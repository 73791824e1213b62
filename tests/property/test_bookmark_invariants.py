"""Property-based tests for bookmark toggle invariants."""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.bookmark import Bookmark
from app.services.bookmarks import ToggleAction, is_bookmarked, list_bookmarks, toggle_bookmark
from tests.helpers.seed import create_problem, create_test_user

ITEM_TITLES = ["Two Sum", "Reverse String", "Valid Parentheses"]


@settings(
    max_examples=25,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
@given(toggles=st.lists(st.sampled_from(ITEM_TITLES), max_size=12))
def test_toggle_parity(db: Session, toggles: list[str]) -> None:
    """
    Property: a bookmark is present iff it was toggled an odd number of times.

    Invariants:
    - Each toggle flips exactly one (user, item, type) triple
    - No triple is ever stored twice
    """
    # The db fixture is shared across examples: use a fresh user and fresh items each time
    user = create_test_user(db)
    items = {title: create_problem(db, title=title).id for title in ITEM_TITLES}
    db.commit()

    present = dict.fromkeys(ITEM_TITLES, False)
    for title in toggles:
        result = toggle_bookmark(db, user.id, str(items[title]), "problem")
        expected = ToggleAction.REMOVED if present[title] else ToggleAction.ADDED
        assert result.action == expected
        present[title] = not present[title]

    for title, item_id in items.items():
        assert is_bookmarked(db, user.id, item_id, "problem") is present[title]

    rows = db.execute(
        select(Bookmark.item_id, func.count())
        .where(Bookmark.user_id == user.id)
        .group_by(Bookmark.item_id)
    ).all()
    assert all(count == 1 for _, count in rows)
    assert len(list_bookmarks(db, user.id)) == sum(present.values())
