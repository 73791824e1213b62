"""Bookmark service: toggle, list, remove and cascade bookmarks.

Each (user, item, item type) triple is either absent or present; toggling flips
it. Uniqueness is enforced by the ``uq_bookmarks_user_item`` constraint and
inserts use ON CONFLICT DO NOTHING, so concurrent toggles never produce
duplicates.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.models.bookmark import UNKNOWN_ITEM_TITLE, Bookmark
from app.models.content import ItemType, content_model_for, utcnow
from app.services.errors import (
    BookmarkNotFoundError,
    ItemNotFoundError,
    ResolutionFailedError,
    StorageError,
    ValidationError,
)
from app.services.identity_resolver import ResolutionStatus, resolve

logger = get_logger(__name__)


class ToggleAction(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass
class BookmarkSet:
    """A user's bookmarks grouped by item type, newest first within each group."""

    problems: list[Bookmark] = field(default_factory=list)
    notes: list[Bookmark] = field(default_factory=list)
    interviews: list[Bookmark] = field(default_factory=list)

    def group(self, item_type: ItemType) -> list[Bookmark]:
        return getattr(self, item_type.plural)

    def item_ids(self, item_type: ItemType) -> list[UUID]:
        return [bookmark.item_id for bookmark in self.group(item_type)]


@dataclass
class ToggleResult:
    action: ToggleAction
    item_id: UUID
    item_type: ItemType
    bookmarks: BookmarkSet


def parse_item_type(value: ItemType | str | None) -> ItemType:
    """Validate an item type against the closed set."""
    if isinstance(value, ItemType):
        return value
    try:
        return ItemType(value)
    except ValueError:
        raise ValidationError(
            "item_type must be 'problem', 'note', or 'interview'",
            details={"item_type": value},
        ) from None


def resolve_item_id(db: Session, reference: str, item_type: ItemType) -> UUID:
    """Resolve a caller-supplied reference or raise the matching service error."""
    resolution = resolve(db, reference, item_type)
    if resolution.status == ResolutionStatus.FOUND:
        return resolution.item_id
    if resolution.status == ResolutionStatus.LOOKUP_FAILED and not settings.RESOLVER_LEGACY_NOT_FOUND:
        raise ResolutionFailedError(
            f"Could not look up {item_type.value} '{reference}'",
            details={"reference": reference, "item_type": item_type.value},
        )
    raise ItemNotFoundError(reference, item_type.value)


def _triple(owner: UUID, item_id: UUID, item_type: ItemType):
    return (
        Bookmark.user_id == owner,
        Bookmark.item_id == item_id,
        Bookmark.item_type == item_type.value,
    )


def _current_title(db: Session, item_id: UUID, item_type: ItemType) -> str:
    """Best-effort title snapshot for a new bookmark."""
    model = content_model_for(item_type)
    try:
        # A failed lookup rolls back only this savepoint
        with db.begin_nested():
            title = db.execute(select(model.title).where(model.id == item_id)).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.warning(
            "Title lookup failed, using placeholder",
            extra={"item_id": str(item_id), "item_type": item_type.value, "error": str(e)},
        )
        return UNKNOWN_ITEM_TITLE
    return title or UNKNOWN_ITEM_TITLE


def _insert_ignoring_conflict(db: Session, values: dict) -> bool:
    """Insert a bookmark row; returns False when the row already existed."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    else:
        dialect_insert = None

    if dialect_insert is not None:
        stmt = dialect_insert(Bookmark.__table__).values(**values).on_conflict_do_nothing(
            index_elements=["user_id", "item_id", "item_type"]
        )
        return db.execute(stmt).rowcount > 0

    try:
        with db.begin_nested():
            db.execute(insert(Bookmark.__table__).values(**values))
    except IntegrityError:
        return False
    return True


def get_bookmark_set(db: Session, owner: UUID) -> BookmarkSet:
    """Load every bookmark of a user, grouped by item type."""
    bookmark_set = BookmarkSet()
    for bookmark in list_bookmarks(db, owner):
        bookmark_set.group(ItemType(bookmark.item_type)).append(bookmark)
    return bookmark_set


def list_bookmarks(
    db: Session,
    owner: UUID,
    item_type: ItemType | str | None = None,
) -> list[Bookmark]:
    """List a user's bookmarks, newest first.

    Entries whose item has been deleted are still returned; their
    ``cached_title`` is the only title available.
    """
    stmt = select(Bookmark).where(Bookmark.user_id == owner)
    if item_type is not None:
        stmt = stmt.where(Bookmark.item_type == parse_item_type(item_type).value)
    stmt = stmt.order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
    return list(db.execute(stmt).scalars().all())


def toggle_bookmark(
    db: Session,
    owner: UUID,
    reference: str,
    item_type: ItemType | str,
) -> ToggleResult:
    """Add the bookmark if absent, remove it if present.

    Returns the user's full bookmark set after the change. Nothing is written
    unless the reference resolves.
    """
    item_type = parse_item_type(item_type)
    item_id = resolve_item_id(db, reference, item_type)

    try:
        removed = db.execute(delete(Bookmark).where(*_triple(owner, item_id, item_type))).rowcount
        if removed:
            action = ToggleAction.REMOVED
        else:
            inserted = _insert_ignoring_conflict(
                db,
                {
                    "id": uuid4(),
                    "user_id": owner,
                    "item_id": item_id,
                    "item_type": item_type.value,
                    "cached_title": _current_title(db, item_id, item_type),
                    "created_at": utcnow(),
                },
            )
            if not inserted:
                # A concurrent toggle created it first; the triple is present either way.
                logger.info(
                    "Bookmark insert conflicted, treating as existing",
                    extra={"user_id": str(owner), "item_id": str(item_id), "item_type": item_type.value},
                )
            action = ToggleAction.ADDED

        bookmarks = get_bookmark_set(db, owner)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to toggle bookmark") from e

    logger.info(
        "bookmark_toggled",
        extra={
            "event": "bookmark_toggled",
            "action": action.value,
            "user_id": str(owner),
            "item_id": str(item_id),
            "item_type": item_type.value,
        },
    )
    return ToggleResult(action=action, item_id=item_id, item_type=item_type, bookmarks=bookmarks)


def remove_bookmark(
    db: Session,
    owner: UUID,
    reference: str,
    item_type: ItemType | str,
) -> ToggleResult:
    """Remove a bookmark; raises BookmarkNotFoundError when it does not exist."""
    item_type = parse_item_type(item_type)
    item_id = resolve_item_id(db, reference, item_type)

    try:
        removed = db.execute(delete(Bookmark).where(*_triple(owner, item_id, item_type))).rowcount
        if not removed:
            db.rollback()
            raise BookmarkNotFoundError(
                "Bookmark not found",
                details={"reference": reference, "item_type": item_type.value},
            )
        bookmarks = get_bookmark_set(db, owner)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to remove bookmark") from e

    return ToggleResult(
        action=ToggleAction.REMOVED,
        item_id=item_id,
        item_type=item_type,
        bookmarks=bookmarks,
    )


def cascade_delete_bookmarks(db: Session, item_id: UUID, item_type: ItemType | str) -> int:
    """Delete every user's bookmarks of a content item. Does not commit."""
    item_type = parse_item_type(item_type)
    result = db.execute(
        delete(Bookmark).where(
            Bookmark.item_id == item_id,
            Bookmark.item_type == item_type.value,
        )
    )
    return result.rowcount or 0


def is_bookmarked(db: Session, owner: UUID, item_id: UUID, item_type: ItemType | str) -> bool:
    item_type = parse_item_type(item_type)
    stmt = select(Bookmark.id).where(*_triple(owner, item_id, item_type)).limit(1)
    return db.execute(stmt).first() is not None


def bookmarked_ids(
    db: Session,
    owner: UUID,
    item_type: ItemType | str,
    item_ids: Iterable[UUID],
) -> set[UUID]:
    """Subset of ``item_ids`` the user has bookmarked, in one query."""
    item_type = parse_item_type(item_type)
    item_ids = list(item_ids)
    if not item_ids:
        return set()
    stmt = select(Bookmark.item_id).where(
        Bookmark.user_id == owner,
        Bookmark.item_type == item_type.value,
        Bookmark.item_id.in_(item_ids),
    )
    return set(db.execute(stmt).scalars().all())


def count_bookmarks(db: Session) -> int:
    return db.execute(select(func.count()).select_from(Bookmark)).scalar_one()
