"""CRUD for problems, notes and interview guides."""

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.content import ContentMixin, Difficulty, ItemType, Problem, content_model_for
from app.services.bookmarks import cascade_delete_bookmarks
from app.services.errors import StorageError, ValidationError

logger = get_logger(__name__)


def _search_columns(model: type[ContentMixin]) -> list:
    columns = [model.title, model.description]
    if hasattr(model, "content"):
        columns.append(model.content)
    return columns


def _check_difficulty(value: str | None) -> None:
    if value is None:
        return
    try:
        Difficulty(value)
    except ValueError:
        raise ValidationError(
            "difficulty must be 'Easy', 'Medium', or 'Hard'",
            details={"difficulty": value},
        ) from None


def list_items(
    db: Session,
    item_type: ItemType,
    category: str | None = None,
    difficulty: str | None = None,
    search: str | None = None,
) -> list[ContentMixin]:
    """List items of one type, newest first, with optional filters."""
    model = content_model_for(item_type)
    stmt = select(model)

    if category:
        stmt = stmt.where(model.category == category)

    if difficulty:
        if model is not Problem:
            raise ValidationError("difficulty filter is only supported for problems")
        _check_difficulty(difficulty)
        stmt = stmt.where(model.difficulty == difficulty)

    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(*(column.ilike(pattern) for column in _search_columns(model))))

    stmt = stmt.order_by(model.created_at.desc(), model.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_item(db: Session, item_type: ItemType, item_id: UUID) -> ContentMixin | None:
    model = content_model_for(item_type)
    return db.get(model, item_id)


def create_item(
    db: Session,
    item_type: ItemType,
    data: dict[str, Any],
    author_id: UUID | None,
) -> ContentMixin:
    """Create a content item owned by ``author_id``."""
    model = content_model_for(item_type)
    if model is Problem:
        _check_difficulty(data.get("difficulty"))

    item = model(**data, author_id=author_id)
    if item.tags is None:
        item.tags = []
    db.add(item)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to create {item_type.value}") from e
    db.refresh(item)

    logger.info(
        "content_created",
        extra={"event": "content_created", "item_type": item_type.value, "item_id": str(item.id)},
    )
    return item


def update_item(
    db: Session,
    item_type: ItemType,
    item_id: UUID,
    changes: dict[str, Any],
) -> ContentMixin | None:
    """Apply a partial update. Fields that are absent or None are left untouched."""
    item = get_item(db, item_type, item_id)
    if item is None:
        return None

    if item_type == ItemType.PROBLEM:
        _check_difficulty(changes.get("difficulty"))

    for key, value in changes.items():
        if value is not None:
            setattr(item, key, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to update {item_type.value}") from e
    db.refresh(item)
    return item


def delete_item(db: Session, item_type: ItemType, item_id: UUID) -> dict[str, Any] | None:
    """Delete an item and every bookmark pointing at it.

    Returns the deleted item's id and title, or None when it did not exist.
    """
    item = get_item(db, item_type, item_id)
    if item is None:
        return None

    deleted = {"id": item.id, "title": item.title}
    try:
        removed_bookmarks = cascade_delete_bookmarks(db, item.id, item_type)
        db.delete(item)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to delete {item_type.value}") from e

    logger.info(
        "content_deleted",
        extra={
            "event": "content_deleted",
            "item_type": item_type.value,
            "item_id": str(deleted["id"]),
            "bookmarks_removed": removed_bookmarks,
        },
    )
    return deleted


def count_items(db: Session, item_type: ItemType) -> int:
    model = content_model_for(item_type)
    return db.execute(select(func.count()).select_from(model)).scalar_one()
