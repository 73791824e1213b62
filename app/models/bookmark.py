"""Bookmark model: a user's saved problems, notes and interview guides."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.sql import func

from app.db.base import Base
from app.models.content import utcnow

UNKNOWN_ITEM_TITLE = "Unknown Item"


class Bookmark(Base):
    """User bookmark for a content item.

    item_id is not a foreign key: the bookmark outlives the item it
    points at, and cached_title is the display fallback once the item is gone.
    """

    __tablename__ = "bookmarks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id = Column(Uuid(as_uuid=True), nullable=False)
    item_type = Column(String(20), nullable=False)

    # Title snapshot taken at creation; never refreshed
    cached_title = Column(String(255), nullable=False, default=UNKNOWN_ITEM_TITLE)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "item_id", "item_type", name="uq_bookmarks_user_item"),
        CheckConstraint(
            "item_type IN ('problem', 'note', 'interview')", name="ck_bookmarks_item_type"
        ),
        Index("ix_bookmarks_item", "item_id", "item_type"),
    )
