"""Content models: problems, notes and interview guides."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, JSON, String, Text, Uuid
from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy.sql import func

from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ItemType(str, Enum):
    """Closed set of bookmarkable content types."""

    PROBLEM = "problem"
    NOTE = "note"
    INTERVIEW = "interview"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ContentMixin:
    """Columns shared by every content table."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)  # List of strings
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    @declared_attr
    def author_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def author(cls):
        return relationship("User", lazy="joined")

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author is not None else None


class Problem(ContentMixin, Base):
    """Coding problem with reference solution."""

    __tablename__ = "problems"

    item_type = ItemType.PROBLEM

    difficulty = Column(String(20), nullable=False, index=True)
    explanation = Column(Text, nullable=True)
    code = Column(Text, nullable=True)
    test_cases = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("difficulty IN ('Easy', 'Medium', 'Hard')", name="ck_problems_difficulty"),
    )


class Note(ContentMixin, Base):
    """Study note (markdown content)."""

    __tablename__ = "notes"

    item_type = ItemType.NOTE

    content = Column(Text, nullable=False)


class Interview(ContentMixin, Base):
    """Interview question set (markdown content)."""

    __tablename__ = "interviews"

    item_type = ItemType.INTERVIEW

    content = Column(Text, nullable=False)


CONTENT_MODELS: dict[ItemType, type[ContentMixin]] = {
    ItemType.PROBLEM: Problem,
    ItemType.NOTE: Note,
    ItemType.INTERVIEW: Interview,
}


def content_model_for(item_type: ItemType) -> type[ContentMixin]:
    """Return the ORM model backing an item type."""
    return CONTENT_MODELS[item_type]
