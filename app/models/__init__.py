"""Database models."""

# Import all models here so Alembic can detect them
from app.models.bookmark import UNKNOWN_ITEM_TITLE, Bookmark
from app.models.content import (
    CONTENT_MODELS,
    ContentMixin,
    Difficulty,
    Interview,
    ItemType,
    Note,
    Problem,
    content_model_for,
)
from app.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "ItemType",
    "Difficulty",
    "ContentMixin",
    "Problem",
    "Note",
    "Interview",
    "CONTENT_MODELS",
    "content_model_for",
    "Bookmark",
    "UNKNOWN_ITEM_TITLE",
]
