"""Database base and model registry."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def import_models() -> None:
    """Import every model module so Base.metadata is complete (Alembic, create_all)."""
    from app.models import Bookmark, Interview, Note, Problem, User  # noqa: F401
