"""Database engine configuration."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine.

    PostgreSQL gets a bounded pool: connections are acquired per operation,
    waiting at most DB_POOL_TIMEOUT seconds, and recycled after DB_POOL_RECYCLE
    seconds. SQLite (tests, local hacking) shares one connection.
    """
    url = database_url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DB_ECHO,
        )

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args={"connect_timeout": settings.DB_POOL_TIMEOUT},
        echo=settings.DB_ECHO,
    )


# Global engine instance
engine = create_db_engine()
