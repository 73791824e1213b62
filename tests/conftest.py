"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at a throwaway database first.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test_jwt_secret_key_change_in_production_min_32_chars")
os.environ["SEED_DEMO_ACCOUNTS"] = "false"

from collections.abc import AsyncGenerator, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.seed_demo import seed_sample_content  # noqa: E402
from app.db.base import Base, import_models  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.db.session import SessionLocal, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402
from tests.helpers.seed import auth_headers, create_test_admin, create_test_user  # noqa: E402

import_models()


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; application code may commit freely."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


def _override_get_db(db: Session):
    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close the session, it's managed by the db fixture

    return override_get_db


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with database dependency override."""
    app.dependency_overrides[get_db] = _override_get_db(db)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def async_client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Create an async FastAPI test client with database dependency override."""
    app.dependency_overrides[get_db] = _override_get_db(db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        try:
            yield ac
        finally:
            app.dependency_overrides.clear()


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a regular user."""
    user = create_test_user(db, email="user@example.com", password="TestPass123!", name="Test User")
    db.commit()
    return user


@pytest.fixture
def test_admin_user(db: Session) -> User:
    """Create an admin user."""
    user = create_test_admin(db, email="admin@example.com", password="AdminPass123!", name="Test Admin")
    db.commit()
    return user


@pytest.fixture
def auth_headers_user(test_user: User) -> dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture
def auth_headers_admin(test_admin_user: User) -> dict[str, str]:
    return auth_headers(test_admin_user)


@pytest.fixture
def sample_content(db: Session, test_admin_user: User) -> int:
    """Two problems, two notes and two interview guides."""
    created = seed_sample_content(db, test_admin_user)
    db.commit()
    return created
