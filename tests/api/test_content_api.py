"""Tests for the problem, note and interview endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.models.content import Problem
from tests.helpers.seed import create_note

NEW_PROBLEM = {
    "title": "Valid Parentheses",
    "difficulty": "Easy",
    "category": "Stack",
    "tags": ["stack", "string"],
    "description": "Determine if the brackets in a string are balanced.",
}


@pytest.mark.asyncio
async def test_list_problems_anonymously(async_client: AsyncClient, sample_content: int) -> None:
    response = await async_client.get("/api/problems")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["count"] == 2
    assert {p["title"] for p in data["problems"]} == {"Two Sum", "Reverse String"}
    assert all(p["is_bookmarked"] is False for p in data["problems"])


@pytest.mark.asyncio
async def test_list_marks_bookmarked_items(
    async_client: AsyncClient,
    sample_content: int,
    auth_headers_user: dict,
) -> None:
    await async_client.post(
        "/api/bookmarks",
        json={"item_ref": "Two Sum", "item_type": "problem"},
        headers=auth_headers_user,
    )

    response = await async_client.get("/api/problems", headers=auth_headers_user)

    marked = {p["title"]: p["is_bookmarked"] for p in response.json()["problems"]}
    assert marked == {"Two Sum": True, "Reverse String": False}


@pytest.mark.asyncio
async def test_list_filters(async_client: AsyncClient, sample_content: int) -> None:
    response = await async_client.get("/api/problems", params={"category": "String"})
    assert [p["title"] for p in response.json()["problems"]] == ["Reverse String"]

    response = await async_client.get("/api/notes", params={"search": "complexity"})
    assert [n["title"] for n in response.json()["notes"]] == ["Big O Notation"]

    response = await async_client.get("/api/problems", params={"difficulty": "Hard"})
    assert response.json()["count"] == 0


@pytest.mark.asyncio
async def test_difficulty_filter_only_applies_to_problems(
    async_client: AsyncClient, sample_content: int
) -> None:
    response = await async_client.get("/api/interviews", params={"difficulty": "Easy"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_one(async_client: AsyncClient, db: Session, sample_content: int) -> None:
    problem = db.query(Problem).filter(Problem.title == "Two Sum").one()

    response = await async_client.get(f"/api/problems/{problem.id}")

    assert response.status_code == 200
    assert response.json()["problem"]["title"] == "Two Sum"
    assert response.json()["problem"]["difficulty"] == "Easy"


@pytest.mark.asyncio
async def test_get_missing_item(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/notes/3f2b8c1e-7d4a-4b6e-9f10-2a3b4c5d6e7f")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOTE_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_requires_admin(async_client: AsyncClient, auth_headers_user: dict) -> None:
    response = await async_client.post("/api/problems", json=NEW_PROBLEM, headers=auth_headers_user)

    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


@pytest.mark.asyncio
async def test_create_and_update(
    async_client: AsyncClient,
    test_admin_user,
    auth_headers_admin: dict,
) -> None:
    response = await async_client.post("/api/problems", json=NEW_PROBLEM, headers=auth_headers_admin)

    assert response.status_code == 201
    created = response.json()["problem"]
    assert created["author_id"] == str(test_admin_user.id)
    assert created["tags"] == ["stack", "string"]

    response = await async_client.put(
        f"/api/problems/{created['id']}",
        json={"difficulty": "Medium", "title": None},
        headers=auth_headers_admin,
    )

    assert response.status_code == 200
    updated = response.json()["problem"]
    assert updated["difficulty"] == "Medium"
    assert updated["title"] == "Valid Parentheses"


@pytest.mark.asyncio
async def test_create_rejects_unknown_difficulty(async_client: AsyncClient, auth_headers_admin: dict) -> None:
    response = await async_client.post(
        "/api/problems",
        json={**NEW_PROBLEM, "difficulty": "Impossible"},
        headers=auth_headers_admin,
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_note(async_client: AsyncClient, auth_headers_admin: dict) -> None:
    response = await async_client.post(
        "/api/notes",
        json={"title": "Hash Maps", "category": "Data Structures", "content": "# Hash Maps"},
        headers=auth_headers_admin,
    )

    assert response.status_code == 201
    assert response.json()["note"]["tags"] == []


@pytest.mark.asyncio
async def test_delete_missing_item(async_client: AsyncClient, auth_headers_admin: dict) -> None:
    response = await async_client.delete(
        "/api/interviews/3f2b8c1e-7d4a-4b6e-9f10-2a3b4c5d6e7f", headers=auth_headers_admin
    )

    assert response.status_code == 404
    assert response.json()["error_code"] == "INTERVIEW_NOT_FOUND"


@pytest.mark.asyncio
async def test_admin_stats(async_client: AsyncClient, sample_content: int, auth_headers_admin: dict) -> None:
    response = await async_client.get("/api/admin/stats", headers=auth_headers_admin)

    assert response.status_code == 200
    assert response.json()["stats"] == {
        "problems": 2,
        "notes": 2,
        "interviews": 2,
        "users": 1,
        "bookmarks": 0,
    }


@pytest.mark.asyncio
async def test_items_carry_author_name(
    async_client: AsyncClient,
    db: Session,
    sample_content: int,
) -> None:
    response = await async_client.get("/api/notes")
    assert {n["author_name"] for n in response.json()["notes"]} == {"Test Admin"}

    problem = db.query(Problem).filter(Problem.title == "Two Sum").one()
    response = await async_client.get(f"/api/problems/{problem.id}")
    assert response.json()["problem"]["author_name"] == "Test Admin"


@pytest.mark.asyncio
async def test_author_name_is_null_without_author(async_client: AsyncClient, db: Session) -> None:
    note = create_note(db, title="Orphan Note")
    db.commit()

    response = await async_client.get(f"/api/notes/{note.id}")

    assert response.json()["note"]["author_name"] is None
