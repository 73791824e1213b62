"""Pydantic schemas for problems, notes and interview guides."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

DifficultyLiteral = Literal["Easy", "Medium", "Hard"]


# ============================================================================
# Shared
# ============================================================================


class ContentBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None


class ContentUpdateBase(BaseModel):
    """Partial update: omitted or null fields keep their stored value."""

    title: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=100)
    tags: list[str] | None = None
    description: str | None = None


class ContentOutBase(BaseModel):
    id: UUID
    title: str
    category: str
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    author_id: UUID | None = None
    author_name: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    is_bookmarked: bool = False

    class Config:
        from_attributes = True


class DeletedItem(BaseModel):
    id: UUID
    title: str


# ============================================================================
# Problems
# ============================================================================


class ProblemCreate(ContentBase):
    difficulty: DifficultyLiteral
    description: str = Field(..., min_length=1)
    explanation: str | None = None
    code: str | None = None
    test_cases: str | None = None


class ProblemUpdate(ContentUpdateBase):
    difficulty: DifficultyLiteral | None = None
    explanation: str | None = None
    code: str | None = None
    test_cases: str | None = None


class ProblemOut(ContentOutBase):
    difficulty: str
    explanation: str | None = None
    code: str | None = None
    test_cases: str | None = None


# ============================================================================
# Notes and interviews (same shape)
# ============================================================================


class ArticleCreate(ContentBase):
    content: str = Field(..., min_length=1)


class ArticleUpdate(ContentUpdateBase):
    content: str | None = None


class ArticleOut(ContentOutBase):
    content: str
