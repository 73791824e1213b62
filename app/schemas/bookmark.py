"""Pydantic schemas for bookmarks."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.services.bookmarks import BookmarkSet


# ============================================================================
# Requests
# ============================================================================


class BookmarkToggleRequest(BaseModel):
    """Toggle a bookmark on a problem, note or interview.

    ``item_ref`` is either the item's id or free text (title, category or tag).
    ``item_type`` is checked by the service so unknown types get a 400.
    """

    item_ref: str = Field(..., min_length=1, max_length=255, description="Item id or title/category/tag")
    item_type: str = Field(..., min_length=1, description="problem | note | interview")
    owner: UUID | None = Field(None, description="Bookmark owner (admins only)")


# ============================================================================
# Responses
# ============================================================================


class BookmarkOut(BaseModel):
    """One bookmark. ``title`` is the snapshot taken when it was created."""

    id: UUID
    item_id: UUID
    item_type: str
    title: str = Field(validation_alias="cached_title")
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True


class BookmarkGroups(BaseModel):
    problems: list[BookmarkOut] = Field(default_factory=list)
    notes: list[BookmarkOut] = Field(default_factory=list)
    interviews: list[BookmarkOut] = Field(default_factory=list)

    @classmethod
    def from_set(cls, bookmark_set: BookmarkSet) -> "BookmarkGroups":
        return cls(
            problems=[BookmarkOut.model_validate(b) for b in bookmark_set.problems],
            notes=[BookmarkOut.model_validate(b) for b in bookmark_set.notes],
            interviews=[BookmarkOut.model_validate(b) for b in bookmark_set.interviews],
        )


class BookmarkToggleResponse(BaseModel):
    """Toggle/remove result carrying the user's full bookmark state."""

    success: bool = True
    action: Literal["added", "removed"]
    item_id: UUID
    item_type: str
    bookmarks: BookmarkGroups


class BookmarkListResponse(BaseModel):
    success: bool = True
    count: int
    bookmarks: list[BookmarkOut]


class BookmarkCheckResponse(BaseModel):
    success: bool = True
    item_id: UUID
    item_type: str
    is_bookmarked: bool
