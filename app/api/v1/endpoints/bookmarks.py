"""Bookmark endpoints.

Toggling returns the caller's whole bookmark state so clients can replace
their local copy instead of merging deltas.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.app_exceptions import raise_app_error, raise_service_error
from app.core.dependencies import CurrentUser
from app.db.session import get_db
from app.models.user import User
from app.schemas.bookmark import (
    BookmarkCheckResponse,
    BookmarkGroups,
    BookmarkListResponse,
    BookmarkOut,
    BookmarkToggleRequest,
    BookmarkToggleResponse,
)
from app.services.bookmarks import (
    ToggleResult,
    is_bookmarked,
    list_bookmarks,
    parse_item_type,
    remove_bookmark,
    resolve_item_id,
    toggle_bookmark,
)
from app.services.errors import ServiceError

router = APIRouter()


def _owner_for(db: Session, current_user: User, owner: UUID | None) -> UUID:
    """Bookmarks belong to the caller unless an admin names another owner."""
    if owner is None or owner == current_user.id:
        return current_user.id
    if not current_user.is_admin:
        raise_app_error(
            status_code=status.HTTP_403_FORBIDDEN,
            code="FORBIDDEN",
            message="Only admins can manage other users' bookmarks",
        )
    if db.get(User, owner) is None:
        raise_app_error(
            status_code=status.HTTP_404_NOT_FOUND,
            code="USER_NOT_FOUND",
            message="Owner not found",
            details={"owner": str(owner)},
        )
    return owner


def _toggle_response(result: ToggleResult) -> BookmarkToggleResponse:
    return BookmarkToggleResponse(
        action=result.action.value,
        item_id=result.item_id,
        item_type=result.item_type.value,
        bookmarks=BookmarkGroups.from_set(result.bookmarks),
    )


@router.post(
    "",
    response_model=BookmarkToggleResponse,
    summary="Toggle a bookmark",
    description="Add the bookmark if absent, remove it if present. Returns all bookmarks.",
)
def toggle(
    payload: BookmarkToggleRequest,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> BookmarkToggleResponse:
    # Validate the type before any storage access, including the owner lookup
    try:
        item_type = parse_item_type(payload.item_type)
    except ServiceError as e:
        raise_service_error(e)
    owner = _owner_for(db, current_user, payload.owner)

    try:
        result = toggle_bookmark(db, owner, payload.item_ref, item_type)
    except ServiceError as e:
        raise_service_error(e)
    return _toggle_response(result)


@router.get(
    "",
    response_model=BookmarkListResponse,
    summary="List bookmarks",
    description="Bookmarks newest first, optionally filtered by item type.",
)
def list_(
    current_user: CurrentUser,
    item_type: str | None = Query(None, description="problem | note | interview"),
    owner: UUID | None = Query(None, description="Bookmark owner (admins only)"),
    db: Session = Depends(get_db),
) -> BookmarkListResponse:
    try:
        parsed_type = parse_item_type(item_type) if item_type else None
    except ServiceError as e:
        raise_service_error(e)
    owner_id = _owner_for(db, current_user, owner)

    bookmarks = [BookmarkOut.model_validate(b) for b in list_bookmarks(db, owner_id, parsed_type)]
    return BookmarkListResponse(count=len(bookmarks), bookmarks=bookmarks)


@router.get(
    "/check",
    response_model=BookmarkCheckResponse,
    summary="Check a bookmark",
)
def check(
    current_user: CurrentUser,
    item_ref: str = Query(..., min_length=1, description="Item id or title/category/tag"),
    item_type: str = Query(..., alias="type", description="problem | note | interview"),
    db: Session = Depends(get_db),
) -> BookmarkCheckResponse:
    try:
        parsed_type = parse_item_type(item_type)
        item_id = resolve_item_id(db, item_ref, parsed_type)
    except ServiceError as e:
        raise_service_error(e)

    return BookmarkCheckResponse(
        item_id=item_id,
        item_type=parsed_type.value,
        is_bookmarked=is_bookmarked(db, current_user.id, item_id, parsed_type),
    )


@router.delete(
    "/{item_ref}",
    response_model=BookmarkToggleResponse,
    summary="Remove a bookmark",
    description="Remove a bookmark on an item. 404 if it is not bookmarked.",
)
def remove(
    item_ref: str,
    current_user: CurrentUser,
    item_type: str = Query(..., alias="type", description="problem | note | interview"),
    owner: UUID | None = Query(None, description="Bookmark owner (admins only)"),
    db: Session = Depends(get_db),
) -> BookmarkToggleResponse:
    try:
        parsed_type = parse_item_type(item_type)
    except ServiceError as e:
        raise_service_error(e)
    owner_id = _owner_for(db, current_user, owner)

    try:
        result = remove_bookmark(db, owner_id, item_ref, parsed_type)
    except ServiceError as e:
        raise_service_error(e)
    return _toggle_response(result)
