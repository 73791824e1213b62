"""CRUD endpoints for problems, notes and interview guides.

The three content types share one router factory; they differ only in their
schemas and in the envelope keys (``problems`` / ``problem`` etc).
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.app_exceptions import raise_app_error, raise_service_error
from app.core.dependencies import AdminUser, OptionalUser
from app.db.session import get_db
from app.models.content import ItemType
from app.schemas.content import (
    ArticleCreate,
    ArticleOut,
    ArticleUpdate,
    DeletedItem,
    ProblemCreate,
    ProblemOut,
    ProblemUpdate,
)
from app.services import content as content_service
from app.services.bookmarks import bookmarked_ids, is_bookmarked
from app.services.errors import ServiceError


def _not_found(item_type: ItemType) -> None:
    name = item_type.value.capitalize()
    raise_app_error(
        status_code=status.HTTP_404_NOT_FOUND,
        code=f"{item_type.value.upper()}_NOT_FOUND",
        message=f"{name} not found",
    )


def build_content_router(
    item_type: ItemType,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    out_schema: type[BaseModel],
) -> APIRouter:
    """Build list/get/create/update/delete routes for one content type."""
    router = APIRouter()
    plural = item_type.plural
    singular = item_type.value

    @router.get("", summary=f"List {plural}")
    def list_items(
        current_user: OptionalUser,
        category: str | None = Query(None, description="Exact category"),
        difficulty: str | None = Query(None, description="Easy | Medium | Hard (problems only)"),
        search: str | None = Query(None, description="Case-insensitive text search"),
        db: Session = Depends(get_db),
    ):
        try:
            items = content_service.list_items(
                db, item_type, category=category, difficulty=difficulty, search=search
            )
        except ServiceError as e:
            raise_service_error(e)

        marked: set[UUID] = set()
        if current_user is not None:
            marked = bookmarked_ids(db, current_user.id, item_type, [item.id for item in items])

        payload = []
        for item in items:
            out = out_schema.model_validate(item)
            out.is_bookmarked = item.id in marked
            payload.append(out)
        return {"success": True, "count": len(payload), plural: payload}

    @router.get("/{item_id}", summary=f"Get one {singular}")
    def get_item(
        item_id: UUID,
        current_user: OptionalUser,
        db: Session = Depends(get_db),
    ):
        item = content_service.get_item(db, item_type, item_id)
        if item is None:
            _not_found(item_type)

        out = out_schema.model_validate(item)
        if current_user is not None:
            out.is_bookmarked = is_bookmarked(db, current_user.id, item.id, item_type)
        return {"success": True, singular: out}

    @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create a {singular}")
    def create_item(
        payload: create_schema,  # type: ignore[valid-type]
        current_user: AdminUser,
        db: Session = Depends(get_db),
    ):
        try:
            item = content_service.create_item(db, item_type, payload.model_dump(), current_user.id)
        except ServiceError as e:
            raise_service_error(e)
        return {
            "success": True,
            "message": f"{singular.capitalize()} created successfully",
            singular: out_schema.model_validate(item),
        }

    @router.put("/{item_id}", summary=f"Update a {singular}")
    def update_item(
        item_id: UUID,
        payload: update_schema,  # type: ignore[valid-type]
        current_user: AdminUser,
        db: Session = Depends(get_db),
    ):
        try:
            item = content_service.update_item(
                db, item_type, item_id, payload.model_dump(exclude_unset=True)
            )
        except ServiceError as e:
            raise_service_error(e)
        if item is None:
            _not_found(item_type)
        return {
            "success": True,
            "message": f"{singular.capitalize()} updated successfully",
            singular: out_schema.model_validate(item),
        }

    @router.delete("/{item_id}", summary=f"Delete a {singular}")
    def delete_item(
        item_id: UUID,
        current_user: AdminUser,
        db: Session = Depends(get_db),
    ):
        try:
            deleted = content_service.delete_item(db, item_type, item_id)
        except ServiceError as e:
            raise_service_error(e)
        if deleted is None:
            _not_found(item_type)
        return {
            "success": True,
            "message": f"{singular.capitalize()} deleted successfully",
            "deleted": DeletedItem(**deleted),
        }

    return router


problems_router = build_content_router(ItemType.PROBLEM, ProblemCreate, ProblemUpdate, ProblemOut)
notes_router = build_content_router(ItemType.NOTE, ArticleCreate, ArticleUpdate, ArticleOut)
interviews_router = build_content_router(ItemType.INTERVIEW, ArticleCreate, ArticleUpdate, ArticleOut)
