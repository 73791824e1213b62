"""Admin endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.dependencies import AdminUser
from app.db.session import get_db
from app.models.content import ItemType
from app.models.user import User
from app.services.bookmarks import count_bookmarks
from app.services.content import count_items

router = APIRouter()


class Stats(BaseModel):
    problems: int
    notes: int
    interviews: int
    users: int
    bookmarks: int


class StatsResponse(BaseModel):
    success: bool = True
    stats: Stats


@router.get("/stats", response_model=StatsResponse, summary="Row counts")
def stats(current_user: AdminUser, db: Session = Depends(get_db)) -> StatsResponse:
    return StatsResponse(
        stats=Stats(
            problems=count_items(db, ItemType.PROBLEM),
            notes=count_items(db, ItemType.NOTE),
            interviews=count_items(db, ItemType.INTERVIEW),
            users=db.execute(select(func.count()).select_from(User)).scalar_one(),
            bookmarks=count_bookmarks(db),
        )
    )
