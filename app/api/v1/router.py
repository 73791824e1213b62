"""API v1 router - includes all endpoints."""

from fastapi import APIRouter

from app.api.v1.endpoints import admin, auth, bookmarks, content, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(content.problems_router, prefix="/problems", tags=["Problems"])
api_router.include_router(content.notes_router, prefix="/notes", tags=["Notes"])
api_router.include_router(content.interviews_router, prefix="/interviews", tags=["Interviews"])
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["Bookmarks"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
