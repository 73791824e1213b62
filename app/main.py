"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.common.request_id import RequestIDMiddleware
from app.core.config import settings
from app.core.errors import (
    DATABASE_ERRORS,
    database_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.logging import get_logger, setup_logging
from app.core.seed_demo import seed_demo_data
from app.db.base import Base, import_models
from app.db.engine import engine

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    import_models()
    # Create tables (in production, use migrations)
    if settings.ENV == "dev":
        Base.metadata.create_all(bind=engine)
    seed_demo_data()
    logger.info(f"{settings.PROJECT_NAME} started", extra={"env": settings.ENV})
    yield
    engine.dispose()
    logger.info("Database pool closed")


def _endpoint_map(prefix: str) -> dict:
    content = {
        name: {
            "getAll": f"GET {prefix}/{name}",
            "getOne": f"GET {prefix}/{name}/:id",
            "create": f"POST {prefix}/{name}",
            "update": f"PUT {prefix}/{name}/:id",
            "delete": f"DELETE {prefix}/{name}/:id",
        }
        for name in ("problems", "notes", "interviews")
    }
    return {
        "health": f"GET {prefix}/health",
        "auth": {"login": f"POST {prefix}/auth/login", "me": f"GET {prefix}/auth/me"},
        **content,
        "bookmarks": {
            "getAll": f"GET {prefix}/bookmarks",
            "toggle": f"POST {prefix}/bookmarks",
            "check": f"GET {prefix}/bookmarks/check",
            "remove": f"DELETE {prefix}/bookmarks/:itemRef?type=",
        },
        "admin": {"stats": f"GET {prefix}/admin/stats"},
    }


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Problems, notes, interview guides and bookmarks for DSA interview prep",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url="/redoc" if settings.ENV != "prod" else None,
        lifespan=lifespan,
    )

    # Add middleware (order matters - first added is innermost)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    for exc_class in DATABASE_ERRORS:
        app.add_exception_handler(exc_class, database_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "status": "OK",
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs_url": "/docs" if settings.ENV != "prod" else None,
            "endpoints": _endpoint_map(settings.API_PREFIX),
        }

    return app


app = create_app()
