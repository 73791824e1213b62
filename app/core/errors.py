"""Error handling and consistent error response format."""

import uuid
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


class ErrorResponse(BaseModel):
    """Error envelope shared by every endpoint.

    Format: {success: false, error, error_code, details, request_id}
    """

    success: bool = False
    error: str
    error_code: str
    details: Any | None = None
    request_id: str | None = None


def get_request_id(request: Request) -> str:
    """Get request ID from request state or generate new one."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return str(uuid.uuid4())


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=message,
            error_code=code,
            details=details,
            request_id=get_request_id(request),
        ).model_dump(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors (422)."""
    details: list[dict[str, Any]] = []
    for error in exc.errors():
        details.append(
            {
                "field": ".".join(str(loc) for loc in error.get("loc", [])),
                "issue": error.get("msg", "Validation error"),
                "type": error.get("type", "validation_error"),
            }
        )

    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Invalid request data",
        details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, including AppError and unknown routes."""
    from app.core.app_exceptions import AppError

    if isinstance(exc, AppError):
        return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)

    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _error_response(
            request,
            exc.status_code,
            "ROUTE_NOT_FOUND",
            "Route not found",
            {"path": request.url.path, "method": request.method},
        )

    details = None
    code = _DEFAULT_CODES.get(exc.status_code, "HTTP_ERROR")
    if isinstance(exc.detail, dict):
        if "code" in exc.detail:
            code = exc.detail["code"]
            message = exc.detail.get("message", "An error occurred")
            details = exc.detail.get("details")
        else:
            details = exc.detail.copy()
            message = details.pop("message", "An error occurred")
    elif isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = str(exc.detail)

    response = _error_response(request, exc.status_code, code, message, details)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle storage connectivity failures (pool timeout, dropped connection)."""
    logger.error(
        "Database unavailable",
        extra={"request_id": get_request_id(request), "error": str(exc)},
    )
    return _error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "STORAGE_ERROR",
        "Database unavailable",
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions (500)."""
    from app.core.config import settings

    logger.error(
        "Unhandled error",
        extra={"request_id": get_request_id(request), "error": str(exc)},
        exc_info=exc,
    )

    # In production, don't expose internal error details
    if settings.ENV == "prod":
        message = "Internal server error"
        details = None
    else:
        message = str(exc) or "Internal server error"
        details = {"type": type(exc).__name__}

    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        message,
        details,
    )


DATABASE_ERRORS = (OperationalError, PoolTimeoutError)
