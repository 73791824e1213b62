"""Application-specific exceptions for consistent error handling."""

from typing import Any, NoReturn

from fastapi import HTTPException

from app.services.errors import ServiceError


class AppError(HTTPException):
    """HTTP error carrying a stable error code for the response envelope."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def raise_app_error(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | list[Any] | None = None,
) -> NoReturn:
    """Raise an application error with standardized format."""
    raise AppError(status_code=status_code, code=code, message=message, details=details)


def raise_service_error(exc: ServiceError) -> NoReturn:
    """Translate a service-layer error into its HTTP equivalent."""
    raise AppError(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.detail,
        details=exc.details,
    ) from exc
