"""Domain errors raised by the content and bookmark services."""

from typing import Any


class ServiceError(Exception):
    """Base class for service-layer failures.

    Each subclass carries a stable error code and the HTTP status the API layer
    should answer with, so endpoints can translate without a lookup table.
    """

    code = "SERVICE_ERROR"
    status_code = 500

    def __init__(self, detail: str, details: dict[str, Any] | None = None):
        self.detail = detail
        self.details = details
        super().__init__(detail)


class ValidationError(ServiceError):
    """Malformed input detected before any storage access."""

    code = "VALIDATION_ERROR"
    status_code = 400


class ItemNotFoundError(ServiceError):
    """An item reference could not be mapped to a canonical id."""

    code = "ITEM_NOT_FOUND"
    status_code = 404

    def __init__(self, reference: str, item_type: str):
        super().__init__(
            f"{item_type} with identifier '{reference}' not found",
            details={"reference": reference, "item_type": item_type},
        )
        self.reference = reference
        self.item_type = item_type


class BookmarkNotFoundError(ServiceError):
    code = "BOOKMARK_NOT_FOUND"
    status_code = 404


class ResolutionFailedError(ServiceError):
    """The identity lookup itself failed (storage unavailable)."""

    code = "RESOLUTION_FAILED"
    status_code = 503


class StorageError(ServiceError):
    code = "STORAGE_ERROR"
    status_code = 503
