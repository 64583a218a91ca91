from __future__ import annotations

import logging

from fastapi import HTTPException

from booking_service.application.exceptions import (
    AccessDeniedError,
    BookingError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: BookingError) -> HTTPException:
    """Map an engine error to the HTTP status the caller sees."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, AccessDeniedError):
        return HTTPException(status_code=403 if exc.authenticated else 401, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, StorageUnavailableError):
        # Details were logged where the store failed; callers get a generic message.
        return HTTPException(status_code=503, detail="Failed to process booking")
    logger.error("Unmapped booking error", extra={"error": type(exc).__name__})
    return HTTPException(status_code=500, detail="Failed to process booking")
