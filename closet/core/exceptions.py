"""
Error types raised by the Closet API and the handlers that render them.

Every error leaves the API as ``{"success": false, "error_code", "message", "details"?}``.
"""
import logging
import traceback
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from closet.config import settings

logger = logging.getLogger(__name__)


class ClosetException(Exception):
    """Base class for errors the API reports to clients on purpose."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ClosetException):
    """A closet item, outfit, calendar entry or post is missing or not the caller's."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any = None):
        label = f"{resource} with id '{resource_id}'" if resource_id is not None else resource
        super().__init__(f"{label} not found", details={"resource": resource, "id": resource_id})


class ValidationError(ClosetException):
    """Input that passed schema validation but makes no sense for this user."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)


class ConflictError(ClosetException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class DuplicateOutfitError(ConflictError):
    """The selection has exactly the items of another outfit of the same user."""

    def __init__(self, outfit_id: int):
        super().__init__(
            "An outfit with these exact items already exists. Please modify your selection.",
            details={"outfit_id": outfit_id},
        )


class AuthenticationError(ClosetException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationError(ClosetException):
    """Signed in, but acting on somebody else's post."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "AUTHORIZATION_ERROR"

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message)


class ExternalServiceError(ClosetException):
    """Cloudinary rejected or failed an upload."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, service: str, message: str):
        super().__init__(f"{service} service error: {message}", details={"service": service})


class ErrorResponse(BaseModel):
    success: bool = False
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None


# Error codes for plain HTTPExceptions (FastAPI's own 404s, the 413 image limit, ...)
HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    422: "VALIDATION_ERROR",
}


def _error_response(status_code: int, error_code: str, message: str,
                    details: Optional[Dict[str, Any]] = None, headers=None) -> JSONResponse:
    body = ErrorResponse(error_code=error_code, message=message, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True), headers=headers)


async def closet_exception_handler(request: Request, exc: ClosetException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details, headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        error_code = "SERVER_ERROR"
    else:
        error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return _error_response(exc.status_code, error_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the failure, and only show its details in development."""
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    if settings.is_development:
        return _error_response(500, "INTERNAL_ERROR", str(exc), {"traceback": traceback.format_exc()})
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
