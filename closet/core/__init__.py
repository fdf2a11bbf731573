"""
Error types and handlers shared by the Closet routers.
"""
from .exceptions import (
    ClosetException,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateOutfitError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    ErrorResponse,
    closet_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)

__all__ = [
    "ClosetException",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateOutfitError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "ErrorResponse",
    "closet_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
]
