from .base import (
    AppError,
    ConflictError,
    DomainError,
    ForbiddenError,
    ImageTooLargeError,
    InfrastructureError,
    NotFoundError,
    UnauthorizedError,
    UnsupportedImageTypeError,
    UpstreamFailureError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "ImageTooLargeError",
    "InfrastructureError",
    "NotFoundError",
    "UnauthorizedError",
    "UnsupportedImageTypeError",
    "UpstreamFailureError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
