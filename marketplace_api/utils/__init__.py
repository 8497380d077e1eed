"""
Utility modules for the Marketplace API.
"""

from .auth import (
    create_access_token,
    verify_token,
    hash_password,
    verify_password,
    TokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    InvalidRequestError,
    NotFoundError,
    RouteNotFoundError,
    UnauthorizedError,
    InvalidTokenError,
    InvalidCredentialsError,
    ForbiddenError,
    ConflictError,
    InternalServerError,
    MissingSecretError
)

from .messages import ErrorMessages, SuccessMessages

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "hash_password",
    "verify_password",
    "TokenPayload",

    # Exceptions
    "APIException",
    "ValidationError",
    "InvalidRequestError",
    "NotFoundError",
    "RouteNotFoundError",
    "UnauthorizedError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "ConflictError",
    "InternalServerError",
    "MissingSecretError",

    # Messages
    "ErrorMessages",
    "SuccessMessages",
]
