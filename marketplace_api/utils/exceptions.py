"""
Custom exception classes for the Marketplace API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status

from marketplace_api.utils.messages import ErrorMessages


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        errors: Optional[Any] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.errors = errors


class ValidationError(APIException):
    """Missing or malformed input."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR",
            errors=field_errors or None
        )
        self.field_errors = field_errors or []


class InvalidRequestError(APIException):
    """Malformed resource identifier."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_REQUEST"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class RouteNotFoundError(NotFoundError):
    """No route matches the request path."""

    def __init__(self, detail: str = ErrorMessages.ROUTE_DOES_NOT_EXIST):
        super().__init__(detail)
        self.error_code = "ROUTE_NOT_FOUND"


class UnauthorizedError(APIException):
    """Missing or invalid credential."""

    def __init__(self, detail: str = ErrorMessages.AUTH_NO_TOKEN):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidTokenError(UnauthorizedError):
    """Bearer credential failed verification."""

    def __init__(self, detail: str = ErrorMessages.AUTH_INVALID_TOKEN):
        super().__init__(detail)


class InvalidCredentialsError(UnauthorizedError):
    """Login email/password mismatch."""

    def __init__(self, detail: str):
        super().__init__(detail)


class ForbiddenError(APIException):
    """Ownership violation."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


class InternalServerError(APIException):
    """Unexpected failure, including store failures and missing server configuration."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INTERNAL_SERVER_ERROR"
        )


class MissingSecretError(InternalServerError):
    """The token signing secret is not configured."""

    def __init__(self):
        super().__init__(ErrorMessages.AUTH_INVALID_JWT_SECRET)
