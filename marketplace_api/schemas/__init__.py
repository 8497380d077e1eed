"""
Pydantic schemas for request/response validation and serialization.
"""

from marketplace_api.schemas.envelope import ApiResponse, success_response, error_body
from marketplace_api.schemas.auth import RegisterRequest, LoginRequest, AuthResponse
from marketplace_api.schemas.user import UserResponse, UserUpdate, PasswordResetRequest
from marketplace_api.schemas.listing import ListingCreate, ListingUpdate, ListingResponse
from marketplace_api.schemas.favorite import FavoriteCreate, FavoriteResponse
from marketplace_api.schemas.upload import UploadResponse

__all__ = [
    "ApiResponse",
    "success_response",
    "error_body",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "UserResponse",
    "UserUpdate",
    "PasswordResetRequest",
    "ListingCreate",
    "ListingUpdate",
    "ListingResponse",
    "FavoriteCreate",
    "FavoriteResponse",
    "UploadResponse",
]
