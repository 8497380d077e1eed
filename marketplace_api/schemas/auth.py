"""
Pydantic schemas for registration, login and issued credentials.
"""

from pydantic import BaseModel, Field
from typing import Optional
from marketplace_api.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """
    Registration payload. Presence of each field is checked by the
    service so a missing field yields the registration error message.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Login credentials."""

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class AuthResponse(BaseModel):
    """Issued bearer credential with the authenticated user."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
