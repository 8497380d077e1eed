"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


class UserResponse(BaseModel):
    """Public user profile."""

    id: str
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """Schema for updating the caller's own account."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = Field(None, description="New email address")

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v):
        """Strip names and reject blanks."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v else v


class PasswordResetRequest(BaseModel):
    """
    Password reset for the authenticated account.
    Fields are optional here so missing values get the dedicated messages.
    """

    email: Optional[str] = None
    password: Optional[str] = None
