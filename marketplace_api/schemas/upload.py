"""
Pydantic schemas for image upload responses.
"""

from pydantic import BaseModel, Field
from typing import Optional


class UploadResponse(BaseModel):
    """Stored image details."""

    filename: str = Field(..., description="Generated storage filename")
    original_name: str = Field(..., description="Filename sent by the client")
    mime_type: str
    size: int = Field(..., description="File size in bytes")
    width: Optional[int] = None
    height: Optional[int] = None
    url: str = Field(..., description="Path the image is served from; usable as a listing picture")
    base64_preview: str = Field(..., description="First 100 characters of the base64 encoding")
