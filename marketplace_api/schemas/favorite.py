"""
Pydantic schemas for favorites.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from marketplace_api.schemas.listing import ListingResponse


class FavoriteCreate(BaseModel):
    listing_id: str = Field(..., description="ID of the listing to save")


class FavoriteResponse(BaseModel):
    id: str
    user_id: str
    listing_id: str
    created_at: datetime
    listing: Optional[ListingResponse] = None
