"""
Pydantic schemas for listing requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from marketplace_api.models.listing import (
    ListingCategory,
    ListingCondition,
    ListingStatus,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    MAX_PICTURES,
    PRICE_DECIMAL_PLACES,
)

MAX_PRICE = Decimal("9999999999.99")


def _strip_required(v):
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Field cannot be empty")
    return v.strip()


class ListingCreate(BaseModel):
    """
    Schema for creating a listing. Owner fields in the payload are ignored;
    the owner is always the authenticated caller.
    """

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(..., ge=0, le=MAX_PRICE, max_digits=12, decimal_places=PRICE_DECIMAL_PLACES)
    condition: ListingCondition
    category: ListingCategory
    status: ListingStatus = ListingStatus.AVAILABLE
    pictures: List[str] = Field(default_factory=list, max_length=MAX_PICTURES)

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        return _strip_required(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Desk",
                "description": "Wood desk",
                "price": 40,
                "condition": "used",
                "category": "Furniture",
            }
        }
    }


class ListingUpdate(BaseModel):
    """Partial update; only provided, non-null fields are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, max_digits=12, decimal_places=PRICE_DECIMAL_PLACES)
    condition: Optional[ListingCondition] = None
    category: Optional[ListingCategory] = None
    status: Optional[ListingStatus] = None
    pictures: Optional[List[str]] = Field(None, max_length=MAX_PICTURES)

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        return _strip_required(v)


class ListingResponse(BaseModel):
    """Listing as returned by the API."""

    id: str
    title: str
    description: str
    price: float
    condition: str
    category: str
    status: str
    pictures: List[str]
    owner_id: str
    created_at: datetime
    updated_at: datetime
