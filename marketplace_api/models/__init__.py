"""
Database models for the Marketplace API.
"""

from marketplace_api.models.user import User
from marketplace_api.models.listing import Listing, ListingCategory, ListingCondition, ListingStatus
from marketplace_api.models.favorite import Favorite

__all__ = [
    "User",
    "Listing",
    "ListingCategory",
    "ListingCondition",
    "ListingStatus",
    "Favorite",
]
