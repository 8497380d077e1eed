"""
Repository layer for data access operations.
"""

from marketplace_api.repositories.base import BaseRepository
from marketplace_api.repositories.user import UserRepository
from marketplace_api.repositories.listing import ListingRepository
from marketplace_api.repositories.favorite import FavoriteRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ListingRepository",
    "FavoriteRepository",
]
