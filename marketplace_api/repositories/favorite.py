"""
Favorite repository for user/listing links.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from marketplace_api.repositories.base import BaseRepository
from marketplace_api.models.favorite import Favorite
from marketplace_api.models.listing import Listing
from typing import List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for favorites."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_by_user_and_listing(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> Optional[Favorite]:
        query = select(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.listing_id == listing_id
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_user_favorites_with_listings(self, user_id: uuid.UUID) -> List[Tuple[Favorite, Listing]]:
        """
        A user's favorites joined with the favorited listings, newest first.
        """
        try:
            query = (
                select(Favorite, Listing)
                .join(Listing, Listing.id == Favorite.listing_id)
                .where(Favorite.user_id == user_id)
                .order_by(Favorite.created_at.desc())
            )
            result = await self.db.execute(query)
            rows = [(favorite, listing) for favorite, listing in result.all()]

            logger.debug(f"Retrieved {len(rows)} favorites for user {user_id}")
            return rows
        except Exception as e:
            logger.error(f"Failed to get favorites for user {user_id}: {e}")
            raise
