"""
Listing repository for marketplace items.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from marketplace_api.repositories.base import BaseRepository
from marketplace_api.models.listing import Listing
from marketplace_api.models.favorite import Favorite
from typing import List, Dict, Any, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class ListingRepository(BaseRepository[Listing]):
    """Repository for listings and their favorite links."""

    def __init__(self, db: AsyncSession):
        super().__init__(Listing, db)

    async def create_listing(self, listing_data: Dict[str, Any]) -> Listing:
        """
        Create a new listing with validation.

        Raises:
            ValueError: If the price is negative or has more than two decimal places
        """
        Listing.validate_price(listing_data.get("price"))

        listing = await self.create(listing_data)
        logger.info(f"Created listing: {listing.title} (ID: {listing.id})")
        return listing

    async def search_listings(self, filters: Optional[Dict[str, Any]] = None) -> List[Listing]:
        """All listings matching the given equality filters, newest first."""
        return await self.get_multi(filters=filters)

    async def get_listings_by_owner(self, owner_id: uuid.UUID) -> List[Listing]:
        """All listings owned by a user, newest first."""
        return await self.get_multi(filters={"owner_id": owner_id})

    async def delete_listing_with_favorites(self, listing: Listing) -> int:
        """
        Delete a listing and every favorite referencing it in one transaction.

        Returns:
            Number of favorites removed
        """
        try:
            result = await self.db.execute(
                delete(Favorite).where(Favorite.listing_id == listing.id)
            )
            await self.db.delete(listing)
            await self.db.commit()

            removed = result.rowcount or 0
            logger.info(f"Deleted listing {listing.id} and {removed} favorites")
            return removed
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete listing {listing.id}: {e}")
            raise
