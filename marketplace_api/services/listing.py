"""
Listing service implementing owned-resource CRUD for marketplace listings.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from marketplace_api.models.listing import Listing
from marketplace_api.models.user import User
from marketplace_api.repositories.listing import ListingRepository
from marketplace_api.schemas.listing import ListingCreate, ListingUpdate
from marketplace_api.services.ownership import OwnedResourceService
from marketplace_api.utils.exceptions import ValidationError
from marketplace_api.utils.messages import ErrorMessages

logger = logging.getLogger(__name__)


class ListingService(OwnedResourceService[Listing]):
    """
    Create/list/get/update/delete for listings. Mutations are restricted
    to the listing's owner.
    """

    invalid_id_message = ErrorMessages.LISTING_INVALID_REQUEST
    not_found_message = ErrorMessages.LISTING_NOT_FOUND
    forbidden_message = ErrorMessages.LISTING_NOT_AUTHORIZED

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.repository = ListingRepository(db_session)

    async def create_listing(self, listing_data: ListingCreate, current_user: User) -> Listing:
        """
        Create a listing owned by current_user.

        Raises:
            ValidationError: If the price fails model validation
        """
        create_data = listing_data.model_dump()
        create_data["owner_id"] = current_user.id

        try:
            listing = await self.repository.create_listing(create_data)
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"Listing created by user {current_user.email}: {listing.title} (ID: {listing.id})")
        return listing

    async def list_listings(
        self,
        category: Optional[str] = None,
        condition: Optional[str] = None,
        status: Optional[str] = None,
        owner_id: Optional[str] = None
    ) -> List[Listing]:
        """All listings, optionally filtered. An empty result is not an error."""
        filters: Dict[str, Any] = {
            "category": category,
            "condition": condition,
            "status": status,
            "owner_id": self.parse_id(owner_id) if owner_id else None,
        }
        return await self.repository.search_listings(filters)

    async def get_listing(self, listing_id: Any) -> Listing:
        return await self.get_or_404(listing_id)

    async def get_user_listings(self, user_id: uuid.UUID) -> List[Listing]:
        return await self.repository.get_listings_by_owner(user_id)

    async def update_listing(self, listing_id: Any, listing_data: ListingUpdate, current_user: User) -> Listing:
        """
        Merge provided fields into a listing owned by current_user.

        Raises:
            InvalidRequestError, NotFoundError, ForbiddenError
            ValidationError: If no fields are provided
        """
        listing = await self.get_owned(listing_id, current_user.id)
        return await self.update_owned(listing, listing_data, current_user)

    async def update_owned(self, listing: Listing, listing_data: ListingUpdate, current_user: User) -> Listing:
        """
        Merge provided fields into a listing already checked with get_owned.

        Raises:
            ValidationError: If no fields are provided
        """
        update_data = {k: v for k, v in listing_data.model_dump(exclude_unset=True).items() if v is not None}
        if not update_data:
            raise ValidationError(ErrorMessages.NO_UPDATE_FIELDS)

        updated = await self.repository.update(listing, update_data)
        logger.info(f"Listing updated by user {current_user.email}: {listing.id} ({', '.join(update_data)})")
        return updated

    async def delete_listing(self, listing_id: Any, current_user: User) -> None:
        """
        Delete a listing owned by current_user together with its favorites.

        Raises:
            InvalidRequestError, NotFoundError, ForbiddenError
        """
        listing = await self.get_owned(listing_id, current_user.id)
        removed = await self.repository.delete_listing_with_favorites(listing)
        logger.info(f"Listing deleted by user {current_user.email}: {listing.id} (with {removed} favorites)")
