"""
Favorite service: users save listings they are interested in.
"""

from typing import Any, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging

from marketplace_api.models.favorite import Favorite
from marketplace_api.models.listing import Listing
from marketplace_api.models.user import User
from marketplace_api.repositories.favorite import FavoriteRepository
from marketplace_api.repositories.listing import ListingRepository
from marketplace_api.services.ownership import OwnedResourceService
from marketplace_api.utils.exceptions import ConflictError, NotFoundError
from marketplace_api.utils.messages import ErrorMessages
from marketplace_api.utils.validators import parse_resource_id

logger = logging.getLogger(__name__)


class FavoriteService(OwnedResourceService[Favorite]):
    """
    Favorites are owned by the user who created them and are only
    visible to and removable by that user.
    """

    owner_field = "user_id"
    invalid_id_message = ErrorMessages.FAVORITE_INVALID_REQUEST
    not_found_message = ErrorMessages.FAVORITE_NOT_FOUND
    forbidden_message = ErrorMessages.FAVORITE_NOT_AUTHORIZED

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.repository = FavoriteRepository(db_session)
        self.listing_repo = ListingRepository(db_session)

    async def add_favorite(self, listing_id: Any, current_user: User) -> Tuple[Favorite, Listing]:
        """
        Save a listing for current_user.

        Raises:
            InvalidRequestError: If listing_id is malformed
            NotFoundError: If the listing does not exist
            ConflictError: If the listing is already saved
        """
        listing_uuid = parse_resource_id(listing_id, ErrorMessages.LISTING_INVALID_REQUEST)

        listing = await self.listing_repo.get_by_id(listing_uuid)
        if listing is None:
            raise NotFoundError(ErrorMessages.LISTING_NOT_FOUND)

        if await self.repository.get_by_user_and_listing(current_user.id, listing_uuid):
            raise ConflictError(ErrorMessages.FAVORITE_ALREADY_EXISTS)

        try:
            favorite = await self.repository.create({"user_id": current_user.id, "listing_id": listing_uuid})
        except IntegrityError:
            # Lost a race with a concurrent add of the same pair
            raise ConflictError(ErrorMessages.FAVORITE_ALREADY_EXISTS)

        logger.info(f"User {current_user.email} saved listing {listing_uuid}")
        return favorite, listing

    async def list_favorites(self, current_user: User) -> List[Tuple[Favorite, Listing]]:
        return await self.repository.get_user_favorites_with_listings(current_user.id)

    async def get_favorite(self, favorite_id: Any, current_user: User) -> Tuple[Favorite, Optional[Listing]]:
        """
        Raises:
            InvalidRequestError, NotFoundError, ForbiddenError
        """
        favorite = await self.get_owned(favorite_id, current_user.id)
        listing = await self.listing_repo.get_by_id(favorite.listing_id)
        return favorite, listing

    async def remove_favorite(self, favorite_id: Any, current_user: User) -> None:
        """
        Raises:
            InvalidRequestError, NotFoundError, ForbiddenError
        """
        favorite = await self.get_owned(favorite_id, current_user.id)
        await self.repository.delete(favorite)
        logger.info(f"User {current_user.email} removed favorite {favorite.id}")
