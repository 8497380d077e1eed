"""
User repository for account management and authentication lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from marketplace_api.repositories.base import BaseRepository
from marketplace_api.models.user import User
from marketplace_api.models.listing import Listing
from marketplace_api.models.favorite import Favorite
from marketplace_api.utils.auth import hash_password
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user, hashing the plain password.

        Args:
            user_data: first_name, last_name, email and plain 'password'

        Returns:
            Created user instance
        """
        data = dict(user_data)
        data["email"] = User.validate_email_format(data["email"])
        data["hashed_password"] = hash_password(data.pop("password"))

        user = await self.create(data)
        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (case-insensitive) email address."""
        return await self.get_by_field("email", email.strip().lower())

    async def update_password(self, user: User, new_password: str) -> User:
        """
        Hash and store a new password.

        Raises:
            ValueError: If the password is too short; the user is left unchanged
        """
        user.set_password(new_password)
        return await self.update(user, {})

    async def check_email_availability(self, email: str, exclude_user_id: Optional[uuid.UUID] = None) -> bool:
        """
        Check whether an email address is free to use.

        Args:
            email: Email address to check
            exclude_user_id: User allowed to already hold the address

        Returns:
            True if no other user has the address
        """
        query = select(User.id).where(User.email == email.strip().lower())
        if exclude_user_id:
            query = query.where(User.id != exclude_user_id)

        result = await self.db.execute(query)
        return result.first() is None

    async def delete_user_with_resources(self, user: User) -> None:
        """
        Delete a user together with their listings, the favorites pointing
        at those listings and the user's own favorites, in one transaction.
        """
        try:
            owned_listing_ids = select(Listing.id).where(Listing.owner_id == user.id)

            await self.db.execute(
                delete(Favorite).where(
                    (Favorite.user_id == user.id) | Favorite.listing_id.in_(owned_listing_ids)
                )
            )
            await self.db.execute(delete(Listing).where(Listing.owner_id == user.id))
            await self.db.delete(user)
            await self.db.commit()
            logger.info(f"Deleted user {user.id} with listings and favorites")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete user {user.id}: {e}")
            raise
