"""
User service for public profiles and self-account management.
"""

from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from marketplace_api.models.user import User
from marketplace_api.repositories.user import UserRepository
from marketplace_api.schemas.user import UserUpdate, PasswordResetRequest
from marketplace_api.services.ownership import OwnedResourceService, ensure_owner
from marketplace_api.utils.exceptions import ConflictError, NotFoundError, ValidationError
from marketplace_api.utils.messages import ErrorMessages

logger = logging.getLogger(__name__)


class UserService(OwnedResourceService[User]):
    """
    A user record is owned by the user it describes; account mutations
    apply only to the authenticated caller.
    """

    owner_field = "id"
    invalid_id_message = ErrorMessages.USER_INVALID_REQUEST
    not_found_message = ErrorMessages.USER_NOT_FOUND
    forbidden_message = ErrorMessages.PASSWORD_UNAUTHORIZED

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.repository = UserRepository(db_session)

    async def list_users(self) -> List[User]:
        return await self.repository.get_multi()

    async def get_user(self, user_id: Any) -> User:
        return await self.get_or_404(user_id)

    async def update_account(self, current_user: User, user_data: UserUpdate) -> User:
        """
        Raises:
            ValidationError: If no fields are provided
            ConflictError: If the new email belongs to another account
        """
        update_data = {k: v for k, v in user_data.model_dump(exclude_unset=True).items() if v is not None}
        if not update_data:
            raise ValidationError(ErrorMessages.NO_UPDATE_FIELDS)

        if "email" in update_data:
            available = await self.repository.check_email_availability(update_data["email"], current_user.id)
            if not available:
                raise ConflictError(ErrorMessages.USER_EMAIL_IN_USE)

        updated = await self.repository.update(current_user, update_data)
        logger.info(f"Account updated: {current_user.id} ({', '.join(update_data)})")
        return updated

    async def reset_password(self, current_user: User, reset_data: PasswordResetRequest) -> User:
        """
        Set a new password for the account identified by email, which must
        be the caller's own account.

        Raises:
            ValidationError: If password or email is missing or the password is too short
            NotFoundError: If no account has the email
            ForbiddenError: If the email belongs to another account
        """
        if not reset_data.password:
            raise ValidationError(ErrorMessages.PASSWORD_RESET_NO_PASSWORD)
        if not reset_data.email or not reset_data.email.strip():
            raise ValidationError(ErrorMessages.PASSWORD_RESET_NO_EMAIL)

        target = await self.repository.get_by_email(reset_data.email)
        if target is None:
            raise NotFoundError(ErrorMessages.PASSWORD_RESET_NO_USER)

        ensure_owner(target, current_user.id, self.forbidden_message, self.owner_field)

        try:
            updated = await self.repository.update_password(target, reset_data.password)
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"Password reset for user {target.id}")
        return updated

    async def delete_account(self, current_user: User) -> None:
        await self.repository.delete_user_with_resources(current_user)
        logger.info(f"Account deleted: {current_user.id}")
