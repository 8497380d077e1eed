"""
Owned-resource CRUD support.
One ownership predicate and one lookup path shared by every resource service.
"""

from typing import Any, Generic, TypeVar
import uuid
import logging

from marketplace_api.database import Base
from marketplace_api.repositories.base import BaseRepository
from marketplace_api.utils.exceptions import ForbiddenError, NotFoundError
from marketplace_api.utils.validators import parse_resource_id

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


def is_owner(resource: Any, user_id: uuid.UUID, owner_field: str = "owner_id") -> bool:
    """Whether user_id is recorded as the owner of resource."""
    return getattr(resource, owner_field) == user_id


def ensure_owner(resource: Any, user_id: uuid.UUID, detail: str, owner_field: str = "owner_id") -> None:
    """
    Raises:
        ForbiddenError: If user_id does not own resource
    """
    if not is_owner(resource, user_id, owner_field):
        logger.warning(
            f"User {user_id} denied access to {type(resource).__name__} {getattr(resource, 'id', None)}"
        )
        raise ForbiddenError(detail)


class OwnedResourceService(Generic[ModelType]):
    """
    Base for services whose records carry an owner.

    Subclasses set the repository and the messages for malformed ids,
    missing records and ownership violations.
    """

    owner_field: str = "owner_id"
    invalid_id_message: str = "Invalid request"
    not_found_message: str = "Resource not found"
    forbidden_message: str = "Access forbidden"

    repository: BaseRepository[ModelType]

    def parse_id(self, resource_id: Any) -> uuid.UUID:
        return parse_resource_id(resource_id, self.invalid_id_message)

    async def get_or_404(self, resource_id: Any) -> ModelType:
        """
        Raises:
            InvalidRequestError: If the id is malformed
            NotFoundError: If no record has this id
        """
        obj = await self.repository.get_by_id(self.parse_id(resource_id))
        if obj is None:
            raise NotFoundError(self.not_found_message)
        return obj

    async def get_owned(self, resource_id: Any, user_id: uuid.UUID) -> ModelType:
        """
        Load a record and check that user_id owns it. Applied before every mutation.

        Raises:
            InvalidRequestError, NotFoundError, ForbiddenError
        """
        obj = await self.get_or_404(resource_id)
        ensure_owner(obj, user_id, self.forbidden_message, self.owner_field)
        return obj
