"""
Service layer for business logic implementation.
Contains services for authentication, listings, favorites, users, uploads and error handling.
"""

from .auth import AuthService
from .listing import ListingService
from .favorite import FavoriteService
from .user import UserService
from .upload import UploadService
from .ownership import OwnedResourceService, ensure_owner, is_owner
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "ListingService",
    "FavoriteService",
    "UserService",
    "UploadService",
    "OwnedResourceService",
    "ensure_owner",
    "is_owner",
    "ErrorHandlerService"
]
