"""
FastAPI dependency injection utilities for settings, services and authentication.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.config import Settings
from marketplace_api.database import get_db
from marketplace_api.models.user import User
from marketplace_api.services.auth import AuthService
from marketplace_api.services.favorite import FavoriteService
from marketplace_api.services.listing import ListingService
from marketplace_api.services.upload import UploadService
from marketplace_api.services.user import UserService
from marketplace_api.utils.exceptions import UnauthorizedError


# HTTP Bearer token security scheme; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings instance the application was created with."""
    return request.app.state.settings


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> AuthService:
    return AuthService(db, settings)


async def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    return ListingService(db)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_upload_service(settings: Settings = Depends(get_app_settings)) -> UploadService:
    return UploadService(settings)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the bearer token.
    The decoded identity is attached to request.state.identity.

    Raises:
        UnauthorizedError: If no token is provided
        MissingSecretError: If the server has no signing secret
        InvalidTokenError: If the token is invalid or its user no longer exists
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError()

    identity, user = await auth_service.get_current_user(credentials.credentials)
    request.state.identity = identity
    return user
