"""
API route handlers for the Marketplace API.
"""

from .auth import router as auth_router
from .account import router as account_router
from .users import router as users_router
from .listings import router as listings_router
from .favorites import router as favorites_router
from .upload import router as upload_router

__all__ = [
    "auth_router",
    "account_router",
    "users_router",
    "listings_router",
    "favorites_router",
    "upload_router",
]
