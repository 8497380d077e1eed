"""
Client service layer and headless screens for the Marketplace API.
"""

from .http import ApiClient, ApiError
from .services import AuthClient, AccountClient, ListingsClient, FavoritesClient, UploadClient
from .screens import (
    Screen,
    MyProductDetailsScreen,
    EditListingScreen,
    FavoritesScreen,
    AccountScreen,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthClient",
    "AccountClient",
    "ListingsClient",
    "FavoritesClient",
    "UploadClient",
    "Screen",
    "MyProductDetailsScreen",
    "EditListingScreen",
    "FavoritesScreen",
    "AccountScreen",
]
