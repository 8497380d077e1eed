"""
Headless screen state for the marketplace client.

Each screen holds what its view would render: the loaded data, a loading
flag and an error message. Failed calls show the API's message verbatim,
or the screen's fallback when no envelope came back.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Dict, List, Optional
import logging

from marketplace_api.client.http import ApiClient, ApiError
from marketplace_api.client.services import AccountClient, AuthClient, FavoritesClient, ListingsClient

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Screen:
    """Loading/error bookkeeping shared by all screens."""

    fallback_error = "Something went wrong. Please try again."

    def __init__(self):
        self.loading = False
        self.error: Optional[str] = None
        self._last_fetch: Optional[Callable[[], Awaitable[Any]]] = None

    @staticmethod
    def error_message(exc: ApiError, fallback: str) -> str:
        if exc.status_code is not None and exc.message:
            return exc.message
        return fallback

    async def _fetch(self, fetch: Callable[[], Awaitable[Any]], fallback: str) -> bool:
        """Run a fetch, remembering it for retry(). Returns whether it succeeded."""
        self._last_fetch = lambda: self._fetch(fetch, fallback)
        self.loading = True
        try:
            await fetch()
            self.error = None
            return True
        except ApiError as e:
            logger.warning(f"{type(self).__name__} fetch failed: {e.message}")
            self.error = self.error_message(e, fallback)
            return False
        finally:
            self.loading = False

    async def retry(self) -> bool:
        """Repeat the last fetch. False if nothing has been fetched yet."""
        if self._last_fetch is None:
            return False
        return await self._last_fetch()


class MyProductDetailsScreen(Screen):
    """One of the user's own listings, with delete."""

    fallback_error = "Failed to fetch product details"
    delete_failed_error = "Failed to delete listing. Please try again."

    def __init__(self, api: ApiClient, product_id: str):
        super().__init__()
        self.listings = ListingsClient(api)
        self.product_id = product_id
        self.product: Optional[Dict[str, Any]] = None
        self.is_deleting = False
        self.deleted = False

    async def load(self) -> bool:
        async def fetch():
            self.product = await self.listings.get_by_id(self.product_id)
        return await self._fetch(fetch, self.fallback_error)

    async def delete(self) -> bool:
        self.is_deleting = True
        try:
            await self.listings.delete(self.product_id)
        except ApiError as e:
            logger.warning(f"Delete of listing {self.product_id} failed: {e.message}")
            self.error = self.error_message(e, self.delete_failed_error)
            return False
        finally:
            self.is_deleting = False

        self.deleted = True
        self.product = None
        return True


class EditListingScreen(Screen):
    """Edit form for a listing: load into fields, validate, submit a PATCH."""

    fallback_error = "Failed to fetch listing details"
    submit_failed_error = "Failed to update your listing. Please try again."

    REQUIRED_FIELDS_ERROR = "Please fill all required fields"
    TITLE_TOO_LONG_ERROR = f"Title must be {TITLE_MAX_LENGTH} characters or less"
    DESCRIPTION_TOO_LONG_ERROR = f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"
    INVALID_PRICE_ERROR = "Price must be a valid non-negative number"

    def __init__(self, api: ApiClient, product_id: str):
        super().__init__()
        self.listings = ListingsClient(api)
        self.product_id = product_id
        self.title = ""
        self.description = ""
        self.price = ""
        self.condition = ""
        self.category = ""
        self.status = ""
        self.pictures: List[str] = []
        self.is_submitting = False
        self.form_error: Optional[str] = None
        self.saved: Optional[Dict[str, Any]] = None

    async def load(self) -> bool:
        async def fetch():
            listing = await self.listings.get_by_id(self.product_id)
            self.title = listing["title"]
            self.description = listing["description"]
            self.price = str(listing["price"])
            self.condition = listing["condition"]
            self.category = listing["category"]
            self.status = listing["status"]
            self.pictures = list(listing.get("pictures") or [])
        return await self._fetch(fetch, self.fallback_error)

    def validate(self) -> Optional[str]:
        """First problem with the form, or None when it can be submitted."""
        if not all([self.title, self.description, self.price, self.condition, self.category]):
            return self.REQUIRED_FIELDS_ERROR
        if len(self.title) > TITLE_MAX_LENGTH:
            return self.TITLE_TOO_LONG_ERROR
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            return self.DESCRIPTION_TOO_LONG_ERROR
        try:
            price = Decimal(self.price.strip())
        except InvalidOperation:
            return self.INVALID_PRICE_ERROR
        if not price.is_finite() or price < 0:
            return self.INVALID_PRICE_ERROR
        return None

    def changes(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "description": self.description,
            "price": float(Decimal(self.price.strip())),
            "condition": self.condition,
            "category": self.category,
        }
        if self.status:
            data["status"] = self.status
        return data

    async def submit(self) -> bool:
        """Validate and send the update. Nothing is sent when validation fails."""
        self.form_error = self.validate()
        if self.form_error:
            return False

        self.is_submitting = True
        try:
            self.saved = await self.listings.update(self.product_id, self.changes())
        except ApiError as e:
            logger.warning(f"Update of listing {self.product_id} failed: {e.message}")
            self.form_error = self.error_message(e, self.submit_failed_error)
            return False
        finally:
            self.is_submitting = False
        return True


class FavoritesScreen(Screen):
    """The caller's favorites. Nothing is loaded while logged out."""

    fallback_error = "Failed to fetch favorites"

    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.favorites_client = FavoritesClient(api)
        self.favorites: List[Dict[str, Any]] = []

    @property
    def requires_login(self) -> bool:
        return not self.api.is_authenticated

    async def load(self) -> bool:
        if self.requires_login:
            self.favorites = []
            return False

        async def fetch():
            self.favorites = await self.favorites_client.get_all()
        return await self._fetch(fetch, self.fallback_error)

    async def remove(self, favorite_id: str) -> bool:
        try:
            await self.favorites_client.remove(favorite_id)
        except ApiError as e:
            logger.warning(f"Removing favorite {favorite_id} failed: {e.message}")
            return False
        self.favorites = [f for f in self.favorites if f["id"] != favorite_id]
        return True


class AccountScreen(Screen):
    """The caller's profile, with logout."""

    fallback_error = "Failed to fetch account"

    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.account_client = AccountClient(api)
        self.auth_client = AuthClient(api)
        self.user: Optional[Dict[str, Any]] = None

    async def load(self) -> bool:
        async def fetch():
            self.user = await self.account_client.get()
        return await self._fetch(fetch, self.fallback_error)

    def logout(self) -> None:
        self.auth_client.logout()
        self.user = None
