"""
Tests for the client service layer and headless screens.
The client talks to the application in-process through an ASGI transport.
"""

import pytest
import io
import httpx
from fastapi import FastAPI
from PIL import Image

from marketplace_api.client import (
    AccountClient,
    AccountScreen,
    ApiClient,
    ApiError,
    AuthClient,
    EditListingScreen,
    FavoritesClient,
    FavoritesScreen,
    ListingsClient,
    MyProductDetailsScreen,
    UploadClient,
)
from marketplace_api.utils.messages import ErrorMessages
from tests.conftest import API, TEST_PASSWORD


DESK = {
    "title": "Desk",
    "description": "Wood desk",
    "price": 40,
    "condition": "used",
    "category": "Furniture",
}


@pytest.fixture
async def api(app: FastAPI):
    async with ApiClient(base_url=f"http://test{API}", transport=httpx.ASGITransport(app=app)) as client:
        yield client


@pytest.fixture
async def logged_in(api: ApiClient) -> ApiClient:
    await AuthClient(api).register("Alice", "Smith", "alice@example.com", TEST_PASSWORD)
    return api


@pytest.fixture
async def listing(logged_in: ApiClient) -> dict:
    return await ListingsClient(logged_in).create(DESK)


def unreachable_client() -> ApiClient:
    """Client whose every request fails before a response arrives."""
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    return ApiClient(base_url="http://test/api/v1", transport=httpx.MockTransport(handler))


class TestApiClient:
    """Test envelope unwrapping and error reporting."""

    @pytest.mark.asyncio
    async def test_register_stores_token(self, api: ApiClient):
        assert not api.is_authenticated

        data = await AuthClient(api).register("Alice", "Smith", "alice@example.com", TEST_PASSWORD)

        assert api.is_authenticated
        assert api.token == data["access_token"]
        assert data["user"]["email"] == "alice@example.com"

    @pytest.mark.asyncio
    async def test_login_and_logout(self, logged_in: ApiClient):
        auth = AuthClient(logged_in)
        auth.logout()
        assert not logged_in.is_authenticated

        await auth.login("alice@example.com", TEST_PASSWORD)

        assert logged_in.is_authenticated
        assert (await AccountClient(logged_in).get())["email"] == "alice@example.com"

    @pytest.mark.asyncio
    async def test_error_carries_envelope_message(self, api: ApiClient):
        with pytest.raises(ApiError) as exc_info:
            await AuthClient(api).login("ghost@example.com", TEST_PASSWORD)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == ErrorMessages.AUTH_NO_EMAIL_MATCH
        assert not api.is_authenticated

    @pytest.mark.asyncio
    async def test_error_carries_field_details(self, logged_in: ApiClient):
        with pytest.raises(ApiError) as exc_info:
            await ListingsClient(logged_in).create({**DESK, "price": -5})

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors[0]["field"] == "price"

    @pytest.mark.asyncio
    async def test_network_failure(self):
        async with unreachable_client() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.get("/listings")

        assert exc_info.value.status_code is None
        assert "Request failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_envelope_response(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))

        async with ApiClient(base_url="http://test/api/v1", transport=transport) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.get("/listings")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "HTTP 502"


class TestResourceClients:
    """Test the per-resource service wrappers."""

    @pytest.mark.asyncio
    async def test_listings(self, logged_in: ApiClient, listing: dict):
        listings = ListingsClient(logged_in)

        assert [l["id"] for l in await listings.get_all()] == [listing["id"]]
        assert await listings.get_all(category="Electronics") == []

        updated = await listings.update(listing["id"], {"price": 30})
        assert updated["price"] == 30

        await listings.delete(listing["id"])
        assert await listings.get_all() == []

    @pytest.mark.asyncio
    async def test_account(self, logged_in: ApiClient, listing: dict):
        account = AccountClient(logged_in)

        assert [l["id"] for l in await account.my_listings()] == [listing["id"]]
        assert (await account.update(last_name="Jones"))["last_name"] == "Jones"

        await account.reset_password("alice@example.com", "anotherpassword")
        await AuthClient(logged_in).login("alice@example.com", "anotherpassword")

        await account.delete()
        with pytest.raises(ApiError) as exc_info:
            await account.get()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_favorites(self, logged_in: ApiClient, listing: dict):
        favorites = FavoritesClient(logged_in)

        favorite = await favorites.add(listing["id"])
        assert favorite["listing"]["title"] == "Desk"
        assert len(await favorites.get_all()) == 1

        with pytest.raises(ApiError) as exc_info:
            await favorites.add(listing["id"])
        assert exc_info.value.status_code == 409

        await favorites.remove(favorite["id"])
        assert await favorites.get_all() == []

    @pytest.mark.asyncio
    async def test_upload(self, logged_in: ApiClient):
        buffer = io.BytesIO()
        Image.new("RGB", (8, 8), color="blue").save(buffer, format="PNG")

        uploaded = await UploadClient(logged_in).upload("photo.png", buffer.getvalue(), "image/png")

        assert uploaded["url"].startswith("/uploads/")
        assert (uploaded["width"], uploaded["height"]) == (8, 8)


class TestMyProductDetailsScreen:
    """Test the owner's product details screen."""

    @pytest.mark.asyncio
    async def test_load_and_delete(self, logged_in: ApiClient, listing: dict):
        screen = MyProductDetailsScreen(logged_in, listing["id"])

        assert await screen.load()
        assert screen.product["title"] == "Desk"
        assert screen.loading is False
        assert screen.error is None

        assert await screen.delete()
        assert screen.deleted
        assert screen.product is None
        assert await ListingsClient(logged_in).get_all() == []

    @pytest.mark.asyncio
    async def test_load_missing_shows_api_message(self, logged_in: ApiClient):
        screen = MyProductDetailsScreen(logged_in, "12345")

        assert not await screen.load()

        assert screen.error == ErrorMessages.LISTING_INVALID_REQUEST
        assert screen.product is None

    @pytest.mark.asyncio
    async def test_load_unreachable_shows_fallback(self):
        async with unreachable_client() as client:
            screen = MyProductDetailsScreen(client, "abc")
            assert not await screen.load()

        assert screen.error == "Failed to fetch product details"

    @pytest.mark.asyncio
    async def test_delete_failure(self):
        async with unreachable_client() as client:
            screen = MyProductDetailsScreen(client, "abc")
            assert not await screen.delete()

        assert screen.error == "Failed to delete listing. Please try again."
        assert not screen.deleted
        assert screen.is_deleting is False

    @pytest.mark.asyncio
    async def test_retry_after_login(self, api: ApiClient, logged_in: ApiClient, listing: dict):
        token = api.token
        api.set_token(None)
        screen = MyProductDetailsScreen(api, listing["id"])

        assert not await screen.load()
        assert screen.error == ErrorMessages.AUTH_NO_TOKEN

        api.set_token(token)
        assert await screen.retry()
        assert screen.error is None
        assert screen.product["id"] == listing["id"]

    @pytest.mark.asyncio
    async def test_retry_before_fetch(self, api: ApiClient):
        assert await MyProductDetailsScreen(api, "abc").retry() is False


class TestEditListingScreen:
    """Test the edit listing form."""

    @pytest.mark.asyncio
    async def test_load_populates_form(self, logged_in: ApiClient, listing: dict):
        screen = EditListingScreen(logged_in, listing["id"])

        assert await screen.load()

        assert screen.title == "Desk"
        assert screen.description == "Wood desk"
        assert float(screen.price) == 40
        assert screen.condition == "used"
        assert screen.category == "Furniture"
        assert screen.status == "available"

    @pytest.mark.asyncio
    async def test_submit(self, logged_in: ApiClient, listing: dict):
        screen = EditListingScreen(logged_in, listing["id"])
        await screen.load()
        screen.price = "35.50"
        screen.status = "unavailable"

        assert await screen.submit()

        assert screen.form_error is None
        assert screen.saved["price"] == 35.5
        assert screen.saved["status"] == "unavailable"
        assert screen.is_submitting is False

    @pytest.mark.parametrize("field,value,message", [
        ("title", "", EditListingScreen.REQUIRED_FIELDS_ERROR),
        ("price", "", EditListingScreen.REQUIRED_FIELDS_ERROR),
        ("title", "x" * 101, EditListingScreen.TITLE_TOO_LONG_ERROR),
        ("description", "x" * 501, EditListingScreen.DESCRIPTION_TOO_LONG_ERROR),
        ("price", "abc", EditListingScreen.INVALID_PRICE_ERROR),
        ("price", "-1", EditListingScreen.INVALID_PRICE_ERROR),
        ("price", "NaN", EditListingScreen.INVALID_PRICE_ERROR),
    ])
    def test_validate(self, field, value, message):
        screen = EditListingScreen(ApiClient(), "abc")
        screen.title = "Desk"
        screen.description = "Wood desk"
        screen.price = "40"
        screen.condition = "used"
        screen.category = "Furniture"
        setattr(screen, field, value)

        assert screen.validate() == message

    @pytest.mark.asyncio
    async def test_invalid_form_sends_nothing(self):
        sent = []

        def handler(request: httpx.Request):
            sent.append(request)
            return httpx.Response(200, json={"success": True, "message": "ok", "data": {}, "errors": None})

        async with ApiClient(base_url="http://test/api/v1", transport=httpx.MockTransport(handler)) as client:
            screen = EditListingScreen(client, "abc")
            screen.title = "Desk"

            assert not await screen.submit()

        assert screen.form_error == EditListingScreen.REQUIRED_FIELDS_ERROR
        assert sent == []

    @pytest.mark.asyncio
    async def test_submit_rejected_by_api(self, api: ApiClient, logged_in: ApiClient, listing: dict):
        await AuthClient(api).register("Bob", "Brown", "bob@example.com", TEST_PASSWORD)
        screen = EditListingScreen(api, listing["id"])
        await screen.load()
        screen.title = "Mine now"

        assert not await screen.submit()

        assert screen.form_error == ErrorMessages.LISTING_NOT_AUTHORIZED

    @pytest.mark.asyncio
    async def test_submit_unreachable(self):
        async with unreachable_client() as client:
            screen = EditListingScreen(client, "abc")
            screen.title, screen.description, screen.price = "Desk", "Wood desk", "40"
            screen.condition, screen.category = "used", "Furniture"

            assert not await screen.submit()

        assert screen.form_error == "Failed to update your listing. Please try again."


class TestFavoritesScreen:
    """Test the favorites screen."""

    @pytest.mark.asyncio
    async def test_logged_out(self, api: ApiClient):
        screen = FavoritesScreen(api)

        assert screen.requires_login
        assert not await screen.load()
        assert screen.favorites == []
        assert screen.error is None

    @pytest.mark.asyncio
    async def test_load_and_remove(self, logged_in: ApiClient, listing: dict):
        favorite = await FavoritesClient(logged_in).add(listing["id"])
        screen = FavoritesScreen(logged_in)

        assert await screen.load()
        assert [f["id"] for f in screen.favorites] == [favorite["id"]]

        assert await screen.remove(favorite["id"])
        assert screen.favorites == []
        assert await FavoritesClient(logged_in).get_all() == []

    @pytest.mark.asyncio
    async def test_remove_failure_keeps_list(self, logged_in: ApiClient, listing: dict):
        await FavoritesClient(logged_in).add(listing["id"])
        screen = FavoritesScreen(logged_in)
        await screen.load()

        assert not await screen.remove("not-an-id")
        assert len(screen.favorites) == 1

    @pytest.mark.asyncio
    async def test_load_unreachable(self):
        async with unreachable_client() as client:
            client.set_token("token")
            screen = FavoritesScreen(client)

            assert not await screen.load()

        assert screen.error == "Failed to fetch favorites"


class TestAccountScreen:
    """Test the account screen."""

    @pytest.mark.asyncio
    async def test_load_and_logout(self, logged_in: ApiClient):
        screen = AccountScreen(logged_in)

        assert await screen.load()
        assert screen.user["email"] == "alice@example.com"

        screen.logout()

        assert screen.user is None
        assert not logged_in.is_authenticated
        assert FavoritesScreen(logged_in).requires_login

    @pytest.mark.asyncio
    async def test_load_logged_out(self, api: ApiClient):
        screen = AccountScreen(api)

        assert not await screen.load()
        assert screen.error == ErrorMessages.AUTH_NO_TOKEN
