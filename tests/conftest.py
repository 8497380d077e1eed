"""
Test configuration and fixtures for the marketplace API.
Provides per-test in-memory databases, test data factories and request helpers.
"""

import os
import tempfile

# Configure the environment before the application module builds its default app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-marketplace-api-0123456789"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="marketplace-uploads-")

import pytest
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional, Tuple

import httpx
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.config import Settings
from marketplace_api.database import create_tables
from marketplace_api.main import create_app
from marketplace_api.models.listing import Listing, ListingCategory, ListingCondition, ListingStatus
from marketplace_api.models.user import User
from marketplace_api.repositories.favorite import FavoriteRepository
from marketplace_api.repositories.listing import ListingRepository
from marketplace_api.repositories.user import UserRepository
from marketplace_api.services.auth import AuthService
from marketplace_api.services.favorite import FavoriteService
from marketplace_api.services.listing import ListingService
from marketplace_api.services.user import UserService


TEST_SECRET = os.environ["JWT_SECRET_KEY"]
TEST_PASSWORD = "testpassword123"
API = "/api/v1"


def make_settings(upload_dir: str, **overrides) -> Settings:
    """Settings for an isolated in-memory test database."""
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "environment": "testing",
        "jwt_secret_key": TEST_SECRET,
        "upload_dir": upload_dir,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return make_settings(str(tmp_path / "uploads"))


@pytest.fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its own in-memory database and schema."""
    application = create_app(test_settings)
    await create_tables(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """Session on the same database the application uses."""
    async with app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async test client talking to the application in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def listing_repository(db_session: AsyncSession) -> ListingRepository:
    return ListingRepository(db_session)


@pytest.fixture
def favorite_repository(db_session: AsyncSession) -> FavoriteRepository:
    return FavoriteRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession, test_settings: Settings) -> AuthService:
    return AuthService(db_session, test_settings)


@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    return ListingService(db_session)


@pytest.fixture
def favorite_service(db_session: AsyncSession) -> FavoriteService:
    return FavoriteService(db_session)


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User"
    ) -> dict:
        return {
            "first_name": first_name,
            "last_name": last_name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User"
    ) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(
            UserFactory.create_user_data(email, password, first_name, last_name)
        )


class ListingFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_listing_data(
        title: str = "Desk",
        description: str = "Wood desk",
        price: Decimal = Decimal("40.00"),
        condition: ListingCondition = ListingCondition.USED,
        category: ListingCategory = ListingCategory.FURNITURE,
        status: ListingStatus = ListingStatus.AVAILABLE,
        owner_id: Optional[uuid.UUID] = None
    ) -> dict:
        data = {
            "title": title,
            "description": description,
            "price": price,
            "condition": condition,
            "category": category,
            "status": status,
            "pictures": [],
        }
        if owner_id is not None:
            data["owner_id"] = owner_id
        return data

    @staticmethod
    def create_listing_payload(**overrides) -> dict:
        """JSON request body for POST /listings."""
        payload = {
            "title": "Desk",
            "description": "Wood desk",
            "price": 40,
            "condition": "used",
            "category": "Furniture",
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_listing(listing_repo: ListingRepository, owner_id: uuid.UUID, **overrides) -> Listing:
        """Create a test listing in the database."""
        data = ListingFactory.create_listing_data(owner_id=owner_id)
        data.update(overrides)
        return await listing_repo.create_listing(data)


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="alice@example.com", first_name="Alice")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="bob@example.com", first_name="Bob")


@pytest.fixture
async def test_listing(listing_repository: ListingRepository, test_user: User) -> Listing:
    return await ListingFactory.create_listing(listing_repository, owner_id=test_user.id)


# Utility functions for tests
def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_user(
    client: httpx.AsyncClient,
    email: Optional[str] = None,
    password: str = TEST_PASSWORD,
    first_name: str = "Test",
    last_name: str = "User"
) -> Tuple[str, dict]:
    """Register through the API and return (access_token, user)."""
    response = await client.post(
        f"{API}/auth/register",
        json=UserFactory.create_user_data(email, password, first_name, last_name)
    )
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return data["access_token"], data["user"]


async def create_listing_via_api(client: httpx.AsyncClient, token: str, **overrides) -> dict:
    response = await client.post(
        f"{API}/listings",
        json=ListingFactory.create_listing_payload(**overrides),
        headers=auth_headers(token)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def assert_envelope(body: dict, success: bool) -> None:
    """Every response body carries exactly the four envelope keys."""
    assert set(body.keys()) == {"success", "message", "data", "errors"}
    assert body["success"] is success
    if success:
        assert body["errors"] is None
    else:
        assert body["data"] is None
