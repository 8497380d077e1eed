"""
Per-resource client services used by the screens.
"""

from typing import Any, Dict, List, Optional

from marketplace_api.client.http import ApiClient


class AuthClient:
    """Registration and login. A successful call stores the issued token on the client."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def register(self, first_name: str, last_name: str, email: str, password: str) -> Dict[str, Any]:
        data = await self.api.post("/auth/register", {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password": password,
        })
        self.api.set_token(data["access_token"])
        return data

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self.api.post("/auth/login", {"email": email, "password": password})
        self.api.set_token(data["access_token"])
        return data

    def logout(self) -> None:
        self.api.set_token(None)


class AccountClient:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get(self) -> Dict[str, Any]:
        return await self.api.get("/account")

    async def update(self, **fields: Any) -> Dict[str, Any]:
        return await self.api.patch("/account", fields)

    async def delete(self) -> None:
        await self.api.delete("/account")

    async def my_listings(self) -> List[Dict[str, Any]]:
        return await self.api.get("/account/listings")

    async def reset_password(self, email: str, password: str) -> Dict[str, Any]:
        return await self.api.patch("/account/password", {"email": email, "password": password})


class ListingsClient:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_all(
        self,
        category: Optional[str] = None,
        condition: Optional[str] = None,
        status: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        return await self.api.get("/listings", params={
            "category": category,
            "condition": condition,
            "status": status,
            "owner_id": owner_id,
        })

    async def get_by_id(self, listing_id: str) -> Dict[str, Any]:
        return await self.api.get(f"/listings/{listing_id}")

    async def create(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        return await self.api.post("/listings", listing)

    async def update(self, listing_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self.api.patch(f"/listings/{listing_id}", changes)

    async def delete(self, listing_id: str) -> None:
        await self.api.delete(f"/listings/{listing_id}")


class FavoritesClient:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_all(self) -> List[Dict[str, Any]]:
        return await self.api.get("/favorites")

    async def add(self, listing_id: str) -> Dict[str, Any]:
        return await self.api.post("/favorites", {"listing_id": listing_id})

    async def remove(self, favorite_id: str) -> None:
        await self.api.delete(f"/favorites/{favorite_id}")


class UploadClient:
    def __init__(self, api: ApiClient):
        self.api = api

    async def upload(self, filename: str, content: bytes, mime_type: str) -> Dict[str, Any]:
        """Upload image bytes; the returned url can be used as a listing picture."""
        return await self.api.post("/upload", files={"file": (filename, content, mime_type)})
