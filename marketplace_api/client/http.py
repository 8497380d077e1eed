"""
Async HTTP client for the Marketplace API.
Unwraps response envelopes: data on success, ApiError on failure.
"""

from typing import Any, Dict, Mapping, Optional

import httpx
import logging

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call. status_code is None when no response was received."""

    def __init__(self, status_code: Optional[int], message: str, errors: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors

    def __repr__(self) -> str:
        return f"<ApiError(status_code={self.status_code}, message={self.message!r})>"


class ApiClient:
    """
    Shared client for the service wrappers.

    - Uses one AsyncClient instance (connection pooling).
    - Holds the bearer token; set_token(None) logs out.
    - Does not retry; screens offer retry to the user instead.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api/v1",
        token: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the envelope's data.

        Raises:
            ApiError: If the request fails or the envelope reports failure
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            resp = await self._client.request(
                method,
                path,
                headers=self._headers(),
                params=query,
                json=json_body,
                files=files,
            )
        except httpx.TimeoutException as e:
            raise ApiError(None, f"Request timed out: {e}")
        except httpx.RequestError as e:
            # DNS errors, connection refused, TLS, etc.
            raise ApiError(None, f"Request failed: {e}")

        try:
            envelope = resp.json()
        except ValueError:
            raise ApiError(resp.status_code, f"HTTP {resp.status_code}")

        if not isinstance(envelope, dict) or "success" not in envelope:
            raise ApiError(resp.status_code, f"HTTP {resp.status_code}")

        if not envelope["success"] or resp.status_code >= 400:
            logger.debug(f"{method} {path} failed: {resp.status_code} {envelope.get('message')}")
            raise ApiError(resp.status_code, envelope.get("message") or f"HTTP {resp.status_code}", envelope.get("errors"))

        return envelope.get("data")

    # helpers
    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json_body: Optional[Dict[str, Any]] = None, files: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json_body=json_body, files=files)

    async def patch(self, path: str, json_body: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", path, json_body=json_body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
