"""
Tests for error handling.
Tests custom exceptions, envelope formatting and the application-level handlers.
"""

import pytest
import json
import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace_api.services.error_handler import ErrorHandlerService
from marketplace_api.utils.exceptions import (
    APIException,
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    InvalidTokenError,
    MissingSecretError,
    NotFoundError,
    RouteNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from marketplace_api.utils.messages import ErrorMessages
from tests.conftest import API, assert_envelope


class TestCustomExceptions:
    """Test status codes carried by the error kinds."""

    @pytest.mark.parametrize("exception,status_code", [
        (ValidationError("bad"), 400),
        (InvalidRequestError("bad id"), 400),
        (UnauthorizedError(), 401),
        (InvalidTokenError(), 401),
        (ForbiddenError(), 403),
        (NotFoundError("missing"), 404),
        (RouteNotFoundError(), 404),
        (ConflictError("taken"), 409),
        (MissingSecretError(), 500),
    ])
    def test_status_codes(self, exception, status_code):
        assert isinstance(exception, APIException)
        assert exception.status_code == status_code

    def test_default_messages(self):
        assert UnauthorizedError().detail == ErrorMessages.AUTH_NO_TOKEN
        assert InvalidTokenError().detail == ErrorMessages.AUTH_INVALID_TOKEN
        assert RouteNotFoundError().detail == ErrorMessages.ROUTE_DOES_NOT_EXIST
        assert MissingSecretError().detail == "Internal server error: JWT_SECRET is not defined."

    def test_validation_error_field_errors(self):
        exception = ValidationError("bad", field_errors=[{"field": "price", "message": "negative"}])

        assert exception.errors == [{"field": "price", "message": "negative"}]
        assert ValidationError("bad").errors is None


class TestErrorHandlerService:
    """Test the envelope produced for each failure kind."""

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(NotFoundError("Listing not found."))

        assert response.status_code == 404
        body = json.loads(response.body)
        assert_envelope(body, success=False)
        assert body["message"] == "Listing not found."
        assert body["errors"] is None

    def test_handle_api_exception_keeps_headers(self):
        exception = APIException(status_code=401, detail="nope", headers={"WWW-Authenticate": "Bearer"})

        response = ErrorHandlerService.handle_api_exception(exception)

        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_handle_validation_error(self):
        exception = RequestValidationError([
            {"loc": ("body", "price"), "msg": "Input should be greater than or equal to 0", "type": "greater_than_equal"},
            {"loc": ("query", "category"), "msg": "Input should be 'Furniture'", "type": "enum"},
        ])

        response = ErrorHandlerService.handle_validation_error(exception)

        assert response.status_code == 400
        body = json.loads(response.body)
        assert_envelope(body, success=False)
        assert body["message"] == ErrorMessages.REQUEST_VALIDATION_FAILED
        assert [e["field"] for e in body["errors"]] == ["price", "category"]
        assert body["errors"][0]["type"] == "greater_than_equal"

    def test_validation_error_without_field(self):
        exception = RequestValidationError([{"loc": ("body",), "msg": "Field required", "type": "missing"}])

        details = ErrorHandlerService.format_validation_details(exception)

        assert details == [{"field": "body", "message": "Field required", "type": "missing"}]

    def test_handle_database_error(self):
        response = ErrorHandlerService.handle_database_error(SQLAlchemyError("connection lost"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["message"] == "Internal server error: connection lost"

    def test_handle_http_exception_404(self):
        response = ErrorHandlerService.handle_http_exception(StarletteHTTPException(status_code=404))

        assert response.status_code == 404
        assert json.loads(response.body)["message"] == ErrorMessages.ROUTE_DOES_NOT_EXIST

    def test_handle_http_exception_405(self):
        response = ErrorHandlerService.handle_http_exception(StarletteHTTPException(status_code=405))

        assert response.status_code == 405
        assert json.loads(response.body)["message"] == ErrorMessages.METHOD_NOT_ALLOWED

    def test_handle_unexpected_error(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("boom"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert_envelope(body, success=False)
        assert body["message"] == "Internal server error: boom"


class TestApplicationErrorHandlers:
    """Test that errors raised inside request handling leave as envelopes."""

    @pytest.fixture
    def failing_app(self, app: FastAPI) -> FastAPI:
        async def database_failure():
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        async def unexpected_failure():
            raise RuntimeError("something broke")

        async def conflict():
            raise ConflictError("Already exists.")

        app.add_api_route("/_test/database", database_failure)
        app.add_api_route("/_test/unexpected", unexpected_failure)
        app.add_api_route("/_test/conflict", conflict)
        return app

    @pytest.fixture
    async def failing_client(self, failing_app: FastAPI):
        transport = httpx.ASGITransport(app=failing_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    @pytest.mark.asyncio
    async def test_database_error(self, failing_client):
        response = await failing_client.get("/_test/database")

        assert response.status_code == 500
        body = response.json()
        assert_envelope(body, success=False)
        assert body["message"].startswith(ErrorMessages.INTERNAL_SERVER_ERROR)
        assert "database is locked" in body["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error(self, failing_client):
        response = await failing_client.get("/_test/unexpected")

        assert response.status_code == 500
        body = response.json()
        assert_envelope(body, success=False)
        assert body["message"] == "Internal server error: something broke"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_api_exception(self, failing_client):
        response = await failing_client.get("/_test/conflict")

        assert response.status_code == 409
        assert response.json()["message"] == "Already exists."

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, async_client):
        response = await async_client.put(f"{API}/listings")

        assert response.status_code == 405
        body = response.json()
        assert_envelope(body, success=False)
        assert body["message"] == ErrorMessages.METHOD_NOT_ALLOWED

    @pytest.mark.asyncio
    async def test_oversized_request(self, async_client, test_settings):
        response = await async_client.post(
            f"{API}/auth/login",
            content=b"{}",
            headers={
                "Content-Type": "application/json",
                "Content-Length": str(test_settings.max_file_size + 2 * 1024 * 1024),
            }
        )

        assert response.status_code == 400
        assert "exceeds maximum allowed size" in response.json()["message"]
