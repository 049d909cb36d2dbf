"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the full
application stack (middleware, exception handlers, routing).
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from notekeeper.backend.core.database import Database
from notekeeper.backend.main import create_app


NOTES_URL = "/api/notes"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Provide an initialized Database with a fresh schema.

    The app lifespan does not run under ASGITransport, so the fixture
    performs init/teardown itself.
    """
    url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    db = Database(url, create_schema=True)
    await db.init()
    await db.reset_schema()
    yield db
    await db.teardown()


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the test database.

    Requests go through the real get_db_session dependency, so each
    request commits or rolls back exactly as in production.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=database)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
def create_note(
    client: AsyncClient,
) -> Callable[..., Awaitable[dict[str, Any]]]:
    """
    Factory that creates a note through the API and returns its JSON.

    Usage:
        async def test_get(client, create_note):
            note = await create_note(title="Hello", priority="high")
    """
    async def _create_note(**fields: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": "Test Note", "content": "Test content"}
        payload.update(fields)
        response = await client.post(NOTES_URL, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create_note


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON data

        Raises:
            AssertionError: If response is not successful
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_code: Expected error code (optional)
            expected_message: Expected error message (optional)

        Returns:
            Response JSON data

        Raises:
            AssertionError: If response is not an error or codes don't match
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("message"), f"Missing error message: {data}"
        assert data.get("type"), f"Missing error type: {data}"

        if expected_code:
            actual_code = data.get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        if expected_message:
            assert data["message"] == expected_message, (
                f"Expected message {expected_message!r}, got {data['message']!r}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        expected_code: str | None = None,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a validation error (400).

        Args:
            response: httpx Response object
            expected_code: Expected VAL_* code (optional)
            expected_message: Expected error message (optional)

        Returns:
            Response JSON data
        """
        data = ApiAssertions.assert_error(
            response, 400, expected_code, expected_message
        )
        assert data["type"] == "Validation Error", f"Unexpected type: {data['type']}"
        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
