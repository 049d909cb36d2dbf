"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from notekeeper.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
)


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = NoteRepository(mock_db_session)
            # Test repository methods
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Use this to mock the result of session.execute().

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = Note(id="123")
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.scalars.return_value.first = MagicMock(return_value=None)
    return result


# =============================================================================
# Settings Mock Fixtures
# =============================================================================


def build_application_settings(**overrides: Any) -> ApplicationSchema:
    """Build a valid ApplicationSchema, overriding top-level keys."""
    data: dict[str, Any] = {
        "name": "Test App",
        "version": "1.0.0",
        "description": "Test application",
        "environment": "test",
        "debug": True,
        "api_prefix": "/api",
        "max_body_bytes": 102400,
        "server": {"host": "127.0.0.1", "port": 3000},
        "cors": {"origins": []},
        "pagination": {"default_limit": 10, "max_limit": 100},
        "timeouts": {"database": 30, "external_api": 15},
    }
    data.update(overrides)
    return ApplicationSchema(**data)


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration built from the real schemas.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                # Test code that uses app config
    """
    config = MagicMock()
    config.application = build_application_settings()
    config.database = DatabaseSchema(
        driver="sqlite",
        host="localhost",
        port=5432,
        name="data/test.db",
        user="test_user",
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        echo=False,
        auto_create_schema=True,
    )
    config.logging = LoggingSchema(
        level="DEBUG",
        format="console",
        handlers={
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    )
    config.features = FeaturesSchema(
        api_detailed_errors=True,
        api_request_logging=False,
    )
    return config


# =============================================================================
# HTTP Mock Fixtures
# =============================================================================


class MockResponse:
    """Mock HTTP response for testing."""

    def __init__(
        self,
        status_code: int,
        json_data: dict[str, Any] | None = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data or {}
        self.text = text or str(json_data)
        self.reason_phrase = "Error" if status_code >= 400 else "OK"

    def json(self) -> dict[str, Any]:
        return self._json_data


@pytest.fixture
def mock_response() -> type[MockResponse]:
    """Provide MockResponse class for creating mock HTTP responses."""
    return MockResponse


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
