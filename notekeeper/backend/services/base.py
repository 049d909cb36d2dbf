"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from notekeeper.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)

        async def create_note(self, payload: dict) -> Note:
            data = self._parse_payload(NoteCreate, payload)
            return await self._execute_db_operation(
                "create_note", self.repo.create(**data.model_dump(mode="json")),
            )
"""

import re
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import (
    DatabaseError,
    DuplicateError,
    InvalidReferenceError,
    ValidationError,
)
from notekeeper.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
SchemaT = TypeVar("SchemaT", bound=BaseModel)

# "UNIQUE constraint failed: notes.title" (SQLite) or
# 'Key (title)=(x) already exists' (PostgreSQL)
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"unique constraint failed: \w+\.(\w+)", re.IGNORECASE),
    re.compile(r"key \((\w+)\)=", re.IGNORECASE),
)


def _duplicate_field(error_text: str) -> str:
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(error_text)
        if match:
            return match.group(1)
    return "field"


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Conversion of request payloads into typed schemas

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            DuplicateError: For unique constraint violations
            InvalidReferenceError: For foreign key violations
            ValidationError: For other constraint violations
            DatabaseError: For connectivity and other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e.orig if e.orig is not None else e)
            lowered = error_str.lower()
            if "unique" in lowered or "duplicate" in lowered:
                raise DuplicateError(
                    f"Duplicate value for {_duplicate_field(error_str)}"
                ) from e
            if "foreign key" in lowered:
                raise InvalidReferenceError() from e
            raise ValidationError(
                f"Database constraint violation: {operation}"
            ) from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError() from e

    def _parse_payload(
        self,
        schema: type[SchemaT],
        payload: dict[str, Any],
    ) -> SchemaT:
        """
        Load an already checked payload into a typed schema.

        Args:
            schema: Pydantic model to validate against
            payload: Raw request data

        Raises:
            ValidationError: If the payload does not fit the schema
        """
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid request data",
                details={
                    "validation_errors": [
                        {
                            "field": ".".join(str(loc) for loc in err["loc"]),
                            "message": err["msg"],
                        }
                        for err in e.errors()
                    ]
                },
            ) from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
