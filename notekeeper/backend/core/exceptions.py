"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Each exception carries a stable machine-readable ``code``, a human-readable
``error_type`` used in response bodies, and optional ``context`` that is
merged into the error response (for example the received value).
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    error_type = "Internal Server Error"

    def __init__(
        self,
        message: str,
        code: str = "SYS_INTERNAL_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    error_type = "Not Found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    error_type = "Validation Error"

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict | None = None,
        code: str = "VAL_VALIDATION_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.details = details or {}
        super().__init__(message, code=code, context=context)


# =============================================================================
# Note payload validation failures
# =============================================================================


class MissingFieldError(ValidationError):
    """A required field is absent."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_MISSING_FIELD", context=context)


class FieldTypeError(ValidationError):
    """A field holds a value of the wrong type."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_FIELD_TYPE", context=context)


class EmptyFieldError(ValidationError):
    """A required text field is empty or only whitespace."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_EMPTY_FIELD", context=context)


class LengthExceededError(ValidationError):
    """A text field is longer than allowed."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_LENGTH_EXCEEDED", context=context)


class InvalidEnumError(ValidationError):
    """A field value is not one of the allowed choices."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_INVALID_ENUM", context=context)


class InvalidTypeError(ValidationError):
    """A collection field does not have the expected element type."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="VAL_INVALID_TYPE", context=context)


class InvalidIdentifierError(ValidationError):
    """A path identifier is not a well-formed UUID."""

    def __init__(self, message: str = "Invalid note ID format", **context: Any) -> None:
        super().__init__(message, code="VAL_INVALID_IDENTIFIER", context=context)


# =============================================================================
# Request and persistence failures
# =============================================================================


class ParseError(ApplicationError):
    """Raised when the request body is not valid JSON."""

    error_type = "Parse Error"

    def __init__(self, message: str = "Invalid JSON format in request body") -> None:
        super().__init__(message, code="REQ_PARSE_ERROR")


class PayloadTooLargeError(ApplicationError):
    """Raised when the request body exceeds the configured size limit."""

    error_type = "Size Error"

    def __init__(self, message: str = "Request entity too large", **context: Any) -> None:
        super().__init__(message, code="REQ_TOO_LARGE", context=context)


class DuplicateError(ApplicationError):
    """Raised when a uniqueness constraint is violated."""

    error_type = "Duplicate Error"

    def __init__(self, message: str = "Duplicate value") -> None:
        super().__init__(message, code="RES_DUPLICATE")


class InvalidReferenceError(ApplicationError):
    """Raised when a foreign key points at a missing row."""

    error_type = "Reference Error"

    def __init__(self, message: str = "Invalid reference to related resource") -> None:
        super().__init__(message, code="RES_INVALID_REFERENCE")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    error_type = "Database Error"

    def __init__(self, message: str = "Database connection error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
