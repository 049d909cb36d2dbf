# Pydantic schemas package
from notekeeper.backend.schemas.base import (
    ApiResponse,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationInfo,
    ResponseMetadata,
    StatusResponse,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "MessageResponse",
    "PaginatedResponse",
    "PaginationInfo",
    "ResponseMetadata",
    "StatusResponse",
]
