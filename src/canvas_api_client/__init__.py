"""Public package exports for Canvas API client."""

from .async_client import AsyncCanvasClient
from .client import CanvasClient
from .config import CanvasClientConfig, PaginationConfig, TransportConfig
from .core.errors import (
    APIError,
    AuthenticationError,
    CanvasApiError,
    DecodeError,
    MalformedPaginationMetadata,
    MissingPaginationRelation,
    RateLimitExceeded,
    is_rate_limit,
)
from .core.pagination_shared import ignore_errors, raise_error

__all__ = [
    "CanvasClient",
    "AsyncCanvasClient",
    "CanvasClientConfig",
    "PaginationConfig",
    "TransportConfig",
    "CanvasApiError",
    "APIError",
    "AuthenticationError",
    "RateLimitExceeded",
    "MalformedPaginationMetadata",
    "MissingPaginationRelation",
    "DecodeError",
    "is_rate_limit",
    "raise_error",
    "ignore_errors",
]
