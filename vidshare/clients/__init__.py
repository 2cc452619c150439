"""HTTP clients for external services."""
from .api_client import (
    APIError,
    APIRequestError,
    APIResponseError,
    APITransportError,
    NotFoundError,
    TokenProvider,
    UnauthorizedError,
    VidshareAPIClient,
)

__all__ = [
    "APIError",
    "APIRequestError",
    "APIResponseError",
    "APITransportError",
    "NotFoundError",
    "TokenProvider",
    "UnauthorizedError",
    "VidshareAPIClient",
]
