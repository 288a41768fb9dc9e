"""Client for the Prometheus property-rental CRUD API."""

from api.client import ApiClient, ResourceEndpoint
from api.envelope import (
    ApiError,
    ApiResponse,
    BusinessError,
    PagedResult,
    TransportError,
    unwrap,
    unwrap_items,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "BusinessError",
    "PagedResult",
    "ResourceEndpoint",
    "TransportError",
    "unwrap",
    "unwrap_items",
]
