"""shopkit SDK: a rate-limit aware client for the Admin REST and GraphQL APIs."""

from __future__ import annotations

from shopkit.sdk.cancellation import (
    CancellationError,
    CancellationToken,
    CancellationTokenSource,
)
from shopkit.sdk.client import ShopifyClient
from shopkit.sdk.exceptions import (
    RateLimitError,
    ResponseDecodingError,
    ResponseError,
    ShopifyError,
    TransportError,
    check_response_error,
)
from shopkit.sdk.graphql import GraphQLService
from shopkit.sdk.models import GraphQLCost, GraphQLThrottleStatus, RateLimits
from shopkit.sdk.pagination import CountOptions, ListOptions, Pagination, extract_pagination
from shopkit.sdk.retry import RetryPolicy

__all__ = [
    "ShopifyClient",
    "GraphQLService",
    "ShopifyError",
    "ResponseError",
    "RateLimitError",
    "ResponseDecodingError",
    "TransportError",
    "CancellationError",
    "CancellationToken",
    "CancellationTokenSource",
    "check_response_error",
    "GraphQLCost",
    "GraphQLThrottleStatus",
    "RateLimits",
    "CountOptions",
    "ListOptions",
    "Pagination",
    "extract_pagination",
    "RetryPolicy",
]
