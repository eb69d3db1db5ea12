"""Rate-limit telemetry models used by the SDK client."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

CALL_LIMIT_HEADER = "x-shopify-shop-api-call-limit"


@dataclass(frozen=True)
class CallLimit:
    """REST leaky-bucket usage parsed from the call-limit header."""

    request_count: int
    bucket_size: int

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> CallLimit | None:
        """Parse ``X-Shopify-Shop-Api-Call-Limit: <used>/<max>``.

        Returns *None* if the header is absent or not an integer pair.
        """
        raw = headers.get(CALL_LIMIT_HEADER)
        if not raw:
            return None
        used, sep, maximum = raw.partition("/")
        if not sep:
            return None
        try:
            return cls(request_count=int(used), bucket_size=int(maximum))
        except ValueError:
            return None


class GraphQLThrottleStatus(BaseModel):
    """State of the shop's GraphQL cost bucket."""

    model_config = ConfigDict(populate_by_name=True)

    maximum_available: float = Field(0.0, alias="maximumAvailable")
    currently_available: float = Field(0.0, alias="currentlyAvailable")
    restore_rate: float = Field(0.0, alias="restoreRate")


class GraphQLCost(BaseModel):
    """Cost of a GraphQL query as reported in ``extensions.cost``."""

    model_config = ConfigDict(populate_by_name=True)

    requested_query_cost: int = Field(0, alias="requestedQueryCost")
    # Absent when the query was rejected before execution.
    actual_query_cost: int | None = Field(None, alias="actualQueryCost")
    throttle_status: GraphQLThrottleStatus = Field(
        default_factory=GraphQLThrottleStatus, alias="throttleStatus"
    )

    def retry_after_seconds(self) -> float:
        """Seconds until the bucket has refilled enough to run this query."""
        if self.actual_query_cost is not None:
            cost = self.actual_query_cost
        else:
            cost = self.requested_query_cost
        diff = self.throttle_status.currently_available - float(cost)
        # A zero restore rate means the bucket was never reported.
        if diff < 0 and self.throttle_status.restore_rate > 0:
            return -diff / self.throttle_status.restore_rate
        return 0.0


class RateLimits:
    """Most recent rate-limit telemetry observed by one client.

    Only the latest response is reflected; there is no history. Writes are
    last-writer-wins under a lock so concurrent callers sharing a client
    never observe a half-updated call-limit pair.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._request_count = 0
        self._bucket_size = 0
        self._graphql_cost: GraphQLCost | None = None
        self._retry_after_seconds = 0.0

    @property
    def request_count(self) -> int:
        with self._lock:
            return self._request_count

    @property
    def bucket_size(self) -> int:
        with self._lock:
            return self._bucket_size

    @property
    def graphql_cost(self) -> GraphQLCost | None:
        with self._lock:
            return self._graphql_cost

    @property
    def retry_after_seconds(self) -> float:
        with self._lock:
            return self._retry_after_seconds

    def update_from_headers(self, headers: Mapping[str, str]) -> CallLimit | None:
        limit = CallLimit.from_headers(headers)
        if limit is not None:
            with self._lock:
                self._request_count = limit.request_count
                self._bucket_size = limit.bucket_size
        return limit

    def update_graphql_cost(self, cost: GraphQLCost) -> float:
        """Store *cost* and its derived retry-after; return the latter."""
        seconds = cost.retry_after_seconds()
        with self._lock:
            self._graphql_cost = cost
            self._retry_after_seconds = seconds
        return seconds

    def update_retry_after(self, seconds: float) -> None:
        with self._lock:
            self._retry_after_seconds = seconds

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"RateLimits(request_count={self._request_count}, "
                f"bucket_size={self._bucket_size}, "
                f"retry_after_seconds={self._retry_after_seconds})"
            )
