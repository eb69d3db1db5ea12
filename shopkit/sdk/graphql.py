"""GraphQL queries with cost tracking and throttle-aware retries."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from shopkit.sdk.cancellation import CancellationToken
from shopkit.sdk.decoding import decode_as
from shopkit.sdk.exceptions import RateLimitError, ResponseError
from shopkit.sdk.models import GraphQLCost
from shopkit.services.request_context import call_scope

if TYPE_CHECKING:
    from shopkit.sdk.client import ShopifyClient

logger = logging.getLogger(__name__)

THROTTLED = "THROTTLED"
GRAPHQL_PATH = "graphql.json"


class GraphQLErrorLocation(BaseModel):
    line: int = 0
    column: int = 0


class GraphQLErrorExtensions(BaseModel):
    code: str = ""
    documentation: str = ""


class GraphQLError(BaseModel):
    message: str = ""
    extensions: GraphQLErrorExtensions | None = None
    locations: list[GraphQLErrorLocation] = Field(default_factory=list)

    @property
    def throttled(self) -> bool:
        return self.extensions is not None and self.extensions.code == THROTTLED


class GraphQLExtensions(BaseModel):
    cost: GraphQLCost | None = None


class GraphQLResponse(BaseModel):
    """The ``{"data", "errors", "extensions"}`` envelope."""

    data: Any = None
    errors: list[GraphQLError] = Field(default_factory=list)
    extensions: GraphQLExtensions | None = None


class GraphQLService:
    """Runs queries against ``graphql.json``.

    A query shares the client's attempt budget with the REST retry loop
    beneath it: 5xx retries and throttled retries both count. A throttled
    query waits ``ceil(retry_after_seconds)`` derived from the reported
    cost before trying again.
    """

    def __init__(self, client: ShopifyClient) -> None:
        self._client = client

    def query(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        model: Any = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> Any:
        """Run *query* and return ``data`` validated into *model*.

        Raises :class:`RateLimitError` (status 200) when still throttled
        after the last attempt, and :class:`ResponseError` (status 200)
        aggregating all messages for any other GraphQL error.
        """
        body: dict[str, Any] = {"query": query}
        if variables is not None:
            body["variables"] = variables
        max_attempts = self._client.retry_policy.max_attempts
        attempts = 0

        with call_scope():
            while True:
                envelope, _, used = self._client._send(
                    "POST",
                    GRAPHQL_PATH,
                    body=body,
                    model=GraphQLResponse,
                    token=cancellation_token,
                    max_attempts=max_attempts - attempts,
                )
                attempts += used

                retry_after = 0.0
                if envelope.extensions is not None and envelope.extensions.cost is not None:
                    retry_after = self._client.rate_limits.update_graphql_cost(
                        envelope.extensions.cost
                    )

                if not envelope.errors:
                    if model is None:
                        return envelope.data
                    return decode_as(model, envelope.data, status=200)

                error = ResponseError(200)
                retry = False
                for err in envelope.errors:
                    if err.throttled:
                        if attempts >= max_attempts:
                            raise RateLimitError(
                                200, err.message, retry_after=math.ceil(retry_after)
                            )
                        retry = True
                    error.errors.append(err.message)

                if not retry:
                    raise error

                wait = math.ceil(retry_after)
                logger.warning(
                    "GraphQL query throttled, retrying in %ds (attempt %d/%d)",
                    wait, attempts, max_attempts,
                )
                self._client._wait(wait, cancellation_token)
