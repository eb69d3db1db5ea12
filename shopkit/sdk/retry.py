"""Bounded retry policy for throttled and 5xx responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from shopkit.sdk.exceptions import RateLimitError, ResponseError, ShopifyError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how long to back off before giving up.

    ``max_retries`` is the total number of attempts for one logical call,
    the first one included; values below one are treated as one.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 32.0

    @property
    def max_attempts(self) -> int:
        return max(1, self.max_retries)

    def backoff(self, attempt: int) -> float:
        """Exponential delay after the *attempt*-th failure (1-based)."""
        return min(self.base_delay * (2 ** max(0, attempt - 1)), self.max_delay)

    def delay_for(self, error: ShopifyError, attempt: int) -> float | None:
        """Seconds to wait before retrying after *error*, or *None* if final."""
        if isinstance(error, RateLimitError):
            if error.retry_after > 0:
                return float(error.retry_after)
            return self.backoff(attempt)
        if isinstance(error, ResponseError) and error.status >= 500:
            return self.backoff(attempt)
        return None

    def run(
        self,
        attempt_fn: Callable[[], T],
        *,
        sleep: Callable[[float], None],
        max_attempts: int | None = None,
    ) -> tuple[T, int]:
        """Call *attempt_fn* until it succeeds or the budget is spent.

        Returns ``(result, attempts_used)``. Errors that are not retryable,
        and the last error once the budget is exhausted, propagate.
        """
        budget = max_attempts if max_attempts is not None else self.max_attempts
        budget = max(1, budget)
        attempt = 0
        while True:
            attempt += 1
            try:
                return attempt_fn(), attempt
            except ShopifyError as exc:
                delay = self.delay_for(exc, attempt)
                if delay is None:
                    raise
                if attempt >= budget:
                    logger.warning(
                        "Giving up after %d/%d attempts: %s", attempt, budget, exc,
                    )
                    raise
                logger.warning(
                    "Request failed (%s), retrying in %.2fs (attempt %d/%d)",
                    exc, delay, attempt, budget,
                )
                sleep(delay)
