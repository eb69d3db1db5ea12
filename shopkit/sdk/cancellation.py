"""Cancellation tokens for aborting retry loops and backoff waits."""

from __future__ import annotations

import logging
import threading
import time

from shopkit.sdk.exceptions import ShopifyError

logger = logging.getLogger(__name__)


class CancellationError(ShopifyError):
    """Raised when an operation has been cancelled via a cancellation token."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or "operation cancelled")
        self.reason = reason


class _CancellationState:
    __slots__ = ("event", "reason", "deadline", "lock")

    def __init__(self, deadline: float | None) -> None:
        self.event = threading.Event()
        self.reason: str | None = None
        self.deadline = deadline
        self.lock = threading.Lock()


class CancellationToken:
    """Read-only handle that lets a call observe cancellation requests.

    A token is cancelled either explicitly through its source or implicitly
    once its deadline (a ``time.monotonic()`` timestamp) has passed.
    """

    __slots__ = ("_state",)

    def __init__(self, state: _CancellationState) -> None:
        self._state = state

    @property
    def cancelled(self) -> bool:
        if self._state.event.is_set():
            return True
        deadline = self._state.deadline
        return deadline is not None and time.monotonic() >= deadline

    @property
    def reason(self) -> str | None:
        if self._state.event.is_set():
            return self._state.reason
        if self.cancelled:
            return "deadline exceeded"
        return None

    @property
    def deadline(self) -> float | None:
        return self._state.deadline

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise CancellationError(self.reason)

    def sleep(self, seconds: float) -> None:
        """Block for *seconds* unless cancelled first.

        Raises :class:`CancellationError` as soon as the token is cancelled,
        or immediately when the deadline falls inside the wait.
        """
        self.raise_if_cancelled()
        deadline = self._state.deadline
        if deadline is not None and time.monotonic() + seconds > deadline:
            self._state.event.wait(max(deadline - time.monotonic(), 0.0))
            raise CancellationError(self.reason or "deadline exceeded")
        if self._state.event.wait(max(seconds, 0.0)):
            raise CancellationError(self._state.reason)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled}, reason={self.reason!r})"


class CancellationTokenSource:
    """Owns a cancellation token and triggers cancellation on request.

    ``timeout`` (seconds) sets a deadline relative to now.
    """

    __slots__ = ("_state", "_token")

    def __init__(self, *, timeout: float | None = None) -> None:
        deadline = time.monotonic() + timeout if timeout is not None else None
        self._state = _CancellationState(deadline)
        self._token = CancellationToken(self._state)

    @property
    def token(self) -> CancellationToken:
        return self._token

    def cancel(self, *, reason: str | None = None) -> bool:
        with self._state.lock:
            if self._state.event.is_set():
                return False
            self._state.reason = reason
            self._state.event.set()
        logger.debug("Cancellation requested: %s", reason or "no reason given")
        return True

    def __enter__(self) -> CancellationToken:
        return self._token

    def __exit__(self, *exc: object) -> None:
        self.cancel(reason="scope exited")


__all__ = ["CancellationError", "CancellationToken", "CancellationTokenSource"]
