"""Caller-held cancellation for lookups.

A CancelToken can be fired explicitly from any thread with ``cancel()``, or
implicitly when its deadline passes. Every upstream list query in a lookup
checks the token before starting and is aborted if the token fires while it
is in flight.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager


class CancelToken:
    """Cancellation and deadline token shared between caller and lookup.

    Example:
        token = CancelToken(timeout=5.0)
        client.get_pods(cancel=token)

        # or, from another thread while a call is in flight:
        token.cancel()
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._lock = threading.Lock()
        self._tasks: list[tuple[asyncio.AbstractEventLoop, asyncio.Task[object]]] = []

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled}, remaining={self.remaining()})"

    def cancel(self) -> None:
        """Fire the token and abort every query currently bound to it."""
        self._event.set()
        with self._lock:
            bound = list(self._tasks)
        for entry in bound:
            loop = entry[0]
            if not loop.is_closed():
                loop.call_soon_threadsafe(self._cancel_if_bound, entry)

    def _cancel_if_bound(
        self, entry: tuple[asyncio.AbstractEventLoop, asyncio.Task[object]]
    ) -> None:
        # Runs on the task's loop; a query that already returned is left alone
        with self._lock:
            still_bound = entry in self._tasks
        if still_bound:
            entry[1].cancel()

    @property
    def fired(self) -> bool:
        """True once ``cancel()`` has been called."""
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        """True once the deadline (if any) has passed."""
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self.fired or self.expired

    def remaining(self) -> float | None:
        """Seconds until the deadline, None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @contextmanager
    def bind(self) -> Iterator[None]:
        """Bind the current task so ``cancel()`` can interrupt it."""
        entry = (asyncio.get_running_loop(), asyncio.current_task())
        if entry[1] is None:
            yield
            return
        with self._lock:
            self._tasks.append(entry)  # type: ignore[arg-type]
        try:
            yield
        finally:
            with self._lock:
                self._tasks.remove(entry)  # type: ignore[arg-type]
