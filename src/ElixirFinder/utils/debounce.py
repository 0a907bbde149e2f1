"""Quiet-period debouncer driven by the asyncio event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Emit a settled value once no newer value arrived for the quiet period.

    Every ``observe`` call restarts the timer and drops the pending value; the
    previously settled value stays readable through ``value`` during the wait.
    Timers are ``loop.call_later`` handles, so a debouncer must be used from
    the thread running its loop.

    Args:
        initial: Value considered settled before any observation.
        quiet_period_ms: Default quiet period in milliseconds.
        on_settle: Callback invoked with the settled value.
        loop: Event loop scheduling the timers. Defaults to the running loop.
    """

    def __init__(
        self,
        initial: T,
        *,
        quiet_period_ms: int,
        on_settle: Callable[[T], None] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if quiet_period_ms < 0:
            raise ValueError("quiet_period_ms must be >= 0")
        self._value = initial
        self._quiet_period_ms = quiet_period_ms
        self._on_settle = on_settle
        self._loop = loop
        self._handle: asyncio.Handle | None = None
        self._closed = False

    @property
    def value(self) -> T:
        """Return the last settled value."""
        return self._value

    @property
    def pending(self) -> bool:
        """Return True while a newer value waits out its quiet period."""
        return self._handle is not None

    def observe(self, value: T, quiet_period_ms: int | None = None) -> None:
        """Submit a new value and restart the quiet-period timer.

        Args:
            value: Candidate value.
            quiet_period_ms: Override of the default quiet period. Zero settles
                on the next loop tick.

        Raises:
            RuntimeError: If the debouncer was closed.
        """
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        delay_ms = self._quiet_period_ms if quiet_period_ms is None else quiet_period_ms
        if delay_ms < 0:
            raise ValueError("quiet_period_ms must be >= 0")

        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        if delay_ms == 0:
            self._handle = loop.call_soon(self._settle, value)
        else:
            self._handle = loop.call_later(delay_ms / 1000.0, self._settle, value)

    def force(self, value: T, *, notify: bool = True) -> None:
        """Cancel any pending value and settle ``value`` immediately.

        Args:
            value: Value to settle.
            notify: Whether to invoke the settle callback.
        """
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self.cancel()
        if notify:
            self._settle(value)
        else:
            self._value = value

    def cancel(self) -> None:
        """Drop the pending value, keeping the current settled one."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        """Cancel the pending timer; nothing is emitted after this call."""
        self.cancel()
        self._closed = True
        self._on_settle = None

    def _settle(self, value: T) -> None:
        self._handle = None
        self._value = value
        if self._on_settle is not None:
            self._on_settle(value)
