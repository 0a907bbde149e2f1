"""Filter store: live field values and their debounced composite."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import MappingProxyType
from typing import Mapping

from ElixirFinder.utils.debounce import Debouncer
from ElixirFinder.utils.log import log

FILTER_KEYS: tuple[str, ...] = (
    "name",
    "difficulty",
    "ingredient",
    "inventorFullName",
    "manufacturer",
)

# Advisory vocabulary for the difficulty field; values are not validated.
DIFFICULTY_CHOICES: tuple[str, ...] = (
    "Unknown",
    "Advanced",
    "Moderate",
    "Beginner",
    "OrdinaryWizardingLevel",
    "OneOfAKind",
)

FilterState = Mapping[str, str]
SettleListener = Callable[[FilterState], None]


def make_filter_state(values: Mapping[str, str] | None = None) -> FilterState:
    """Build a read-only filter state in declaration order.

    Args:
        values: Partial mapping of filter key to raw value.

    Returns:
        Mapping with every filter key present; missing keys map to "".

    Raises:
        KeyError: If ``values`` contains an unknown key.
    """
    values = values or {}
    unknown = set(values) - set(FILTER_KEYS)
    if unknown:
        raise KeyError(f"Unknown filter field(s): {sorted(unknown)}")
    return MappingProxyType({key: values.get(key, "") for key in FILTER_KEYS})


EMPTY_FILTER_STATE: FilterState = make_filter_state()


class FilterStore:
    """Hold live filter values and publish coalesced settle events.

    Each field owns an independent debouncer. A settle event carries the
    composite of all per-field settled values and is published once no field
    has a pending timer, and only when the composite changed since the last
    event. ``reset`` bypasses the quiet period.
    """

    def __init__(
        self,
        *,
        quiet_period_ms: int = 500,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._live: dict[str, str] = dict(EMPTY_FILTER_STATE)
        self._debouncers: dict[str, Debouncer[str]] = {
            key: Debouncer(
                "",
                quiet_period_ms=quiet_period_ms,
                on_settle=self._on_field_settled,
                loop=loop,
            )
            for key in FILTER_KEYS
        }
        self._published: FilterState = EMPTY_FILTER_STATE
        self._listeners: list[SettleListener] = []
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def live(self) -> FilterState:
        """Return a snapshot of the current, unsettled field values."""
        return make_filter_state(self._live)

    @property
    def settled(self) -> FilterState:
        """Return the composite of every field's current debounced value."""
        return make_filter_state({key: deb.value for key, deb in self._debouncers.items()})

    @property
    def pending(self) -> bool:
        """Return True while any field waits out its quiet period."""
        return any(deb.pending for deb in self._debouncers.values())

    async def wait_settled(self) -> None:
        """Wait until no field has a pending quiet period."""
        while self.pending:
            await self._idle.wait()

    def subscribe(self, listener: SettleListener) -> Callable[[], None]:
        """Register a settle listener and return its unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_field(self, key: str, raw_value: str) -> None:
        """Replace the live value of one field and restart its quiet period.

        Args:
            key: Filter key, one of ``FILTER_KEYS``.
            raw_value: Value as typed by the user.

        Raises:
            KeyError: If ``key`` is not a filter field.
            TypeError: If ``raw_value`` is not a string.
        """
        if key not in self._debouncers:
            raise KeyError(f"Unknown filter field: {key}")
        if not isinstance(raw_value, str):
            raise TypeError(f"Filter value for {key} must be a string")
        self._live[key] = raw_value
        self._idle.clear()
        self._debouncers[key].observe(raw_value)

    def reset(self) -> None:
        """Clear every field and publish the all-empty state immediately."""
        self._live = dict(EMPTY_FILTER_STATE)
        for debouncer in self._debouncers.values():
            # Silent so the store publishes a single event below.
            debouncer.force("", notify=False)
        self._idle.set()
        self._publish(EMPTY_FILTER_STATE, force=True)

    def close(self) -> None:
        """Cancel pending timers and drop listeners."""
        for debouncer in self._debouncers.values():
            debouncer.close()
        self._idle.set()
        self._listeners.clear()

    def _on_field_settled(self, value: str) -> None:
        del value
        if self.pending:
            return
        self._idle.set()
        self._publish(self.settled)

    def _publish(self, state: FilterState, *, force: bool = False) -> None:
        if not force and dict(state) == dict(self._published):
            return
        self._published = state
        log.debug("Filters settled: %s", dict(state))
        for listener in list(self._listeners):
            listener(state)
