"""Filter view session: the surface consumed by the presentation layer."""

from __future__ import annotations

from collections.abc import Callable

from ElixirFinder.core.filters import FilterState, FilterStore
from ElixirFinder.core.models import ResultState
from ElixirFinder.services.orchestrator import ElixirSource, FetchOrchestrator, ResultListener


class FilterView:
    """Wire a filter store to a fetch orchestrator for one view session.

    The presentation layer reads ``filters`` and ``result``, edits through
    ``set_field`` and ``reset``, and may ``subscribe`` to result changes.
    Everything is owned by the session and torn down by ``aclose``.

    Args:
        source: Awaitable elixir source.
        quiet_period_ms: Debounce quiet period per filter field.
        clear_items_on_error: Forwarded to the orchestrator.
    """

    def __init__(
        self,
        *,
        source: ElixirSource,
        quiet_period_ms: int = 500,
        clear_items_on_error: bool = False,
    ) -> None:
        self.source = source
        self.store = FilterStore(quiet_period_ms=quiet_period_ms)
        self.orchestrator = FetchOrchestrator(source, clear_items_on_error=clear_items_on_error)
        self._unsubscribe_store = self.store.subscribe(self.orchestrator.submit)

    @property
    def filters(self) -> FilterState:
        """Return the live filter values."""
        return self.store.live

    @property
    def result(self) -> ResultState:
        """Return the current ``{items, loading, error}`` state."""
        return self.orchestrator.result

    def start(self) -> int | None:
        """Issue the initial request for the current settled filters."""
        return self.orchestrator.submit(self.store.settled)

    def set_field(self, key: str, raw_value: str) -> None:
        """Edit one filter field; the request follows after the quiet period."""
        self.store.set_field(key, raw_value)

    def reset(self) -> None:
        """Clear all filters and re-query without waiting."""
        self.store.reset()

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Register a result listener and return its unsubscribe callable."""
        return self.orchestrator.subscribe(listener)

    async def wait_idle(self) -> ResultState:
        """Wait for pending settles and the current request, then return the result."""
        while True:
            await self.store.wait_settled()
            await self.orchestrator.wait_idle()
            if not self.store.pending:
                return self.result

    async def aclose(self) -> None:
        """Tear down debouncers, outstanding requests and the source."""
        self._unsubscribe_store()
        self.store.close()
        await self.orchestrator.aclose()
        self.source.close()
