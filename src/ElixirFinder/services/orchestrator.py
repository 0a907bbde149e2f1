"""Fetch orchestration for settled filter states."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Mapping, Protocol, Sequence

from ElixirFinder.core.errors import FetchError
from ElixirFinder.core.models import Elixir, FetchStatus, ResultState
from ElixirFinder.core.query import Query, build_query, query_signature
from ElixirFinder.utils.log import log

UNEXPECTED_ERROR_MESSAGE = "Unexpected error while fetching elixirs"

ResultListener = Callable[[ResultState], None]


class ElixirSource(Protocol):
    """Protocol for an awaitable elixir data source."""

    name: str

    async def search(self, query: Query) -> Sequence[Elixir]:
        """Return elixirs matching the query."""
        raise NotImplementedError

    def close(self) -> None:
        """Close resources held by source."""
        raise NotImplementedError


class FetchOrchestrator:
    """Issue one request per settled filter change and own the result state.

    Every issued request gets a fresh RequestToken. Only the completion that
    carries the current token may replace the result state; completions of
    superseded requests are dropped whatever order they arrive in. A submit
    whose query signature matches the in-flight or most recently completed
    request is a no-op, whatever that request's outcome; a retry takes a
    settle with a different query.

    Args:
        source: Awaitable elixir source.
        clear_items_on_error: Drop the previous items on failure instead of
            keeping the last successful list.
    """

    def __init__(self, source: ElixirSource, *, clear_items_on_error: bool = False) -> None:
        self._source = source
        self._clear_items_on_error = clear_items_on_error
        self._tokens = itertools.count(1)
        self._current_token = 0
        self._current_signature: str | None = None
        self._state = ResultState()
        self._tasks: dict[int, asyncio.Task[None]] = {}
        self._listeners: list[ResultListener] = []
        self._closed = False

    @property
    def result(self) -> ResultState:
        """Return the current result state."""
        return self._state

    @property
    def current_token(self) -> int:
        """Return the current RequestToken (0 before the first request)."""
        return self._current_token

    @property
    def current_signature(self) -> str | None:
        """Return the query signature of the current request."""
        return self._current_signature

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Register a result listener and return its unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def submit(self, settled: Mapping[str, str]) -> int | None:
        """Evaluate a settled filter state and issue a request if it changed.

        Must be called from a running event loop.

        Args:
            settled: Settled filter values.

        Returns:
            The new RequestToken, or None when the query is unchanged.

        Raises:
            RuntimeError: If the orchestrator was closed.
        """
        if self._closed:
            raise RuntimeError("FetchOrchestrator is closed")

        query = build_query(settled)
        signature = query_signature(query)
        if signature == self._current_signature:
            log.debug("Query unchanged, request skipped: signature=%r", signature)
            return None

        token = next(self._tokens)
        self._current_token = token
        self._current_signature = signature
        self._transition(loading=True, error=None, status=FetchStatus.LOADING, token=token)
        log.debug("Request issued: token=%d signature=%r", token, signature)

        task = asyncio.get_running_loop().create_task(self._run(token, query))
        self._tasks[token] = task
        task.add_done_callback(lambda _task, tok=token: self._tasks.pop(tok, None))
        return token

    async def wait_idle(self) -> None:
        """Wait until the current request completes.

        Superseded requests still running are not awaited.
        """
        while True:
            task = self._tasks.get(self._current_token)
            if task is None or task.done():
                return
            await asyncio.wait({task})

    def close(self) -> None:
        """Cancel outstanding requests and drop listeners."""
        self._closed = True
        for task in list(self._tasks.values()):
            task.cancel()
        self._listeners.clear()

    async def aclose(self) -> None:
        """Close and wait for cancelled request tasks to unwind."""
        tasks = list(self._tasks.values())
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, token: int, query: Query) -> None:
        try:
            items = await self._source.search(query)
        except FetchError as error:
            self._complete_failure(token, str(error) or UNEXPECTED_ERROR_MESSAGE)
        except Exception as error:  # noqa: BLE001 - failures stay scoped to one request
            log.error("Request crashed: token=%d error=%s", token, error, exc_info=True)
            self._complete_failure(token, UNEXPECTED_ERROR_MESSAGE)
        else:
            self._complete_success(token, items)

    def _complete_success(self, token: int, items: Sequence[Elixir]) -> None:
        if not self._is_current(token):
            return
        log.info("Fetched %d elixirs (token=%d)", len(items), token)
        self._transition(items=tuple(items), loading=False, error=None, status=FetchStatus.SUCCESS)

    def _complete_failure(self, token: int, message: str) -> None:
        if not self._is_current(token):
            return
        log.warning("Request failed: token=%d error=%s", token, message)
        changes: dict[str, Any] = {"loading": False, "error": message, "status": FetchStatus.FAILURE}
        if self._clear_items_on_error:
            changes["items"] = ()
        self._transition(**changes)

    def _is_current(self, token: int) -> bool:
        if self._closed:
            return False
        if token != self._current_token:
            log.debug("Stale response discarded: token=%d current=%d", token, self._current_token)
            return False
        return True

    def _transition(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
