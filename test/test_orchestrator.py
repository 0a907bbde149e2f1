"""Tests for request issuing, stale-response discarding and result states."""

from __future__ import annotations

import asyncio
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ElixirFinder.core.errors import ParseError, TransportError
from ElixirFinder.core.models import Elixir, FetchStatus, ResultState
from ElixirFinder.core.query import Query
from ElixirFinder.services.orchestrator import UNEXPECTED_ERROR_MESSAGE, FetchOrchestrator


class _GatedSource:
    """Source whose requests complete only when the test resolves them."""

    name = "gated"

    def __init__(self) -> None:
        self.calls: list[tuple[Query, asyncio.Future]] = []
        self.closed = False

    async def search(self, query: Query) -> list[Elixir]:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((query, future))
        return await future

    def close(self) -> None:
        self.closed = True


async def _drain() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


def _elixir(id_: str, name: str) -> Elixir:
    return Elixir(id=id_, name=name)


class TestFetchOrchestrator(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.source = _GatedSource()
        self.orchestrator = FetchOrchestrator(self.source)
        self.states: list[ResultState] = []
        self.orchestrator.subscribe(self.states.append)

    async def asyncTearDown(self) -> None:
        await self.orchestrator.aclose()

    async def test_initial_state_is_idle(self) -> None:
        state = self.orchestrator.result
        self.assertEqual(state.status, FetchStatus.IDLE)
        self.assertEqual(state.items, ())
        self.assertFalse(state.loading)
        self.assertIsNone(state.error)

    async def test_success_replaces_items(self) -> None:
        pepperup = _elixir("1", "Pepperup Potion")

        token = self.orchestrator.submit({"name": "Pepper"})
        await _drain()

        self.assertEqual(token, 1)
        self.assertTrue(self.orchestrator.result.loading)
        self.assertEqual(self.source.calls[0][0], (("Name", "Pepper"),))

        self.source.calls[0][1].set_result([pepperup])
        await _drain()

        state = self.orchestrator.result
        self.assertEqual(state.items, (pepperup,))
        self.assertFalse(state.loading)
        self.assertIsNone(state.error)
        self.assertEqual(state.status, FetchStatus.SUCCESS)
        self.assertEqual(state.token, 1)

    async def test_identical_signature_issues_no_second_request(self) -> None:
        self.orchestrator.submit({"name": "Pepper"})
        await _drain()
        self.assertIsNone(self.orchestrator.submit({"name": " Pepper "}))

        self.source.calls[0][1].set_result([])
        await _drain()
        self.assertIsNone(self.orchestrator.submit({"name": "Pepper"}))

        self.assertEqual(len(self.source.calls), 1)
        self.assertEqual(self.orchestrator.current_token, 1)

    async def test_stale_completion_leaves_state_unchanged(self) -> None:
        result_b = _elixir("b", "Draught B")
        result_a = _elixir("a", "Draught A")

        token_a = self.orchestrator.submit({"name": "A"})
        await _drain()
        token_b = self.orchestrator.submit({"name": "B"})
        await _drain()
        self.assertNotEqual(token_a, token_b)

        self.source.calls[1][1].set_result([result_b])
        await _drain()
        after_b = self.orchestrator.result
        notifications = len(self.states)

        self.source.calls[0][1].set_result([result_a])
        await _drain()

        self.assertIs(self.orchestrator.result, after_b)
        self.assertEqual(self.orchestrator.result.items, (result_b,))
        self.assertEqual(len(self.states), notifications)

    async def test_stale_failure_is_discarded(self) -> None:
        self.orchestrator.submit({"name": "A"})
        await _drain()
        self.orchestrator.submit({"name": "B"})
        await _drain()

        self.source.calls[0][1].set_exception(TransportError("Failed to fetch elixirs", status_code=500))
        await _drain()

        state = self.orchestrator.result
        self.assertTrue(state.loading)
        self.assertIsNone(state.error)
        self.assertEqual(state.status, FetchStatus.LOADING)

    async def test_loading_keeps_previous_items_and_clears_error(self) -> None:
        first = _elixir("1", "First")
        self.orchestrator.submit({"name": "one"})
        await _drain()
        self.source.calls[0][1].set_result([first])
        await _drain()

        self.orchestrator.submit({"name": "two"})
        await _drain()
        self.source.calls[1][1].set_exception(TransportError("Failed to fetch elixirs", status_code=503))
        await _drain()

        self.orchestrator.submit({"name": "three"})

        state = self.orchestrator.result
        self.assertTrue(state.loading)
        self.assertIsNone(state.error)
        self.assertEqual(state.items, (first,))

    async def test_transport_failure_retains_items(self) -> None:
        first = _elixir("1", "First")
        self.orchestrator.submit({})
        await _drain()
        self.source.calls[0][1].set_result([first])
        await _drain()

        self.orchestrator.submit({"difficulty": "Advanced"})
        await _drain()
        self.source.calls[1][1].set_exception(TransportError("Failed to fetch elixirs", status_code=500))
        await _drain()

        state = self.orchestrator.result
        self.assertEqual(state.status, FetchStatus.FAILURE)
        self.assertEqual(state.error, "Failed to fetch elixirs")
        self.assertFalse(state.loading)
        self.assertEqual(state.items, (first,))

    async def test_parse_failure_is_reported_like_transport_failure(self) -> None:
        self.orchestrator.submit({})
        await _drain()
        self.source.calls[0][1].set_exception(ParseError("Malformed elixirs response"))
        await _drain()

        state = self.orchestrator.result
        self.assertEqual(state.status, FetchStatus.FAILURE)
        self.assertEqual(state.error, "Malformed elixirs response")

    async def test_unexpected_exception_is_scoped_to_request(self) -> None:
        self.orchestrator.submit({})
        await _drain()
        with self.assertLogs("ElixirFinder", level="ERROR"):
            self.source.calls[0][1].set_exception(KeyError("boom"))
            await _drain()

        state = self.orchestrator.result
        self.assertEqual(state.status, FetchStatus.FAILURE)
        self.assertEqual(state.error, UNEXPECTED_ERROR_MESSAGE)

    async def test_failed_query_is_not_resubmitted_until_it_changes(self) -> None:
        self.orchestrator.submit({"name": "Pepper"})
        await _drain()
        self.source.calls[0][1].set_exception(TransportError("Failed to fetch elixirs", status_code=500))
        await _drain()

        self.assertIsNone(self.orchestrator.submit({"name": "Pepper "}))
        await _drain()
        self.assertEqual(len(self.source.calls), 1)
        self.assertEqual(self.orchestrator.result.status, FetchStatus.FAILURE)

        token = self.orchestrator.submit({"name": "Pepperup"})
        await _drain()

        self.assertEqual(token, 2)
        self.assertEqual(len(self.source.calls), 2)
        self.assertEqual(self.source.calls[1][0], (("Name", "Pepperup"),))
        self.assertTrue(self.orchestrator.result.loading)

    async def test_wait_idle_returns_after_current_request(self) -> None:
        self.orchestrator.submit({"name": "A"})
        await _drain()
        self.orchestrator.submit({"name": "B"})
        await _drain()

        waiter = asyncio.ensure_future(self.orchestrator.wait_idle())
        await _drain()
        self.assertFalse(waiter.done())

        self.source.calls[1][1].set_result([])
        await asyncio.wait_for(waiter, timeout=1)
        self.assertEqual(self.orchestrator.result.status, FetchStatus.SUCCESS)

    async def test_close_discards_outstanding_requests(self) -> None:
        self.orchestrator.submit({"name": "A"})
        await _drain()

        await self.orchestrator.aclose()

        self.assertTrue(self.source.calls[0][1].cancelled())
        self.assertTrue(self.orchestrator.result.loading)
        with self.assertRaises(RuntimeError):
            self.orchestrator.submit({"name": "B"})


class TestClearItemsOnError(unittest.IsolatedAsyncioTestCase):
    async def test_failure_clears_items_when_configured(self) -> None:
        source = _GatedSource()
        orchestrator = FetchOrchestrator(source, clear_items_on_error=True)

        orchestrator.submit({})
        await _drain()
        source.calls[0][1].set_result([_elixir("1", "First")])
        await _drain()
        orchestrator.submit({"name": "x"})
        await _drain()
        source.calls[1][1].set_exception(TransportError("Failed to fetch elixirs", status_code=500))
        await _drain()

        state = orchestrator.result
        self.assertEqual(state.items, ())
        self.assertEqual(state.error, "Failed to fetch elixirs")
        await orchestrator.aclose()


if __name__ == "__main__":
    unittest.main()
