"""End-to-end tests for the filter view session over stub sources."""

from __future__ import annotations

import asyncio
import sys
import unittest
from pathlib import Path
from unittest.mock import Mock

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ElixirFinder.core.models import Elixir, FetchStatus
from ElixirFinder.core.query import Query
from ElixirFinder.services.view import FilterView
from ElixirFinder.sources.elixirs.client import ElixirApiClient
from ElixirFinder.sources.elixirs.source import RemoteElixirSource


class _DelayedSource:
    """Source answering each query after a per-query delay."""

    name = "delayed"

    def __init__(self, delays: dict[Query, float] | None = None) -> None:
        self.delays = delays or {}
        self.queries: list[Query] = []
        self.closed = False

    async def search(self, query: Query) -> list[Elixir]:
        self.queries.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        label = "&".join(f"{k}={v}" for k, v in query) or "all"
        return [Elixir(id=label, name=label)]

    def close(self) -> None:
        self.closed = True


class TestFilterView(unittest.IsolatedAsyncioTestCase):
    async def test_start_fetches_unfiltered_collection(self) -> None:
        source = _DelayedSource()
        view = FilterView(source=source, quiet_period_ms=50)

        view.start()
        state = await view.wait_idle()

        self.assertEqual(source.queries, [()])
        self.assertEqual(state.status, FetchStatus.SUCCESS)
        await view.aclose()
        self.assertTrue(source.closed)

    async def test_burst_across_fields_issues_one_request(self) -> None:
        source = _DelayedSource()
        view = FilterView(source=source, quiet_period_ms=100)

        view.set_field("difficulty", "Advanced")
        await asyncio.sleep(0.03)
        view.set_field("name", "X")
        await asyncio.sleep(0.05)
        self.assertEqual(source.queries, [])

        state = await view.wait_idle()

        self.assertEqual(source.queries, [(("Name", "X"), ("Difficulty", "Advanced"))])
        self.assertEqual(state.items[0].name, "Name=X&Difficulty=Advanced")
        await view.aclose()

    async def test_reset_requests_empty_query_without_waiting(self) -> None:
        source = _DelayedSource()
        view = FilterView(source=source, quiet_period_ms=100)
        view.set_field("name", "Pepper")
        await view.wait_idle()
        view.set_field("ingredient", "Newt")

        view.reset()
        await asyncio.sleep(0)

        self.assertEqual(source.queries[-1], ())
        self.assertTrue(view.result.loading)
        self.assertEqual(view.filters["name"], "")
        state = await view.wait_idle()
        self.assertEqual(len(source.queries), 2)
        self.assertEqual(state.items[0].id, "all")
        await view.aclose()

    async def test_slow_superseded_request_cannot_override_newer_result(self) -> None:
        source = _DelayedSource({(("Name", "A"),): 0.4, (("Name", "B"),): 0.05})
        view = FilterView(source=source, quiet_period_ms=20)

        view.set_field("name", "A")
        await asyncio.sleep(0.06)
        self.assertEqual(source.queries, [(("Name", "A"),)])
        view.set_field("name", "B")

        state = await view.wait_idle()
        self.assertEqual(state.items[0].id, "Name=B")

        await asyncio.sleep(0.45)
        self.assertEqual(view.result.items[0].id, "Name=B")
        self.assertEqual(view.result.status, FetchStatus.SUCCESS)
        await view.aclose()


class TestFilterViewOverHttp(unittest.IsolatedAsyncioTestCase):
    async def test_name_filter_round_trip(self) -> None:
        client = ElixirApiClient("https://api.example")
        response = Mock(ok=True, status_code=200, url="https://api.example/Elixirs?Name=Pepper")
        response.json.return_value = [{"id": 1, "name": "Pepperup Potion"}]
        client._session = Mock()
        client._session.get.return_value = response
        view = FilterView(source=RemoteElixirSource(client=client), quiet_period_ms=30)

        view.set_field("name", "Pepper")
        state = await view.wait_idle()

        args, kwargs = client._session.get.call_args
        self.assertEqual(args[0], "https://api.example/Elixirs")
        self.assertEqual(kwargs["params"], [("Name", "Pepper")])
        self.assertEqual(state.items, (Elixir(id="1", name="Pepperup Potion"),))
        self.assertFalse(state.loading)
        self.assertIsNone(state.error)
        await view.aclose()
        client._session.close.assert_called_once()

    async def test_http_500_sets_error(self) -> None:
        client = ElixirApiClient("https://api.example")
        client._session = Mock()
        client._session.get.return_value = Mock(ok=False, status_code=500, url="https://api.example/Elixirs")
        view = FilterView(source=RemoteElixirSource(client=client), quiet_period_ms=30)

        view.start()
        state = await view.wait_idle()

        self.assertEqual(state.status, FetchStatus.FAILURE)
        self.assertTrue(state.error)
        self.assertFalse(state.loading)
        self.assertEqual(state.items, ())
        await view.aclose()


if __name__ == "__main__":
    unittest.main()
