"""Elixirs data source adapter.

Composes the HTTP client and the payload parser into an awaitable
``ElixirSource`` used by the fetch orchestrator.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from ElixirFinder.core.models import Elixir
from ElixirFinder.core.query import Query
from ElixirFinder.sources.elixirs.client import ElixirApiClient
from ElixirFinder.sources.elixirs.parser import parse_elixirs


@dataclass(slots=True)
class RemoteElixirSource:
    """``ElixirSource`` backed by the remote collection endpoint.

    The blocking request runs in a worker thread; parsing and the returned
    list are handed back to the caller's event loop.
    """

    client: ElixirApiClient
    name: str = "elixirs"

    async def search(self, query: Query) -> list[Elixir]:
        """Fetch and parse elixirs matching ``query``.

        Raises:
            TransportError: On network failure or a non-2xx status.
            ParseError: On a malformed body.
        """
        payload = await asyncio.to_thread(self.client.fetch_elixirs, query=query)
        return parse_elixirs(payload)

    def close(self) -> None:
        """Close resources held by the source adapter.
        """
        self.client.close()
