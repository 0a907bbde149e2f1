"""Elixirs API client.

Issues a single GET against the collection endpoint. Failed requests are not
retried here; a retry is always a new user-driven settle.
"""

from __future__ import annotations

from typing import Any

import requests

from ElixirFinder.core.errors import ParseError, TransportError
from ElixirFinder.core.query import ELIXIRS_PATH, Query, build_url
from ElixirFinder.utils.log import log

DEFAULT_TIMEOUT = 30.0
FETCH_FAILED_MESSAGE = "Failed to fetch elixirs"

HEADERS = {
    "User-Agent": "elixir-finder/0.1",
    "Accept": "application/json",
}


class ElixirApiClient:
    """Low-level HTTP client for the Elixirs collection endpoint.

    Responsible only for the request and JSON decoding; mapping payload
    objects to ``Elixir`` happens in the parser.

    Args:
        base_url: Service root, e.g. ``https://wizard-world-api.herokuapp.com``.
        timeout: Default request timeout in seconds.
    """

    def __init__(self, base_url: str, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> ElixirApiClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def fetch_elixirs(self, *, query: Query, timeout: float | None = None) -> list[Any]:
        """Fetch the elixir list matching ``query``.

        Args:
            query: Ordered ``(param, value)`` pairs; encoded once by requests.
            timeout: Optional request timeout override in seconds.

        Returns:
            Decoded JSON array.

        Raises:
            TransportError: On network failure or a non-2xx status.
            ParseError: If the body is not a JSON array.
        """
        url = f"{self.base_url}{ELIXIRS_PATH}"
        display_url = build_url(self.base_url, query)
        log.debug("Elixirs request: url=%s", display_url)
        try:
            resp = self._session.get(
                url,
                params=list(query),
                headers=HEADERS,
                timeout=timeout or self.timeout,
            )
        except requests.exceptions.RequestException as e:
            log.debug("Elixirs request failed: url=%s error=%s", display_url, e)
            raise TransportError(FETCH_FAILED_MESSAGE) from e

        if not resp.ok:
            log.debug("Elixirs response not ok: status=%s url=%s", resp.status_code, resp.url)
            raise TransportError(FETCH_FAILED_MESSAGE, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ParseError("Malformed elixirs response") from e
        if not isinstance(payload, list):
            raise ParseError("Elixirs response must be a JSON array")
        log.debug("Elixirs response ok: status=%s count=%d", resp.status_code, len(payload))
        return payload
