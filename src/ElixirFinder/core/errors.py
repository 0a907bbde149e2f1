"""Request-scoped failures raised by the Elixir source."""

from __future__ import annotations


class FetchError(RuntimeError):
    """Base error for a single failed request.

    Fetch errors never outlive the settle cycle that produced them; the
    orchestrator turns them into a ``FAILURE`` result state.
    """


class TransportError(FetchError):
    """Network failure or non-2xx response.

    Attributes:
        status_code: HTTP status when a response was received, else None.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(FetchError):
    """Response body is not a JSON array of elixir objects."""
