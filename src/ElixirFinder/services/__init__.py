"""Service layer for ElixirFinder.

Provides the fetch orchestrator, the filter view session and the factory
that assembles them from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ElixirFinder.services.orchestrator import ElixirSource, FetchOrchestrator
from ElixirFinder.services.view import FilterView

if TYPE_CHECKING:
    from ElixirFinder.config import AppConfig


def create_filter_view(config: AppConfig) -> FilterView:
    """Create a filter view backed by the configured remote endpoint.

    Must be called from a running event loop's thread before ``start``.

    Args:
        config: Application configuration.

    Returns:
        Filter view owning a fresh HTTP client.
    """
    from ElixirFinder.sources.elixirs.client import ElixirApiClient
    from ElixirFinder.sources.elixirs.source import RemoteElixirSource

    source = RemoteElixirSource(
        client=ElixirApiClient(config.api.base_url, timeout=config.api.timeout),
    )
    return FilterView(
        source=source,
        quiet_period_ms=config.filters.quiet_period_ms,
        clear_items_on_error=config.filters.clear_items_on_error,
    )


__all__ = [
    "ElixirSource",
    "FetchOrchestrator",
    "FilterView",
    "create_filter_view",
]
