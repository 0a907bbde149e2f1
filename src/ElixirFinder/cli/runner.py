"""Command runner for coordinating CLI execution.

Manages logging configuration, the event loop, filter view lifecycle and
error handling for command execution.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Coroutine, Mapping, TextIO

import click

from ElixirFinder.cli.commands import InteractiveCommand, SearchCommand
from ElixirFinder.config import AppConfig
from ElixirFinder.core.models import ResultState
from ElixirFinder.services import create_filter_view
from ElixirFinder.services.view import FilterView
from ElixirFinder.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, filter view creation and teardown, and
    error handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_search(self, action: str, filters: Mapping[str, str]) -> ResultState:
        """Execute a one-shot filtered search.

        Args:
            action: The CLI command name (e.g., 'search').
            filters: Filter key to raw value.

        Raises:
            click.Abort: When the command crashes.
        """
        return self._run(
            action,
            lambda view: SearchCommand(view=view, filters=filters, echo=click.echo).execute(),
        )

    def run_interactive(self, action: str, stream: TextIO) -> ResultState:
        """Execute the interactive filter session reading ``stream``.

        Raises:
            click.Abort: When the command crashes.
        """
        return self._run(
            action,
            lambda view: InteractiveCommand(view=view, stream=stream, echo=click.echo).execute(),
        )

    def _run(
        self,
        action: str,
        command: Callable[[FilterView], Coroutine[None, None, ResultState]],
    ) -> ResultState:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        log.debug("Using elixirs endpoint: %s", self.config.api.base_url)
        try:
            return asyncio.run(self._session(command))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e

    async def _session(
        self,
        command: Callable[[FilterView], Coroutine[None, None, ResultState]],
    ) -> ResultState:
        view = create_filter_view(self.config)
        try:
            return await command(view)
        finally:
            await view.aclose()
