"""Command implementations for ElixirFinder CLI.

Each command drives one ``FilterView`` session, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Mapping, TextIO

from ElixirFinder.core.filters import FILTER_KEYS
from ElixirFinder.core.models import ResultState
from ElixirFinder.renderers.console import render_result
from ElixirFinder.services.view import FilterView
from ElixirFinder.utils.log import log

Echo = Callable[[str], None]

INTERACTIVE_HELP = (
    "Commands: <field>=<value>, reset, show, help, quit\n"
    f"Fields: {', '.join(FILTER_KEYS)}"
)


@dataclass(slots=True)
class SearchCommand:
    """Run a single filtered search through the debounced pipeline."""

    view: FilterView
    filters: Mapping[str, str]
    echo: Echo

    async def execute(self) -> ResultState:
        """Apply the filters, wait for the settle and the request, print the result.

        Returns:
            Final result state.
        """
        edits = {key: value for key, value in self.filters.items() if value}
        if edits:
            for key, value in edits.items():
                self.view.set_field(key, value)
        else:
            self.view.start()
        state = await self.view.wait_idle()
        log.debug("Search finished: status=%s items=%d", state.status.value, len(state.items))
        self.echo(render_result(state).rstrip("\n"))
        return state


@dataclass(slots=True)
class InteractiveCommand:
    """Line-driven session that edits filters while requests run.

    Input lines are ``<field>=<value>``, ``reset``, ``show``, ``help`` or
    ``quit``. Each completed request prints the new result.
    """

    view: FilterView
    stream: TextIO
    echo: Echo

    async def execute(self) -> ResultState:
        """Read commands until ``quit`` or end of input.

        Returns:
            Result state after the last pending request finished.
        """
        unsubscribe = self.view.subscribe(self._on_result)
        try:
            self.view.start()
            while True:
                line = await asyncio.to_thread(self.stream.readline)
                if not line:
                    break
                if not self._handle_line(line.strip()):
                    break
            return await self.view.wait_idle()
        finally:
            unsubscribe()

    def _handle_line(self, line: str) -> bool:
        if not line:
            return True
        if line in {"quit", "exit"}:
            return False
        if line == "reset":
            self.view.reset()
        elif line == "show":
            self.echo(_format_filters(self.view.filters))
            self.echo(render_result(self.view.result).rstrip("\n"))
        elif line == "help":
            self.echo(INTERACTIVE_HELP)
        elif "=" in line:
            key, _, value = line.partition("=")
            try:
                self.view.set_field(key.strip(), value)
            except KeyError:
                self.echo(f"Unknown field: {key.strip()}")
        else:
            self.echo(f"Unrecognized input: {line}")
        return True

    def _on_result(self, state: ResultState) -> None:
        if not state.loading:
            self.echo(render_result(state).rstrip("\n"))


def _format_filters(filters: Mapping[str, str]) -> str:
    parts = [f"{key}={value!r}" for key, value in filters.items()]
    return "Filters: " + ", ".join(parts)
