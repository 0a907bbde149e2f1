"""CLI package for ElixirFinder command orchestration.

Contains the click interface, the command runner and the command
implementations that drive a filter view session.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from ElixirFinder.cli.runner import CommandRunner
from ElixirFinder.cli.ui import cli


def main() -> None:
    """Run ElixirFinder CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
