"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from ElixirFinder.cli.runner import CommandRunner
from ElixirFinder.config import DEFAULT_CONFIG_PATH, load_config
from ElixirFinder.core.filters import DIFFICULTY_CHOICES


@click.group(help="ElixirFinder: filter the elixirs collection from the terminal.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("search")
@click.option("--name", default="", help="Filter by name.")
@click.option(
    "--difficulty",
    default="",
    help=f"Filter by difficulty ({', '.join(DIFFICULTY_CHOICES)}).",
)
@click.option("--ingredient", default="", help="Filter by ingredient.")
@click.option("--inventor", "inventor_full_name", default="", help="Filter by inventor full name.")
@click.option("--manufacturer", default="", help="Filter by manufacturer.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    name: str,
    difficulty: str,
    ingredient: str,
    inventor_full_name: str,
    manufacturer: str,
) -> None:
    """Search elixirs once and print the list.

    Raises:
        click.Abort: When the search crashes.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_search(
        action=ctx.command.name,
        filters={
            "name": name,
            "difficulty": difficulty,
            "ingredient": ingredient,
            "inventorFullName": inventor_full_name,
            "manufacturer": manufacturer,
        },
    )


@cli.command("interactive")
@click.pass_context
def interactive_cmd(ctx: click.Context) -> None:
    """Edit filters line by line; results print as requests complete.

    Raises:
        click.Abort: When the session crashes.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_interactive(action=ctx.command.name, stream=click.get_text_stream("stdin"))
