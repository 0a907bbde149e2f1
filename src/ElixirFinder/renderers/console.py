"""Console text renderers.

Renders a ``ResultState`` into human-friendly text: loading, error, empty
and list states, one block per elixir.
"""

from __future__ import annotations

from typing import Iterable

from ElixirFinder.core.models import Elixir, ResultState

LOADING_TEXT = "Loading elixirs..."
EMPTY_TEXT = "No elixirs found matching your filters."


def render_elixirs(elixirs: Iterable[Elixir]) -> str:
    """Render elixirs into a human-readable text block.

    Args:
        elixirs: Iterable of elixirs.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, elixir in enumerate(elixirs, start=1):
        lines.append(f"{idx}. {elixir.name}")
        if elixir.effect:
            lines.append(f"   {elixir.effect}")
        if elixir.difficulty:
            lines.append(f"   Difficulty: {elixir.difficulty}")
        if elixir.inventor:
            lines.append(f"   Inventor: {elixir.inventor.full_name}")
        if elixir.manufacturer:
            lines.append(f"   Manufacturer: {elixir.manufacturer}")
        if elixir.ingredients:
            lines.append("   Ingredients:")
            lines.extend(f"     - {ingredient.name}" for ingredient in elixir.ingredients)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_result(state: ResultState) -> str:
    """Render the whole result state, mirroring the list view's branches."""
    if state.loading:
        return LOADING_TEXT + "\n"
    if state.error:
        return f"Error loading elixirs: {state.error}\n"
    if not state.items:
        return EMPTY_TEXT + "\n"
    header = f"Elixirs ({len(state.items)})\n\n"
    return header + render_elixirs(state.items)
