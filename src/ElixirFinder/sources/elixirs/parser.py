"""Elixirs payload parser."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ElixirFinder.core.models import Elixir, Ingredient, Inventor
from ElixirFinder.utils.log import log

_MAPPED_KEYS = frozenset(
    {"id", "name", "effect", "difficulty", "inventor", "manufacturer", "ingredients"}
)


def parse_elixirs(items: Sequence[Any]) -> list[Elixir]:
    """Parse elixir payload objects into ``Elixir`` models.

    Entries that are not objects or carry no ``id`` are skipped with a
    warning; the rest of the list is kept.

    Args:
        items: Decoded JSON array.

    Returns:
        Elixirs in payload order.
    """
    elixirs: list[Elixir] = []
    for idx, item in enumerate(items):
        if not isinstance(item, Mapping):
            log.warning("Skipping elixir entry %d: not an object", idx)
            continue
        raw_id = item.get("id")
        if raw_id is None or _safe_str(raw_id) == "":
            log.warning("Skipping elixir entry %d: no id", idx)
            continue

        elixirs.append(
            Elixir(
                id=_safe_str(raw_id),
                name=_safe_str(item.get("name")),
                effect=_optional_str(item.get("effect")),
                difficulty=_optional_str(item.get("difficulty")),
                inventor=_extract_inventor(item.get("inventor")),
                manufacturer=_optional_str(item.get("manufacturer")),
                ingredients=_extract_ingredients(item.get("ingredients")),
                extra={k: v for k, v in item.items() if k not in _MAPPED_KEYS},
            )
        )
    return elixirs


def _extract_inventor(raw: Any) -> Inventor | None:
    """Return the inventor when it carries a full name."""
    if not isinstance(raw, Mapping):
        return None
    full_name = _safe_str(raw.get("fullName"))
    return Inventor(full_name=full_name) if full_name else None


def _extract_ingredients(raw: Any) -> tuple[Ingredient, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[Ingredient] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            name = _safe_str(entry.get("name"))
            if name:
                out.append(Ingredient(name=name))
    return tuple(out)


def _optional_str(value: Any) -> str | None:
    text = _safe_str(value)
    return text or None


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
