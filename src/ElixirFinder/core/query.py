"""Query builder: settled filters to remote query parameters."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlencode

from ElixirFinder.core.filters import FILTER_KEYS

Query = tuple[tuple[str, str], ...]

ELIXIRS_PATH = "/Elixirs"

_FIELD_TO_PARAM: dict[str, str] = {
    "name": "Name",
    "difficulty": "Difficulty",
    "ingredient": "Ingredient",
    "inventorFullName": "InventorFullName",
    "manufacturer": "Manufacturer",
}


def build_query(settled: Mapping[str, str]) -> Query:
    """Compile settled filter values into remote query parameters.

    Fields are emitted in declaration order and renamed to the remote casing.
    Fields whose trimmed value is empty are dropped. Values are not escaped;
    the transport encodes them exactly once.

    Args:
        settled: Mapping of filter key to settled raw value.

    Returns:
        Ordered ``(param, value)`` pairs.
    """
    pairs: list[tuple[str, str]] = []
    for key in FILTER_KEYS:
        value = str(settled.get(key, "") or "").strip()
        if value:
            pairs.append((_FIELD_TO_PARAM[key], value))
    return tuple(pairs)


def query_signature(query: Query) -> str:
    """Return the canonical comparison string of a query (unescaped)."""
    return "&".join(f"{param}={value}" for param, value in query)


def build_url(base_url: str, query: Query) -> str:
    """Return the encoded request URL, mainly for logs and display."""
    url = f"{base_url.rstrip('/')}{ELIXIRS_PATH}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url
