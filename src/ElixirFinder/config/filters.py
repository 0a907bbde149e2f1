"""Filter pipeline domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ElixirFinder.config.common import (
    expect_bool,
    expect_int,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class FiltersConfig:
    """Store validated debounce and result policy settings."""

    quiet_period_ms: int = 500
    clear_items_on_error: bool = False


def load_filters(raw: Mapping[str, Any]) -> FiltersConfig:
    """Load the optional ``filters`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "filters", required=False)
    return FiltersConfig(
        quiet_period_ms=expect_int(
            get_optional_value(section, "quiet_period_ms", 500),
            "filters.quiet_period_ms",
        ),
        clear_items_on_error=expect_bool(
            get_optional_value(section, "clear_items_on_error", False),
            "filters.clear_items_on_error",
        ),
    )


def check_filters(config: FiltersConfig) -> None:
    """Validate filters domain constraints.

    Raises:
        ValueError: If the quiet period is negative.
    """
    if config.quiet_period_ms < 0:
        raise ValueError("filters.quiet_period_ms must be >= 0")
