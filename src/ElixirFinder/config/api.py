"""Remote API domain configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from ElixirFinder.config.common import (
    check_http_url,
    expect_float,
    expect_str,
    get_optional_value,
    get_section,
)

DEFAULT_BASE_URL_ENV = "ELIXIRS_API_URL"


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Store the validated collection endpoint settings.

    Attributes:
        base_url: Effective service root. The ``base_url_env`` variable wins
            over the configured value when it is set.
        base_url_env: Environment variable consulted for the base URL.
        timeout: Request timeout in seconds.
    """

    base_url: str
    base_url_env: str
    timeout: float


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load api domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "api", required=True)
    base_url_env = expect_str(
        get_optional_value(section, "base_url_env", DEFAULT_BASE_URL_ENV),
        "api.base_url_env",
    )
    configured = expect_str(get_optional_value(section, "base_url", ""), "api.base_url")
    return ApiConfig(
        base_url=_load_base_url_from_env(base_url_env) or configured.strip(),
        base_url_env=base_url_env,
        timeout=expect_float(get_optional_value(section, "timeout", 30), "api.timeout"),
    )


def check_api(config: ApiConfig) -> None:
    """Validate api domain constraints.

    Raises:
        ValueError: If values violate api constraints.
    """
    if not config.base_url:
        raise ValueError(
            f"api.base_url is empty and {config.base_url_env} is not set. "
            "Set it in your config, .env file or shell environment."
        )
    check_http_url(config.base_url, "api.base_url")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")


def _load_base_url_from_env(base_url_env: str) -> str:
    """Load base URL from environment variable."""
    if not base_url_env.strip():
        return ""
    return os.getenv(base_url_env, "").strip()
