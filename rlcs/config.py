"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rlcs.client import BASE_URL, DEFAULT_TIMEOUT
from rlcs.errors import ConfigurationError

TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    api_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from RLCS_API_URL, RLCS_TIMEOUT and RLCS_DEBUG."""
    env = os.environ if environ is None else environ

    raw_timeout = env.get("RLCS_TIMEOUT", "")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"RLCS_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigurationError(f"RLCS_TIMEOUT must be positive, got {raw_timeout!r}")

    return Settings(
        api_url=env.get("RLCS_API_URL") or BASE_URL,
        timeout=timeout,
        debug=env.get("RLCS_DEBUG", "").lower() in TRUTHY,
    )
