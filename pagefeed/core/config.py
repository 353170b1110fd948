"""Runtime settings, read from ``PAGEFEED_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from pagefeed.core.connectivity import DEFAULT_PROBE_ADDRESS, DEFAULT_PROBE_PORT

DEFAULT_BASE_URL = "https://rickandmortyapi.com/api"
DEFAULT_ITEMS_PATH = "character"


def _env_str(key: str, default: str) -> str:
    value = os.environ.get(key)
    return value if value else default


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


def _env_bool(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Connection and probe settings for one feed session."""

    base_url: str = DEFAULT_BASE_URL
    items_path: str = DEFAULT_ITEMS_PATH
    timeout: float = 30.0
    # IP literal; the route check never resolves names.
    probe_address: str = DEFAULT_PROBE_ADDRESS
    probe_port: int = DEFAULT_PROBE_PORT
    http_log_body: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            base_url=_env_str("PAGEFEED_BASE_URL", DEFAULT_BASE_URL),
            items_path=_env_str("PAGEFEED_ITEMS_PATH", DEFAULT_ITEMS_PATH),
            timeout=_env_float("PAGEFEED_TIMEOUT", 30.0),
            probe_address=_env_str("PAGEFEED_PROBE_ADDRESS", DEFAULT_PROBE_ADDRESS),
            probe_port=_env_int("PAGEFEED_PROBE_PORT", DEFAULT_PROBE_PORT),
            http_log_body=_env_bool("PAGEFEED_HTTP_LOG_BODY", False),
        )
