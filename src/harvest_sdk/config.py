from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .request_builder import DEFAULT_USER_AGENT

DEFAULT_BASE_URL = "https://api.harvestapp.com/v2"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class HarvestSettings:
    access_token: str
    account_id: str
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _get_float_env(name: str, default: float) -> float:
    """Parse a float environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _get_str_env(name: str, default: Optional[str] = None) -> str:
    raw = os.getenv(name, "").strip()
    return raw or (default or "")


def load_env_config(*, use_dotenv: bool = True) -> HarvestSettings:
    """Load Harvest settings from the environment (optionally seeded from .env)."""
    if use_dotenv:
        load_dotenv()
    return HarvestSettings(
        access_token=_get_str_env("HARVEST_ACCESS_TOKEN"),
        account_id=_get_str_env("HARVEST_ACCOUNT_ID"),
        base_url=_get_str_env("HARVEST_BASE_URL", DEFAULT_BASE_URL),
        user_agent=_get_str_env("HARVEST_USER_AGENT", DEFAULT_USER_AGENT),
        timeout_seconds=_get_float_env(
            "HARVEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
        ),
    )


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "HarvestSettings",
    "load_env_config",
]
