"""
Environment-backed settings.

The record store settings are read once at startup into an immutable
`StoreConfig` and handed to the `RecordClient`; nothing reads them globally.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_BASE_URL = "https://app.nocodb.com"

# Logical table name -> (env var, default store table id).
TABLE_ENV_DEFAULTS: dict[str, tuple[str, str]] = {
    "accounts": ("ACCOUNTS_TABLE_ID", "mad8fvjhd0ba1bk"),
    "locations": ("LOCATIONS_TABLE_ID", "mfz84cb0t9a84jt"),
    "festivals": ("FESTIVALS_TABLE_ID", "mktzgff8mpu2c32"),
    "items": ("ITEMS_TABLE_ID", "mj77cy6909ll2wc"),
    "objects": ("OBJECTS_TABLE_ID", "mj77cy6909ll2wc"),
    "transactions": ("TRANSACTIONS_TABLE_ID", "md6twc3losjv4j3"),
}


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def allowed_origins() -> list[str]:
    raw = env_str("ALLOWED_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    initial_backoff_s: float = 1.0


@dataclass(frozen=True)
class StoreConfig:
    base_url: str
    api_token: str
    tables: Mapping[str, str]
    timeout_s: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)


def store_config_from_env() -> StoreConfig:
    tables = {
        name: env_str(env_name, default)
        for name, (env_name, default) in TABLE_ENV_DEFAULTS.items()
    }
    return StoreConfig(
        base_url=env_str("NOCODB_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        api_token=env_str("NOCODB_API_TOKEN"),
        tables=MappingProxyType(tables),
    )
