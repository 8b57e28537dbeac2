from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_json: bool = True
    reverify_reservation: bool = True
    warehouse_capacity: int = 100


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read settings from ``CHECKOUT_*`` environment variables."""
    env = os.environ if env is None else env
    return Settings(
        host=env.get("CHECKOUT_HOST", "0.0.0.0"),
        port=_int(env, "CHECKOUT_PORT", 8000),
        log_level=env.get("CHECKOUT_LOG_LEVEL", "INFO").upper(),
        log_json=_bool(env, "CHECKOUT_LOG_JSON", True),
        reverify_reservation=_bool(env, "CHECKOUT_REVERIFY_RESERVATION", True),
        warehouse_capacity=_int(env, "CHECKOUT_WAREHOUSE_CAPACITY", 100),
    )


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
