# core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


def _int_env(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    api_base: str = "https://api.discogs.com"
    user_agent: str = "discogs-versions-pyside6/0.1"
    per_page: int = 100
    batch_size: int = 5
    batch_delay_s: float = 0.2
    timeout_s: float = 15.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            api_base=(env.get("DISCOGS_API_BASE") or cls.api_base).rstrip("/"),
            user_agent=env.get("DISCOGS_USER_AGENT") or cls.user_agent,
            per_page=_int_env(env, "DISCOGS_PER_PAGE", cls.per_page),
            batch_size=_int_env(env, "DISCOGS_BATCH_SIZE", cls.batch_size),
            batch_delay_s=_int_env(env, "DISCOGS_BATCH_DELAY_MS", 200, minimum=0) / 1000.0,
            timeout_s=_float_env(env, "DISCOGS_TIMEOUT_S", cls.timeout_s),
            log_level=(env.get("DISCOGS_LOG_LEVEL") or cls.log_level).upper(),
        )
