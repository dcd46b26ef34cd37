"""Database settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PoolSettings:
    size: int = 5
    max_overflow: int = 10
    recycle_seconds: int = 1800


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def pool_settings() -> PoolSettings:
    """
    Connection pool sizing.

    Env vars (all optional):
        PHONE_QUOTE_DB_POOL_SIZE, PHONE_QUOTE_DB_MAX_OVERFLOW, PHONE_QUOTE_DB_POOL_RECYCLE

    Raises:
        RuntimeError: If a value is set but is not a non-negative integer
    """
    defaults = PoolSettings()
    return PoolSettings(
        size=_int_env("PHONE_QUOTE_DB_POOL_SIZE", defaults.size),
        max_overflow=_int_env("PHONE_QUOTE_DB_MAX_OVERFLOW", defaults.max_overflow),
        recycle_seconds=_int_env("PHONE_QUOTE_DB_POOL_RECYCLE", defaults.recycle_seconds),
    )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise RuntimeError(f"{name} must be >= 0, got {value}")
    return value
