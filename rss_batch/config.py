"""Environment-driven settings."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .batch import DEFAULT_BATCH_DELAY_MS, DEFAULT_BATCH_SIZE
from .fetcher import DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT


def _int_env(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay_ms: int = DEFAULT_BATCH_DELAY_MS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Read settings from the environment, loading a .env file first.
        Variables already set in the environment win over the file.
        """
        load_dotenv(dotenv_path)
        return cls(
            batch_size=_int_env("RSS_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            batch_delay_ms=_int_env("RSS_BATCH_DELAY_MS", DEFAULT_BATCH_DELAY_MS, minimum=0),
            timeout_ms=_int_env("RSS_FETCH_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            user_agent=os.getenv("RSS_USER_AGENT") or DEFAULT_USER_AGENT,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
