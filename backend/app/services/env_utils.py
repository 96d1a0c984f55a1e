"""
Helpers for reading configuration out of the environment.
"""

from __future__ import annotations

import os


def sanitize_env_value(raw: str | None, fallback: str = "") -> str:
    """Trim a raw env value and drop wrapping quotes / leaked ``\\n`` escapes."""
    value = (raw if raw is not None else fallback).strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    return value.replace("\\n", "").replace("\\r", "").strip()


def env_str(name: str, fallback: str = "") -> str:
    return sanitize_env_value(os.getenv(name), fallback)


def env_int(name: str, fallback: int) -> int:
    """Read an integer setting; blank or malformed values use ``fallback``."""
    raw = env_str(name)
    try:
        return int(raw)
    except ValueError:
        return fallback
