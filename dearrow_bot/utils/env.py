"""Environment parsing helpers for consistent boolean/numeric handling."""
from __future__ import annotations

import os
from typing import Optional


def _clean(raw: Optional[str]) -> Optional[str]:
    """Strip inline `# comments` that .env files commonly carry."""
    if raw is None:
        return None
    return raw.split("#")[0].strip()


def get_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = _clean(os.getenv(name))
    if not raw:
        return default
    return raw


def get_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean env var with common truthy values."""
    raw = _clean(os.getenv(name))
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def get_int(name: str, default: int) -> int:
    raw = _clean(os.getenv(name))
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
