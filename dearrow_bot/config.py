"""Configuration loading and environment setup."""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .utils.env import get_bool, get_int, get_str
from .utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_BASE = "https://sponsor.ajay.app"
DEFAULT_THUMB_API_BASE = "https://dearrow-thumb.ajay.app"


class ThumbnailMode(Enum):
    """Whether, and which, community thumbnails are attached to replies."""

    DISABLED = "disabled"
    ENABLED = "enabled"
    ONLY_LOCKED = "only-locked"

    @classmethod
    def parse(cls, raw: str) -> "ThumbnailMode":
        """Parse a mode name, tolerating case and `_`/`-` spelling variants."""
        key = (raw or "").strip().lower().replace("_", "-")
        if key == "onlylocked":
            key = "only-locked"
        for mode in cls:
            if mode.value == key:
                return mode
        choices = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Invalid thumbnail mode '{raw}' (expected one of: {choices})")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BotConfig:
    """Process-wide settings, fixed at startup and never mutated afterwards."""

    discord_token: str
    thumbnail_mode: ThumbnailMode = ThumbnailMode.ENABLED
    remove_original_embed: bool = False
    skip_recapitalized_titles: bool = False
    api_base: str = DEFAULT_API_BASE
    thumb_api_base: str = DEFAULT_THUMB_API_BASE
    http_connect_timeout_ms: int = 1500
    http_read_timeout_ms: int = 5000
    http2_enable: bool = True
    log_level: str = "INFO"

    def with_overrides(self, **changes: Any) -> "BotConfig":
        """Return a copy with the non-None overrides applied (used for CLI flags)."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self

    def redacted(self) -> Dict[str, Any]:
        """Config as a dict with secrets masked, for display."""
        items = asdict(self)
        items["discord_token"] = "********"
        items["thumbnail_mode"] = str(self.thumbnail_mode)
        return items


def load_env_files() -> None:
    """Load .env from the working directory, then from the project root."""
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")


def load_config(token: Optional[str] = None) -> BotConfig:
    """
    Build the immutable bot configuration from environment variables.

    Raises ConfigurationError when the token is missing or the thumbnail mode
    cannot be parsed.
    """
    token = token or get_str("DISCORD_TOKEN")
    if not token:
        raise ConfigurationError("Missing required environment variable: DISCORD_TOKEN")

    config = BotConfig(
        discord_token=token,
        thumbnail_mode=ThumbnailMode.parse(get_str("THUMBNAIL_MODE", "enabled")),
        remove_original_embed=get_bool("REMOVE_ORIGINAL_EMBED", False),
        skip_recapitalized_titles=get_bool("SKIP_RECAPITALIZED_TITLES", False),
        api_base=get_str("DEARROW_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        thumb_api_base=get_str("DEARROW_THUMB_API_BASE", DEFAULT_THUMB_API_BASE).rstrip("/"),
        http_connect_timeout_ms=get_int("HTTP_CONNECT_TIMEOUT_MS", 1500),
        http_read_timeout_ms=get_int("HTTP_READ_TIMEOUT_MS", 5000),
        http2_enable=get_bool("HTTP2_ENABLE", True),
        log_level=get_str("LOG_LEVEL", "INFO").upper(),
    )

    logger.debug(
        f"✅ Configuration loaded (thumbnail_mode={config.thumbnail_mode}, "
        f"remove_original_embed={config.remove_original_embed})",
        extra={"subsys": "config", "event": "config_loaded"},
    )
    return config
