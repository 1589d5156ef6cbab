"""
DeArrow De-Clickbait Discord Bot

Watches chat for YouTube links and replies with crowd-sourced replacement
titles and thumbnails from the DeArrow API:
- Trust policy over community votes and lock state
- Optional thumbnail attachment with graceful title-only fallback
- Optional suppression of Discord's own link preview
"""

# Package metadata
__title__ = "DeArrow De-Clickbait Bot"
__version__ = "1.0.0"
__description__ = "Discord bot that de-clickbaits YouTube links via the DeArrow API"
__license__ = "MIT"

# Avoid importing discord at package import time to keep tests lightweight
__all__ = []


def __getattr__(name: str):
    """Lazy loader so `dearrow_bot.DeArrowBot` only pulls in discord.py on demand."""
    if name == "DeArrowBot":
        from .core.bot import DeArrowBot as _DeArrowBot
        return _DeArrowBot
    raise AttributeError(name)
