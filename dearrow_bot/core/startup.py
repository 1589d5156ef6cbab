"""
Contains bot startup and pre-flight check logic.
"""
import hashlib

import discord

from dearrow_bot.config import BotConfig, ThumbnailMode
from dearrow_bot.exceptions import ConfigurationError
from dearrow_bot.utils.logging import get_logger


def create_bot_intents() -> discord.Intents:
    """Intents needed to read guild message text and see message updates."""
    intents = discord.Intents.default()
    intents.guild_messages = True
    intents.message_content = True
    return intents


def run_pre_flight_checks(config: BotConfig) -> None:
    """Validate the token, intents and option combination before connecting."""
    logger = get_logger(__name__)
    logger.info("--- Running Pre-Flight Checklist ---")

    # 1. Bot Token Check
    token = config.discord_token
    if not token:
        logger.critical("DISCORD_TOKEN is missing. Bot cannot start.")
        raise ConfigurationError("DISCORD_TOKEN not found in environment.")
    token_hash = hashlib.sha256(token.encode()).hexdigest()
    logger.info(f"[INIT] Token hash={token_hash[:12]} validated")

    # 2. Intents Check
    intents = create_bot_intents()
    required_intents = {
        "message_content": intents.message_content,
        "guild_messages": intents.guild_messages,
    }
    missing = [name for name, enabled in required_intents.items() if not enabled]
    if missing:
        logger.critical(f"Required intents disabled: {', '.join(missing)}")
    else:
        logger.info("[INIT] Intents verified")

    # 3. Option sanity
    if config.remove_original_embed and config.thumbnail_mode is ThumbnailMode.DISABLED:
        logger.warning(
            "REMOVE_ORIGINAL_EMBED has no effect while THUMBNAIL_MODE=disabled; "
            "previews are only suppressed when a thumbnail is attached."
        )

    logger.info(f"[INIT] Discord.py Version: {discord.__version__}")
    logger.info("--- Pre-Flight Checklist Complete ---")
