"""
Discord bot main entry point - BOOTSTRAP ONLY
This module should contain NO business logic, only orchestration.
"""
import asyncio
import os
import sys
from typing import NoReturn

import aiohttp
import discord

from dearrow_bot.config import load_config, load_env_files
from dearrow_bot.core.bot import DeArrowBot
from dearrow_bot.core.cli import apply_cli_overrides, parse_arguments, show_version_info, validate_configuration_only
from dearrow_bot.core.startup import create_bot_intents, run_pre_flight_checks
from dearrow_bot.exceptions import ConfigurationError
from dearrow_bot.utils.logging import get_logger, init_logging, shutdown_logging_and_exit


async def main() -> NoReturn:
    """Main bot execution function."""
    load_env_files()
    args = parse_arguments()

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    init_logging()
    logger = get_logger(__name__)

    if args.version:
        show_version_info()
        shutdown_logging_and_exit(0)

    if args.config_check:
        validate_configuration_only(args)
        shutdown_logging_and_exit(0)

    try:
        config = apply_cli_overrides(load_config(), args)
        run_pre_flight_checks(config)
    except ConfigurationError as e:
        logger.critical(f"Configuration error during bot startup: {e}")
        shutdown_logging_and_exit(1)

    bot = DeArrowBot(config=config, intents=create_bot_intents())

    # Gateway login only; per-message API calls are never retried.
    max_retries = 3
    base_delay = 5  # seconds
    async with bot:
        for attempt in range(max_retries):
            try:
                logger.info(f"Connecting to Discord... (Attempt {attempt + 1}/{max_retries})")
                await bot.start(config.discord_token)
                break
            except discord.LoginFailure:
                logger.error("Failed to log in. Please check your Discord token.")
                shutdown_logging_and_exit(1)
            except (discord.HTTPException, aiohttp.ClientConnectorError) as e:
                if attempt == max_retries - 1:
                    logger.error(f"Failed to connect to Discord: {e}")
                    shutdown_logging_and_exit(1)
                delay = base_delay * (2 ** attempt)
                logger.warning(f"Connection failed, retrying in {delay}s...")
                await asyncio.sleep(delay)

    logger.info("Discord connection closed, shutting down.")
    shutdown_logging_and_exit(0)


def run_bot() -> None:
    """Entry point for running the bot with proper error handling."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nBot shutdown requested by user.")
        shutdown_logging_and_exit(0)
    except Exception as e:
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        shutdown_logging_and_exit(1)


if __name__ == "__main__":
    run_bot()
