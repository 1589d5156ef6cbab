"""
Handles command-line interface parsing and actions.
"""
import argparse
import sys
from typing import List, Optional

from dearrow_bot import __version__
from dearrow_bot.config import BotConfig, ThumbnailMode, load_config
from dearrow_bot.exceptions import ConfigurationError
from dearrow_bot.utils.logging import get_logger


def _thumbnail_mode_arg(raw: str) -> ThumbnailMode:
    try:
        return ThumbnailMode.parse(raw)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="DeArrow De-Clickbait Discord Bot")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--config-check", action="store_true", help="Validate configuration and exit.")
    parser.add_argument("--version", action="store_true", help="Show version info and exit.")
    parser.add_argument(
        "--thumbnail-mode",
        type=_thumbnail_mode_arg,
        default=None,
        metavar="{disabled,enabled,only-locked}",
        help="Override THUMBNAIL_MODE.",
    )
    removal = parser.add_mutually_exclusive_group()
    removal.add_argument(
        "--remove-original",
        dest="remove_original",
        action="store_true",
        default=None,
        help="Suppress Discord's own preview on messages we reply to.",
    )
    removal.add_argument(
        "--keep-original",
        dest="remove_original",
        action="store_false",
        help="Leave Discord's own preview in place.",
    )
    return parser.parse_args(argv)


def apply_cli_overrides(config: BotConfig, args: argparse.Namespace) -> BotConfig:
    """CLI flags win over environment values."""
    return config.with_overrides(
        thumbnail_mode=args.thumbnail_mode,
        remove_original_embed=args.remove_original,
    )


def show_version_info() -> None:
    """Display version and system information."""
    print(f"DeArrow De-Clickbait Bot - Version {__version__}")
    print(f"Python Version: {sys.version}")


def validate_configuration_only(args: argparse.Namespace) -> None:
    """Validate configuration and exit."""
    logger = get_logger(__name__)
    try:
        logger.info("--- Running Configuration-Only Validation ---", extra={"subsys": "core", "event": "config_check_start"})
        config = apply_cli_overrides(load_config(), args)
        logger.info("Configuration validation successful. The following settings are active:", extra={"subsys": "core", "event": "config_valid_start"})
        for key, value in config.redacted().items():
            logger.info(f"  • {key}: {value}", extra={"subsys": "core", "event": "config_valid"})
    except ConfigurationError as e:
        logger.critical(f"Configuration error: {e}", extra={"subsys": "core", "event": "config_fail"})
        sys.exit(1)
