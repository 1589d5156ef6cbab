"""
Tests for configuration loading, thumbnail mode parsing and CLI overrides.
"""

import pytest

from dearrow_bot.config import BotConfig, ThumbnailMode, load_config
from dearrow_bot.core.cli import apply_cli_overrides, parse_arguments
from dearrow_bot.exceptions import ConfigurationError

CONFIG_ENV_VARS = (
    "DISCORD_TOKEN",
    "THUMBNAIL_MODE",
    "REMOVE_ORIGINAL_EMBED",
    "SKIP_RECAPITALIZED_TITLES",
    "DEARROW_API_BASE",
    "DEARROW_THUMB_API_BASE",
    "HTTP_CONNECT_TIMEOUT_MS",
    "HTTP_READ_TIMEOUT_MS",
    "HTTP2_ENABLE",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestThumbnailMode:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("disabled", ThumbnailMode.DISABLED),
            ("Enabled", ThumbnailMode.ENABLED),
            ("only-locked", ThumbnailMode.ONLY_LOCKED),
            ("ONLY_LOCKED", ThumbnailMode.ONLY_LOCKED),
            ("OnlyLocked", ThumbnailMode.ONLY_LOCKED),
            ("  enabled  ", ThumbnailMode.ENABLED),
        ],
    )
    def test_parse(self, raw, expected):
        assert ThumbnailMode.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", "sometimes", "locked"])
    def test_parse_rejects_unknown(self, raw):
        with pytest.raises(ConfigurationError):
            ThumbnailMode.parse(raw)

    def test_format_round_trips(self):
        for mode in ThumbnailMode:
            assert ThumbnailMode.parse(str(mode)) is mode
        assert str(ThumbnailMode.ONLY_LOCKED) == "only-locked"


class TestLoadConfig:
    def test_defaults(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "abc")
        config = load_config()

        assert config.discord_token == "abc"
        assert config.thumbnail_mode is ThumbnailMode.ENABLED
        assert config.remove_original_embed is False
        assert config.skip_recapitalized_titles is False
        assert config.api_base == "https://sponsor.ajay.app"
        assert config.thumb_api_base == "https://dearrow-thumb.ajay.app"
        assert config.http2_enable is True

    def test_missing_token_raises(self, clean_env):
        with pytest.raises(ConfigurationError):
            load_config()

    def test_env_values(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "abc")
        clean_env.setenv("THUMBNAIL_MODE", "only-locked  # strict mode")
        clean_env.setenv("REMOVE_ORIGINAL_EMBED", "yes")
        clean_env.setenv("DEARROW_API_BASE", "http://localhost:8080/")
        clean_env.setenv("HTTP_READ_TIMEOUT_MS", "not-a-number")

        config = load_config()

        assert config.thumbnail_mode is ThumbnailMode.ONLY_LOCKED
        assert config.remove_original_embed is True
        assert config.api_base == "http://localhost:8080"
        assert config.http_read_timeout_ms == 5000

    def test_invalid_mode_raises(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "abc")
        clean_env.setenv("THUMBNAIL_MODE", "maybe")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_config_is_immutable(self):
        config = BotConfig(discord_token="abc")
        with pytest.raises(AttributeError):
            config.thumbnail_mode = ThumbnailMode.DISABLED

    def test_redacted_hides_token(self):
        shown = BotConfig(discord_token="super-secret").redacted()
        assert shown["discord_token"] == "********"
        assert shown["thumbnail_mode"] == "enabled"


class TestCliOverrides:
    def test_no_flags_keep_env_values(self):
        config = BotConfig(discord_token="abc", remove_original_embed=True)
        assert apply_cli_overrides(config, parse_arguments([])) == config

    def test_flags_override_env_values(self):
        config = BotConfig(discord_token="abc")
        args = parse_arguments(["--thumbnail-mode", "disabled", "--remove-original"])

        updated = apply_cli_overrides(config, args)

        assert updated.thumbnail_mode is ThumbnailMode.DISABLED
        assert updated.remove_original_embed is True
        assert config.thumbnail_mode is ThumbnailMode.ENABLED

    def test_keep_original_flag(self):
        config = BotConfig(discord_token="abc", remove_original_embed=True)
        updated = apply_cli_overrides(config, parse_arguments(["--keep-original"]))
        assert updated.remove_original_embed is False

    def test_bad_mode_is_a_usage_error(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--thumbnail-mode", "sideways"])
