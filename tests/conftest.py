"""
Shared pytest fixtures for the de-clickbait bot tests.
"""

from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from dearrow_bot.config import BotConfig, ThumbnailMode


@pytest.fixture
def make_config():
    def _make(**overrides) -> BotConfig:
        values = {"discord_token": "test-token", "thumbnail_mode": ThumbnailMode.ENABLED}
        values.update(overrides)
        return BotConfig(**values)

    return _make


@pytest.fixture
def make_message():
    """Mock discord.Message with an AsyncMock channel.send and edit."""

    def _make(content: str, message_id: int = 1001, embeds: Optional[list] = None):
        channel = MagicMock(spec=discord.TextChannel)
        channel.send = AsyncMock(return_value=MagicMock(spec=discord.Message))

        author = MagicMock()
        author.id = 777
        author.bot = False

        message = MagicMock(spec=discord.Message)
        message.id = message_id
        message.content = content
        message.clean_content = content
        message.author = author
        message.channel = channel
        message.guild = None
        message.embeds = [] if embeds is None else embeds
        message.edit = AsyncMock()
        return message

    return _make
