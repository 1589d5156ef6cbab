"""Discord client for the de-clickbait bot."""

from __future__ import annotations

import asyncio
from typing import Optional

import discord

from dearrow_bot.config import BotConfig
from dearrow_bot.dearrow_api import DeArrowClient
from dearrow_bot.http_client import RequestConfig, SharedHttpClient
from dearrow_bot.pipeline import DeclickbaitPipeline
from dearrow_bot.preview import PreviewSuppressor
from dearrow_bot.utils.logging import get_logger


class DeArrowBot(discord.Client):
    """Bot that answers YouTube links with DeArrow community branding."""

    def __init__(self, *args, config: BotConfig, **kwargs):
        if "intents" not in kwargs:
            kwargs["intents"] = discord.Intents.none()

        super().__init__(*args, **kwargs)
        self.config = config
        self.logger = get_logger(__name__)
        self.http_client = SharedHttpClient(
            RequestConfig(
                connect_timeout=config.http_connect_timeout_ms / 1000,
                read_timeout=config.http_read_timeout_ms / 1000,
            ),
            http2=config.http2_enable,
        )
        self.pipeline: Optional[DeclickbaitPipeline] = None
        self._is_ready = asyncio.Event()

    def build_pipeline(self) -> DeclickbaitPipeline:
        api = DeArrowClient(self.http_client, self.config.api_base, self.config.thumb_api_base)
        return DeclickbaitPipeline(self.config, api, PreviewSuppressor(self))

    async def setup_hook(self) -> None:
        """Asynchronous setup phase for the bot."""
        self.logger.info("🔧 Starting bot setup")
        await self.http_client.start()
        self.pipeline = self.build_pipeline()
        self.logger.info(
            f"✅ Pipeline ready (thumbnail_mode={self.config.thumbnail_mode}, "
            f"remove_original_embed={self.config.remove_original_embed})"
        )

    async def on_ready(self):
        if not self._is_ready.is_set():
            self.logger.info(f"🤖 Logged in as {self.user} (ID: {self.user.id})")
            self._is_ready.set()

    async def on_message(self, message: discord.Message):
        # discord.py runs each handler in its own task, so messages never block each other.
        if message.author == self.user or message.author.bot:
            return
        if not message.content:
            return
        if self.pipeline is None:
            self.logger.warning(f"Pipeline not ready, dropping msg_id:{message.id}")
            return

        await self.pipeline.handle(message)

    async def on_raw_message_edit(self, payload: discord.RawMessageUpdateEvent):
        self.logger.debug(
            "MessageUpdateEvent",
            extra={"subsys": "gateway", "event": "message_update", "msg_id": payload.message_id},
        )

    async def close(self) -> None:
        """Clean up resources before shutdown."""
        self.logger.info("Bot is shutting down...")
        try:
            await self.http_client.stop()
        finally:
            await super().close()
