"""
Per-message de-clickbait pipeline.

extract video ID -> select branding -> compose reply -> send -> (optionally)
suppress the original preview. Each stage can end the flow early; nothing is
shared between messages except the read-only BotConfig.
"""

from __future__ import annotations

from typing import Optional

import discord

from .action import BotAction
from .composer import compose_reply
from .config import BotConfig, ThumbnailMode
from .link_extractor import extract_video_id
from .preview import PreviewSuppressor
from .selection import BrandingSource, Selection, select_branding
from .utils.logging import get_logger

logger = get_logger(__name__)


class DeclickbaitPipeline:
    def __init__(self, config: BotConfig, api: BrandingSource, suppressor: PreviewSuppressor):
        self.config = config
        self.api = api
        self.suppressor = suppressor

    def should_suppress_preview(self, selection: Selection) -> bool:
        return (
            self.config.thumbnail_mode is not ThumbnailMode.DISABLED
            and selection.has_thumbnail
            and self.config.remove_original_embed
        )

    async def send_reply(self, message: discord.Message, action: BotAction) -> Optional[discord.Message]:
        """Send `action` as a reply to `message`. Returns None if Discord rejected it."""
        try:
            return await message.channel.send(reference=message, **action.send_kwargs())
        except discord.HTTPException as e:
            logger.error(
                f"could not send message: {e}",
                extra={
                    "subsys": "pipeline",
                    "event": "reply.send_failed",
                    "msg_id": message.id,
                    "guild_id": getattr(message.guild, "id", None),
                },
            )
            return None

    async def handle(self, message: discord.Message) -> Optional[discord.Message]:
        """Process one message end to end. Returns the sent reply, if any."""
        video_id = extract_video_id(message.clean_content)
        if video_id is None:
            return None

        logger.info(
            f"de-clickbaiting {video_id}!",
            extra={"subsys": "pipeline", "event": "pipeline.start", "msg_id": message.id},
        )

        selection = await select_branding(
            video_id,
            self.api,
            self.config.thumbnail_mode,
            skip_recapitalized=self.config.skip_recapitalized_titles,
        )
        if selection is None:
            return None

        action = compose_reply(selection)
        logger.info(
            f"Successfully generated de-clickbaited embed for {video_id}!",
            extra={
                "subsys": "pipeline",
                "event": "reply.composed",
                "msg_id": message.id,
                "detail": action.meta,
            },
        )

        sent = await self.send_reply(message, action)
        if sent is None:
            return None

        if self.should_suppress_preview(selection):
            await self.suppressor.suppress(message)

        return sent
