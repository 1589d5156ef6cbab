"""
Suppression of Discord's own link preview on the original message.

Discord renders its preview embed asynchronously after a message is posted
and announces it with a MESSAGE_UPDATE. Suppressing before the preview
exists has no effect, so when the message has no embeds yet we wait (bounded)
for that update before issuing the suppress edit.
"""

from __future__ import annotations

import asyncio

import discord

from .utils.logging import get_logger

logger = get_logger(__name__)

PREVIEW_WAIT_TIMEOUT_S = 5.0


class PreviewSuppressor:
    """Waits for the platform preview to render, then suppresses it."""

    def __init__(self, client: discord.Client, timeout: float = PREVIEW_WAIT_TIMEOUT_S):
        self.client = client
        self.timeout = timeout

    async def wait_for_preview(self, message: discord.Message) -> bool:
        """Wait for a message-update event on `message`. Returns False on timeout."""
        message_id = message.id

        def check(payload: discord.RawMessageUpdateEvent) -> bool:
            return payload.message_id == message_id

        try:
            await self.client.wait_for("raw_message_edit", check=check, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.info(
                f"no preview rendered within {self.timeout:.1f}s, suppressing anyway",
                extra={"subsys": "preview", "event": "preview.wait_timeout", "msg_id": message_id},
            )
            return False
        return True

    async def suppress(self, message: discord.Message) -> bool:
        """Suppress the preview on `message`. Edit failures are logged, never raised."""
        if not message.embeds:
            logger.info(
                "waiting for discord to embed the video!",
                extra={"subsys": "preview", "event": "preview.wait", "msg_id": message.id},
            )
            await self.wait_for_preview(message)

        logger.info(
            "editing message to remove original embed!",
            extra={"subsys": "preview", "event": "preview.suppress", "msg_id": message.id},
        )
        try:
            await message.edit(suppress=True)
        except discord.HTTPException as e:
            logger.error(
                f"unable to edit sent message: {e}",
                extra={"subsys": "preview", "event": "preview.edit_failed", "msg_id": message.id},
            )
            return False
        return True
