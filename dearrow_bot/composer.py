"""Builds the de-clickbait reply embed from a Selection."""

from __future__ import annotations

import io

import discord

from .action import BotAction
from .selection import Selection

THUMBNAIL_FILENAME = "thumb.webp"
FOOTER_TEXT = "De-Clickbait provided by DeArrow API."


def lock_phrase(locked: bool) -> str:
    return "is locked" if locked else "is not locked"


def describe(selection: Selection) -> str:
    """Embed description reporting votes and lock state, e.g.
    `Title: 50 votes, is locked; Thumbnail: 3 votes, is not locked`."""
    title = selection.title
    title_part = f"Title: {title.votes} votes, {lock_phrase(title.locked)}"

    thumb = selection.thumbnail
    if thumb is None:
        return f"{title_part}; Thumbnail: {selection.thumbnail_reason.value}"
    return f"{title_part}; Thumbnail: {thumb.votes} votes, {lock_phrase(thumb.locked)}"


def compose_reply(selection: Selection) -> BotAction:
    """Create the reply: an embed with the community title, plus the thumbnail
    attached and shown as the embed image when one was selected."""
    embed = discord.Embed(title=selection.title.title, description=describe(selection))
    embed.set_footer(text=FOOTER_TEXT)

    files = []
    if selection.thumbnail is not None:
        files.append(discord.File(io.BytesIO(selection.thumbnail.image), filename=THUMBNAIL_FILENAME))
        embed.set_image(url=f"attachment://{THUMBNAIL_FILENAME}")

    return BotAction(
        embeds=[embed],
        files=files,
        meta={"video_id": selection.video_id, "has_thumbnail": selection.has_thumbnail},
    )
