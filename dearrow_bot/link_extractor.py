"""YouTube link detection and video ID extraction."""

from __future__ import annotations

import re
from typing import Optional

from .utils.logging import get_logger

logger = get_logger(__name__)

# Covers youtube.com/watch?v=, ?...&v=, /embed/, /v/, /e/, /<seg>/<seg>/ID paths,
# the youtube-nocookie.com mirror and youtu.be short links.
YOUTUBE_LINK_RE = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/"
    r"(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)"
    r"|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)

VIDEO_ID_LENGTH = 11


def extract_video_id(text: str) -> Optional[str]:
    """
    Return the video ID of the first YouTube link in `text`, or None.

    `text` should already be sanitized (mention markup resolved), e.g. a
    message's `clean_content`. Only the first link is considered.
    """
    match = YOUTUBE_LINK_RE.search(text or "")
    if match is None:
        logger.debug("no youtube link in message", extra={"subsys": "extract", "event": "extract.miss"})
        return None

    video_id = match.group(1)
    if not video_id:
        logger.warning(
            f"link seemingly does not contain youtube id: {text}",
            extra={"subsys": "extract", "event": "extract.no_id"},
        )
        return None

    return video_id
