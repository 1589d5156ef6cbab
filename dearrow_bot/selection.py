"""
Trust & selection engine.

Given a video ID, decides whether a de-clickbait reply should be produced and
which community title and thumbnail to use. The branding data is crowd-edited:
an unlocked entry with a net-negative vote score has been flagged by the
community and is never surfaced, while a locked entry is authoritative
regardless of its raw votes.

The outcome is either None (drop the message) or a Selection. Every way of
ending up without a thumbnail collapses into `Selection.thumbnail is None`
plus a ThumbnailReason for the reply text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union

from .config import ThumbnailMode
from .dearrow_api import BrandingResponse, BrandingThumbnail, BrandingTitle
from .exceptions import BrandingFetchError, ThumbnailFetchError
from .utils.logging import get_logger

logger = get_logger(__name__)


class BrandingSource(Protocol):
    async def get_branding(self, video_id: str) -> BrandingResponse: ...

    async def get_thumbnail(self, video_id: str, timestamp: Optional[float] = None) -> bytes: ...


class ThumbnailReason(Enum):
    """Why a reply went out title-only, as shown in the embed description."""

    DISABLED = "disabled by dev"
    NOT_FOUND = "not found"
    LOCK_ONLY = "disabled by dev (lock-only)"

    @classmethod
    def for_mode(cls, mode: ThumbnailMode) -> "ThumbnailReason":
        if mode is ThumbnailMode.DISABLED:
            return cls.DISABLED
        if mode is ThumbnailMode.ONLY_LOCKED:
            return cls.LOCK_ONLY
        return cls.NOT_FOUND


@dataclass(frozen=True)
class Thumbnail:
    image: bytes
    votes: int
    locked: bool


@dataclass(frozen=True)
class Selection:
    video_id: str
    title: BrandingTitle
    thumbnail: Optional[Thumbnail]
    thumbnail_reason: ThumbnailReason

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail is not None


def is_trusted(candidate: Union[BrandingTitle, BrandingThumbnail]) -> bool:
    """Locked candidates are always trusted; unlocked ones need votes >= 0."""
    return candidate.locked or candidate.votes >= 0


async def select_thumbnail(
    video_id: str,
    branding: BrandingResponse,
    api: BrandingSource,
    mode: ThumbnailMode,
) -> Optional[Thumbnail]:
    """Pick and fetch the top thumbnail, or None if there is no usable one."""
    if mode is ThumbnailMode.DISABLED:
        return None

    if not branding.thumbnails:
        logger.warning("no thumbnails returned!", extra={"subsys": "select", "event": "thumb.none"})
        return None

    candidate = branding.thumbnails[0]

    if not is_trusted(candidate):
        logger.warning(
            f"untrusted thumbnail (locked: {candidate.locked}, votes: {candidate.votes}). skipping.",
            extra={"subsys": "select", "event": "thumb.untrusted"},
        )
        return None

    if mode is ThumbnailMode.ONLY_LOCKED and not candidate.locked:
        logger.warning("only locked thumbnails allowed.", extra={"subsys": "select", "event": "thumb.unlocked"})
        return None

    try:
        image = await api.get_thumbnail(video_id, candidate.timestamp)
    except ThumbnailFetchError as e:
        logger.error(
            f"failed to retrieve thumbnail: {e}",
            extra={"subsys": "select", "event": "thumb.fetch_failed", "detail": {"video_id": video_id}},
        )
        return None

    return Thumbnail(image=image, votes=candidate.votes, locked=candidate.locked)


async def select_branding(
    video_id: str,
    api: BrandingSource,
    mode: ThumbnailMode,
    *,
    skip_recapitalized: bool = False,
) -> Optional[Selection]:
    """
    Run the full decision sequence for one video.

    Returns None when no reply should be sent: the branding fetch failed,
    there are no titles, the top title is untrusted, or (when
    `skip_recapitalized` is set) the top title is just the original
    recapitalized. Thumbnail problems never abort the reply.
    """
    try:
        branding = await api.get_branding(video_id)
    except BrandingFetchError as e:
        logger.error(
            f"failed to get branding! {e}",
            extra={"subsys": "select", "event": "branding.fetch_failed", "detail": {"video_id": video_id}},
        )
        return None

    if not branding.titles:
        logger.warning("no brandings returned!", extra={"subsys": "select", "event": "title.none"})
        return None

    title = branding.titles[0]

    if not is_trusted(title):
        logger.warning(
            f"untrusted branding (locked: {title.locked}, votes: {title.votes}). skipping.",
            extra={"subsys": "select", "event": "title.untrusted"},
        )
        return None

    if skip_recapitalized and title.original:
        logger.warning("title is just recapitalized, skipping.", extra={"subsys": "select", "event": "title.original"})
        return None

    thumbnail = await select_thumbnail(video_id, branding, api, mode)

    return Selection(
        video_id=video_id,
        title=title,
        thumbnail=thumbnail,
        thumbnail_reason=ThumbnailReason.for_mode(mode),
    )
