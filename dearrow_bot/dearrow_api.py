"""
DeArrow API client and branding response models.

Two endpoints are used:
- `GET {api_base}/api/branding?videoID=<id>` returns community titles and
  thumbnails, ranked best-first by the server.
- `GET {thumb_api_base}/api/v1/getThumbnail?videoID=<id>[&time=<t>]` renders
  the chosen thumbnail frame as image bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .exceptions import BrandingFetchError, ThumbnailFetchError
from .http_client import SharedHttpClient
from .utils.logging import get_logger

logger = get_logger(__name__)


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected JSON object for {what}, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class BrandingTitle:
    title: str
    original: bool
    votes: int
    locked: bool
    uuid: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandingTitle":
        data = _require_object(data, "title")
        return cls(
            title=str(data["title"]),
            original=bool(data["original"]),
            votes=int(data["votes"]),
            locked=bool(data["locked"]),
            uuid=str(data["UUID"]),
        )


@dataclass(frozen=True)
class BrandingThumbnail:
    timestamp: Optional[float]
    original: bool
    votes: int
    locked: bool
    uuid: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandingThumbnail":
        data = _require_object(data, "thumbnail")
        timestamp = data.get("timestamp")
        return cls(
            timestamp=float(timestamp) if timestamp is not None else None,
            original=bool(data["original"]),
            votes=int(data["votes"]),
            locked=bool(data["locked"]),
            uuid=str(data["UUID"]),
        )


@dataclass(frozen=True)
class BrandingResponse:
    titles: List[BrandingTitle] = field(default_factory=list)
    thumbnails: List[BrandingThumbnail] = field(default_factory=list)
    random_time: float = 0.0
    video_duration: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandingResponse":
        """Decode the branding JSON body; raises KeyError/TypeError/ValueError on bad shapes."""
        data = _require_object(data, "branding")
        duration = data.get("videoDuration")
        return cls(
            titles=[BrandingTitle.from_dict(t) for t in data["titles"]],
            thumbnails=[BrandingThumbnail.from_dict(t) for t in data["thumbnails"]],
            random_time=float(data["randomTime"]),
            video_duration=float(duration) if duration is not None else None,
        )


def format_timestamp(timestamp: float) -> str:
    """Render a frame time the way the thumbnail service expects (`12.5`, `30`)."""
    if float(timestamp).is_integer():
        return str(int(timestamp))
    return repr(float(timestamp))


class DeArrowClient:
    """Thin async client over the branding and thumbnail endpoints."""

    def __init__(self, http: SharedHttpClient, api_base: str, thumb_api_base: str):
        self.http = http
        self.api_base = api_base.rstrip("/")
        self.thumb_api_base = thumb_api_base.rstrip("/")

    def branding_url(self, video_id: str) -> str:
        return f"{self.api_base}/api/branding?videoID={video_id}"

    def thumbnail_url(self, video_id: str, timestamp: Optional[float] = None) -> str:
        part = "" if timestamp is None else f"&time={format_timestamp(timestamp)}"
        return f"{self.thumb_api_base}/api/v1/getThumbnail?videoID={video_id}{part}"

    async def get_branding(self, video_id: str) -> BrandingResponse:
        """Fetch branding for a video. Raises BrandingFetchError on any failure."""
        try:
            response = await self.http.get(self.branding_url(video_id))
            return BrandingResponse.from_dict(response.json())
        except httpx.HTTPError as e:
            raise BrandingFetchError(f"branding request failed: {e}", video_id) from e
        except (ValueError, KeyError, TypeError) as e:
            # ValueError also covers json.JSONDecodeError
            raise BrandingFetchError(f"malformed branding response: {e!r}", video_id) from e

    async def get_thumbnail(self, video_id: str, timestamp: Optional[float] = None) -> bytes:
        """Fetch rendered thumbnail bytes. Raises ThumbnailFetchError on any failure."""
        try:
            response = await self.http.get(self.thumbnail_url(video_id, timestamp))
        except httpx.HTTPError as e:
            raise ThumbnailFetchError(f"thumbnail request failed: {e}", video_id) from e
        return response.content
