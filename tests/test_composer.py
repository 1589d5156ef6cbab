"""
Tests for the reply embed composer.
"""

from dataclasses import fields

import pytest

from dearrow_bot.action import BotAction
from dearrow_bot.composer import FOOTER_TEXT, THUMBNAIL_FILENAME, compose_reply, describe
from dearrow_bot.dearrow_api import BrandingTitle
from dearrow_bot.selection import Selection, Thumbnail, ThumbnailReason
from tests.factories import RICK_ID, RICK_TITLE


def make_selection(title_votes=50, title_locked=True, thumbnail=None, reason=ThumbnailReason.NOT_FOUND):
    title = BrandingTitle(title=RICK_TITLE, original=False, votes=title_votes, locked=title_locked, uuid="u")
    return Selection(video_id=RICK_ID, title=title, thumbnail=thumbnail, thumbnail_reason=reason)


class TestDescribe:
    @pytest.mark.parametrize(
        "reason, text",
        [
            (ThumbnailReason.DISABLED, "disabled by dev"),
            (ThumbnailReason.NOT_FOUND, "not found"),
            (ThumbnailReason.LOCK_ONLY, "disabled by dev (lock-only)"),
        ],
    )
    def test_title_only_reasons(self, reason, text):
        assert describe(make_selection(reason=reason)) == f"Title: 50 votes, is locked; Thumbnail: {text}"

    def test_unlocked_title(self):
        assert describe(make_selection(title_votes=0, title_locked=False)).startswith(
            "Title: 0 votes, is not locked;"
        )

    def test_with_thumbnail(self):
        selection = make_selection(title_votes=7, title_locked=False, thumbnail=Thumbnail(b"x", votes=3, locked=True))
        assert describe(selection) == "Title: 7 votes, is not locked; Thumbnail: 3 votes, is locked"


class TestComposeReply:
    def test_title_only(self):
        action = compose_reply(make_selection())

        assert action.files == []
        assert len(action.embeds) == 1
        embed = action.embeds[0]
        assert embed.title == RICK_TITLE
        assert "50 votes, is locked; Thumbnail: not found" in embed.description
        assert embed.footer.text == FOOTER_TEXT
        assert embed.image.url is None
        assert action.meta == {"video_id": RICK_ID, "has_thumbnail": False}

    def test_with_thumbnail_attaches_image(self):
        selection = make_selection(thumbnail=Thumbnail(b"webp-bytes", votes=-1, locked=True))
        action = compose_reply(selection)

        assert len(action.files) == 1
        assert action.files[0].filename == THUMBNAIL_FILENAME
        assert action.files[0].fp.read() == b"webp-bytes"
        assert action.embeds[0].image.url == f"attachment://{THUMBNAIL_FILENAME}"
        assert action.embeds[0].description == "Title: 50 votes, is locked; Thumbnail: -1 votes, is locked"
        assert action.embeds[0].footer.text == FOOTER_TEXT

    def test_send_kwargs(self):
        action = compose_reply(make_selection(thumbnail=Thumbnail(b"x", votes=1, locked=False)))
        kwargs = action.send_kwargs()

        assert set(kwargs) == {"embeds", "files"}
        assert "content" not in kwargs

    def test_send_kwargs_title_only_has_no_files(self):
        assert set(compose_reply(make_selection()).send_kwargs()) == {"embeds"}


def test_bot_action_carries_only_reply_parts():
    assert {f.name for f in fields(BotAction)} == {"embeds", "files", "meta"}
    assert BotAction().send_kwargs() == {}
