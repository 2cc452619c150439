from __future__ import annotations

from datetime import datetime, timezone

import pytest

from vidshare.schemas import Identity, Video, VideoStreamResponse
from vidshare.services import MediaResolver, SessionPhase, SessionState
from vidshare.ui.components import VideoCard, user_avatar
from vidshare.ui.components.avatar import initials
from vidshare.ui.components.navigation import navbar


class StubMediaAPI:
    async def resolve_media_access(self, video_id: str) -> VideoStreamResponse:
        return VideoStreamResponse(url=f"https://cdn.test/{video_id}.mp4")


def _video(user_id: str = "9f1c2d3e-aaaa-bbbb") -> Video:
    return Video(
        id="v1",
        title="Pasta",
        blob_name="v1.mp4",
        blob_url="https://storage.test/v1.mp4",
        user_id=user_id,
        created_at=datetime(2024, 3, 9, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    ("username", "expected"),
    [("alice", "A"), ("Jane Doe", "JD"), ("ann marie smith", "AM"), ("  spaced  out ", "SO")],
)
def test_initials(username, expected):
    assert initials(username) == expected


def test_avatar_escapes_and_sizes():
    html = str(user_avatar("<b>ob", "lg"))

    assert "h-16 w-16" in html
    assert "&lt;" in html
    assert "<b>" not in html


def test_unknown_avatar_size_falls_back_to_medium():
    assert "h-10 w-10" in str(user_avatar("alice", "xl"))


def test_navbar_shows_signed_in_user_avatar():
    identity = Identity(id="u1", username="Jane Doe")

    html = str(navbar(SessionState(SessionPhase.AUTHENTICATED, identity)))

    assert ">JD</div>" in html
    assert "Jane Doe" in html
    assert "Logout" in html


@pytest.mark.asyncio
async def test_card_shows_uploader_avatar():
    card = VideoCard(_video(), MediaResolver(StubMediaAPI()))
    await card.mount()

    html = str(card.render())

    assert ">9</div>" in html
    assert "User 9f1c2d3e" in html


def test_card_without_uploader_has_no_avatar():
    card = VideoCard(_video(), MediaResolver(StubMediaAPI()), show_user=False)

    assert "rounded-full bg-gradient" not in str(card.render())
