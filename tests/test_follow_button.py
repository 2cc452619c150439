from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from vidshare.clients import APIRequestError
from vidshare.schemas import FollowResponse, Identity, UnfollowResponse
from vidshare.ui.components import FollowButton, FollowState, FollowUpdateError


@dataclass
class StubSession:
    identity: Identity | None


class StubFollowAPI:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def _call(self, action: str, user_id: str) -> None:
        self.calls.append((action, user_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error

    async def follow_user(self, user_id: str) -> FollowResponse:
        await self._call("follow", user_id)
        return FollowResponse(message="Followed")

    async def unfollow_user(self, user_id: str) -> UnfollowResponse:
        await self._call("unfollow", user_id)
        return UnfollowResponse(message="Unfollowed")


def _viewer(user_id: str = "viewer") -> StubSession:
    return StubSession(
        Identity(id=user_id, username="alice", email="alice@x.com", created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
    )


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_follow_applies_tentative_state_before_confirmation():
    api = StubFollowAPI()
    api.gate = asyncio.Event()
    changes: list[FollowState] = []
    button = FollowButton(api, _viewer(), "u2", is_following=False, follower_count=3, on_change=changes.append)

    task = asyncio.create_task(button.toggle())
    await _settle()

    assert button.state == FollowState(True, 4)
    assert button.confirmed == FollowState(False, 3)
    assert button.busy
    assert button.label == "..."

    api.gate.set()
    final = await task

    assert final == FollowState(True, 4)
    assert button.confirmed == final
    assert button.label == "Following"
    assert changes == [FollowState(True, 4)]
    assert api.calls == [("follow", "u2")]


@pytest.mark.asyncio
async def test_failed_unfollow_restores_confirmed_state():
    api = StubFollowAPI()
    api.error = APIRequestError("Unable to unfollow user", status_code=500)
    changes: list[FollowState] = []
    button = FollowButton(api, _viewer(), "u2", is_following=True, follower_count=5, on_change=changes.append)

    with pytest.raises(FollowUpdateError) as excinfo:
        await button.toggle()

    assert excinfo.value.detail == "Unable to unfollow user"
    assert excinfo.value.error.status_code == 500
    assert button.state == FollowState(True, 5)
    assert changes == [FollowState(False, 4), FollowState(True, 5)]
    assert not button.busy


@pytest.mark.asyncio
async def test_clicks_while_busy_are_ignored():
    api = StubFollowAPI()
    api.gate = asyncio.Event()
    button = FollowButton(api, _viewer(), "u2", is_following=False)

    task = asyncio.create_task(button.toggle())
    await _settle()
    again = await button.toggle()
    api.gate.set()
    await task

    assert again == FollowState(True, 1)
    assert api.calls == [("follow", "u2")]


@pytest.mark.asyncio
async def test_hidden_on_own_profile():
    api = StubFollowAPI()
    button = FollowButton(api, _viewer("u2"), "u2", is_following=False)

    assert not button.visible
    assert str(button.render()) == ""
    await button.toggle()
    assert api.calls == []


@pytest.mark.asyncio
async def test_follower_count_never_goes_negative():
    api = StubFollowAPI()
    button = FollowButton(api, _viewer(), "u2", is_following=True, follower_count=0)

    state = await button.toggle()

    assert state == FollowState(False, 0)


def test_render_shows_label_and_escapes_user_id():
    button = FollowButton(StubFollowAPI(), _viewer(), "<u2>", is_following=None)

    html = str(button.render())

    assert ">Follow</button>" in html
    assert "&lt;u2&gt;" in html
