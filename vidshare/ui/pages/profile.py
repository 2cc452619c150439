"""User profile page: profile header, follow button and the user's videos."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from ...clients import VidshareAPIClient
from ...schemas import UserProfile
from ...services import MediaResolver, SessionManager
from ..components import FollowButton, FollowState, VideoCard
from .base import PageState, load_protected
from .home import VideoListPage


@dataclass(slots=True)
class ProfilePage:
    profile: UserProfile
    videos: VideoListPage
    is_own_profile: bool
    follow_button: FollowButton | None = field(default=None)

    def apply_follow_change(self, state: FollowState) -> None:
        self.profile = self.profile.model_copy(
            update={"is_following": state.is_following, "follower_count": state.follower_count}
        )

    @property
    def heading(self) -> str:
        return "Your Videos" if self.is_own_profile else "Videos"

    @property
    def empty_message(self) -> str:
        return "You haven't uploaded any videos yet." if self.is_own_profile else "No videos yet."


def attach_follow_button(page: ProfilePage, api: VidshareAPIClient, session: SessionManager) -> None:
    if page.is_own_profile:
        return
    page.follow_button = FollowButton(
        api,
        session,
        page.profile.id,
        is_following=page.profile.is_following,
        follower_count=page.profile.follower_count,
        on_change=page.apply_follow_change,
    )


async def load_profile(
    session: SessionManager,
    api: VidshareAPIClient,
    resolver: MediaResolver,
    user_id: str,
) -> PageState[ProfilePage]:
    async def _load() -> ProfilePage:
        profile, videos = await asyncio.gather(api.get_user_profile(user_id), api.get_user_videos(user_id))
        viewer = session.identity
        cards = [VideoCard(video, resolver, show_user=False) for video in videos]
        page = ProfilePage(
            profile=profile,
            videos=VideoListPage(videos=videos, cards=cards),
            is_own_profile=viewer is not None and viewer.id == user_id,
        )
        attach_follow_button(page, api, session)
        return page

    return await load_protected(session, _load, fallback_error="Failed to load user profile")


__all__ = ["ProfilePage", "attach_follow_button", "load_profile"]
