"""Video detail page."""
from __future__ import annotations

from dataclasses import dataclass, field

from ...clients import VidshareAPIClient
from ...schemas import UserProfile, Video
from ...services import MediaResolver, SessionManager
from ..components import FollowButton, FollowState, VideoPlayer
from ..components.video_card import short_user_label
from .base import PageState, load_protected


@dataclass(slots=True)
class VideoDetailPage:
    video: Video
    player: VideoPlayer
    uploader: UserProfile | None = None
    follow_button: FollowButton | None = field(default=None)

    @property
    def uploader_name(self) -> str:
        if self.uploader is not None:
            return self.uploader.username
        return short_user_label(self.video.user_id)

    @property
    def published(self) -> str:
        created = self.video.created_at
        return f"{created:%B} {created.day}, {created.year}"

    def apply_follow_change(self, state: FollowState) -> None:
        if self.uploader is None:
            return
        self.uploader = self.uploader.model_copy(
            update={"is_following": state.is_following, "follower_count": state.follower_count}
        )


async def load_video_detail(
    session: SessionManager,
    api: VidshareAPIClient,
    resolver: MediaResolver,
    video_id: str,
) -> PageState[VideoDetailPage]:
    async def _load() -> VideoDetailPage:
        video = await api.get_video(video_id)
        uploader = await api.get_user_profile(video.user_id)
        page = VideoDetailPage(video=video, player=VideoPlayer(video.id, resolver), uploader=uploader)
        page.follow_button = FollowButton(
            api,
            session,
            video.user_id,
            is_following=uploader.is_following,
            follower_count=uploader.follower_count,
            on_change=page.apply_follow_change,
        )
        return page

    return await load_protected(session, _load, fallback_error="Failed to load video")


__all__ = ["VideoDetailPage", "load_video_detail"]
