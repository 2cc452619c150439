"""Explore (all public videos) and personalized feed pages."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from ...clients import VidshareAPIClient
from ...schemas import Video
from ...services import MediaResolver, SessionManager
from ..components import VideoCard
from .base import PageState, load_protected


@dataclass(slots=True)
class VideoListPage:
    videos: list[Video]
    cards: list[VideoCard] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.videos

    async def mount_cards(self) -> None:
        """Let every card resolve its preview independently."""
        await asyncio.gather(*(card.mount() for card in self.cards))

    def unmount_cards(self) -> None:
        for card in self.cards:
            card.unmount()


def _list_page(videos: list[Video], resolver: MediaResolver, *, show_user: bool = True) -> VideoListPage:
    cards = [VideoCard(video, resolver, show_user=show_user) for video in videos]
    return VideoListPage(videos=videos, cards=cards)


async def load_explore(
    session: SessionManager, api: VidshareAPIClient, resolver: MediaResolver
) -> PageState[VideoListPage]:
    async def _load() -> VideoListPage:
        return _list_page(await api.list_videos(), resolver)

    return await load_protected(session, _load, fallback_error="Failed to load videos")


async def load_feed(
    session: SessionManager, api: VidshareAPIClient, resolver: MediaResolver
) -> PageState[VideoListPage]:
    async def _load() -> VideoListPage:
        return _list_page(await api.get_feed(), resolver)

    return await load_protected(session, _load, fallback_error="Failed to load feed")


__all__ = ["VideoListPage", "load_explore", "load_feed"]
