"""Full-size player for the video detail page."""
from __future__ import annotations

from markupsafe import Markup, escape

from ...constants import PLAYBACK_FAILED_MESSAGE, PLAYER_UNAVAILABLE_MESSAGE
from ...services import MediaAccess, MediaAccessHandle, MediaResolver
from .feedback import loading_spinner


class VideoPlayer:
    def __init__(self, video_id: str, resolver: MediaResolver) -> None:
        self.video_id = video_id
        self._media: MediaAccessHandle = resolver.consumer()

    @property
    def media(self) -> MediaAccess:
        return self._media.state

    async def mount(self) -> MediaAccess:
        return await self._media.load(self.video_id)

    async def show(self, video_id: str) -> MediaAccess:
        """Repurpose the player for another video."""
        self.video_id = video_id
        return await self._media.load(video_id)

    def unmount(self) -> None:
        self._media.release()

    def playback_error(self) -> None:
        self._media.mark_playback_failed(PLAYBACK_FAILED_MESSAGE)

    def render(self) -> Markup:
        media = self.media
        frame = "flex aspect-video items-center justify-center bg-gray-900"
        if media.pending:
            return Markup(f"<div class=\"{frame}\">{loading_spinner()}</div>")
        if media.failed or not media.url:
            # Resolution failures always show the same text; only playback errors differ
            message = PLAYBACK_FAILED_MESSAGE if media.playback_failed else PLAYER_UNAVAILABLE_MESSAGE
            return Markup(f"<div class=\"{frame} text-white\"><p>{escape(message)}</p></div>")
        return Markup(
            f"<video src=\"{escape(media.url)}\" controls playsinline "
            "class=\"h-full w-full rounded-lg bg-black object-contain\">"
            "Your browser does not support the video tag.</video>"
        )


__all__ = ["VideoPlayer"]
