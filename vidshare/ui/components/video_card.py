"""Preview card for a single video in a grid."""
from __future__ import annotations

from markupsafe import Markup, escape

from ...constants import UNAVAILABLE_MEDIA_MESSAGE
from ...schemas import Video
from ...services import MediaAccess, MediaAccessHandle, MediaResolver
from .avatar import user_avatar
from .feedback import loading_spinner, unavailable_media


def short_user_label(user_id: str) -> str:
    return f"User {user_id[:8]}"


class VideoCard:
    """Grid card that resolves its own preview URL.

    Each card owns a media handle, so two cards for the same video never
    share a request or a URL.
    """

    def __init__(self, video: Video, resolver: MediaResolver, *, show_user: bool = True) -> None:
        self.video = video
        self.show_user = show_user
        self._media: MediaAccessHandle = resolver.consumer()

    @property
    def media(self) -> MediaAccess:
        return self._media.state

    @property
    def href(self) -> str:
        return f"/videos/{self.video.id}"

    async def mount(self) -> MediaAccess:
        return await self._media.load(self.video.id)

    def unmount(self) -> None:
        self._media.release()

    def playback_error(self) -> None:
        self._media.mark_playback_failed(UNAVAILABLE_MEDIA_MESSAGE)

    def render(self) -> Markup:
        media = self.media
        if media.pending:
            preview = loading_spinner()
        elif media.failed or not media.url:
            preview = unavailable_media(UNAVAILABLE_MEDIA_MESSAGE)
        else:
            preview = Markup(
                f"<video src=\"{escape(media.url)}\" class=\"h-full w-full object-cover\" muted playsinline></video>"
            )

        badge = ""
        if self.video.visibility == "private":
            badge = "<div class=\"absolute right-2 top-2 rounded bg-black/50 px-2 py-1 text-xs text-white\">Private</div>"

        details = f"<h3 class=\"mb-2 text-lg font-semibold\">{escape(self.video.title)}</h3>"
        if self.show_user:
            details += (
                f"<a href=\"/users/{escape(self.video.user_id)}\" class=\"mt-2 flex items-center gap-2 text-sm text-gray-600\">"
                f"{user_avatar(self.video.user_id, 'sm')}{escape(short_user_label(self.video.user_id))}</a>"
            )
        if self.video.recipe:
            details += f"<p class=\"mt-2 text-sm text-gray-500\">{escape(self.video.recipe)}</p>"

        return Markup(
            f"""
            <a href=\"{escape(self.href)}\" class=\"group block\">
                <div class=\"overflow-hidden rounded-lg bg-white shadow-md\">
                    <div class=\"relative aspect-video bg-gray-200\">{preview}{badge}</div>
                    <div class=\"p-4\">{details}</div>
                </div>
            </a>
            """
        )


__all__ = ["VideoCard", "short_user_label"]
