"""Resolve stable video identifiers into short-lived playable URLs.

Storage URLs embed signed access tokens with an expiry the client cannot see,
so nothing here is cached or shared. Every consumer owns a
:class:`MediaAccessHandle` and every ``load`` performs its own request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from ..clients import APIError
from ..schemas import VideoStreamResponse

logger = logging.getLogger(__name__)


class MediaStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MediaAccess:
    video_id: str | None
    status: MediaStatus = MediaStatus.PENDING
    url: str | None = None
    error: str | None = None
    # Set only when a resolved URL failed to play, never for resolution errors
    playback_failed: bool = False

    @property
    def pending(self) -> bool:
        return self.status is MediaStatus.PENDING

    @property
    def resolved(self) -> bool:
        return self.status is MediaStatus.RESOLVED

    @property
    def failed(self) -> bool:
        return self.status is MediaStatus.FAILED


class MediaAccessAPI(Protocol):
    async def resolve_media_access(self, video_id: str) -> VideoStreamResponse:
        ...


MediaListener = Callable[[MediaAccess], None]


class MediaResolver:
    """Stateless factory for media resolutions."""

    def __init__(self, api: MediaAccessAPI) -> None:
        self._api = api

    async def resolve(self, video_id: str) -> MediaAccess:
        """Fetch a fresh URL for ``video_id``; failures are returned, never raised."""

        try:
            response = await self._api.resolve_media_access(video_id)
        except APIError as exc:
            logger.warning("Media resolution failed | video_id=%s status=%s", video_id, exc.status_code)
            return MediaAccess(video_id, MediaStatus.FAILED, error=exc.detail)
        except Exception:
            logger.exception("Unexpected error resolving media | video_id=%s", video_id)
            return MediaAccess(video_id, MediaStatus.FAILED, error="Failed to load video")

        url = (response.url or "").strip()
        if not url:
            logger.warning("Media resolution returned no URL | video_id=%s", video_id)
            return MediaAccess(video_id, MediaStatus.FAILED, error="No playable URL returned")
        return MediaAccess(video_id, MediaStatus.RESOLVED, url=url)

    def consumer(self, listener: MediaListener | None = None) -> "MediaAccessHandle":
        return MediaAccessHandle(self, listener)


class MediaAccessHandle:
    """Resolution state owned by a single consumer (a card or a player).

    ``load`` may be called again with a different id before the previous
    request completes; the older response is then ignored. ``release`` marks
    the consumer as no longer interested, which also drops any pending
    response. A failed resolution is final until the consumer loads again.
    """

    def __init__(self, resolver: MediaResolver, listener: MediaListener | None = None) -> None:
        self._resolver = resolver
        self._listener = listener
        self._request = 0
        self._state = MediaAccess(None)

    @property
    def state(self) -> MediaAccess:
        return self._state

    @property
    def video_id(self) -> str | None:
        return self._state.video_id

    async def load(self, video_id: str) -> MediaAccess:
        self._request += 1
        request = self._request
        self._update(MediaAccess(video_id))

        result = await self._resolver.resolve(video_id)
        if request != self._request:
            logger.debug("Ignoring stale media result | video_id=%s", video_id)
            return self._state
        self._update(result)
        return result

    def release(self) -> None:
        self._request += 1
        self._update(MediaAccess(None))

    def mark_playback_failed(self, message: str | None = None) -> None:
        """Record that the resolved URL could not be played. No refetch happens."""

        if not self._state.resolved:
            return
        logger.info("Playback failed | video_id=%s", self._state.video_id)
        self._update(MediaAccess(self._state.video_id, MediaStatus.FAILED, error=message, playback_failed=True))

    def _update(self, state: MediaAccess) -> None:
        self._state = state
        if self._listener is None:
            return
        try:
            self._listener(state)
        except Exception:
            logger.exception("Media listener failed")


__all__ = [
    "MediaAccess",
    "MediaAccessAPI",
    "MediaAccessHandle",
    "MediaListener",
    "MediaResolver",
    "MediaStatus",
]
