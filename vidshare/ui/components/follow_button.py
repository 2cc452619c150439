"""Follow/unfollow toggle with optimistic counters."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from markupsafe import Markup, escape

from ...clients import APIError
from ...schemas import FollowResponse, UnfollowResponse
from ...services import SessionManager

logger = logging.getLogger(__name__)


class FollowUpdateError(RuntimeError):
    """Raised when a follow change was rejected and the optimistic update was reverted."""

    def __init__(self, detail: str, *, error: APIError) -> None:
        super().__init__(detail)
        self.detail = detail
        self.error = error


@dataclass(frozen=True, slots=True)
class FollowState:
    is_following: bool
    follower_count: int


class FollowAPI(Protocol):
    async def follow_user(self, user_id: str) -> FollowResponse:
        ...

    async def unfollow_user(self, user_id: str) -> UnfollowResponse:
        ...


FollowListener = Callable[[FollowState], None]


class FollowButton:
    """Applies the expected outcome immediately, then confirms it with the API.

    On failure the last server-confirmed state is restored and
    :class:`FollowUpdateError` is raised for the caller to report.
    """

    def __init__(
        self,
        api: FollowAPI,
        session: SessionManager,
        user_id: str,
        *,
        is_following: bool | None,
        follower_count: int = 0,
        on_change: FollowListener | None = None,
    ) -> None:
        self._api = api
        self._session = session
        self.user_id = user_id
        self._on_change = on_change
        self._confirmed = FollowState(bool(is_following), max(0, follower_count))
        self._state = self._confirmed
        self._busy = False

    @property
    def state(self) -> FollowState:
        return self._state

    @property
    def confirmed(self) -> FollowState:
        return self._confirmed

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def visible(self) -> bool:
        # Nobody follows themselves
        identity = self._session.identity
        return identity is None or identity.id != self.user_id

    @property
    def label(self) -> str:
        if self._busy:
            return "..."
        return "Following" if self._state.is_following else "Follow"

    async def toggle(self) -> FollowState:
        if self._busy or not self.visible:
            return self._state

        confirmed = self._confirmed
        following = not confirmed.is_following
        delta = 1 if following else -1
        tentative = FollowState(following, max(0, confirmed.follower_count + delta))

        self._busy = True
        self._apply(tentative)
        try:
            if following:
                await self._api.follow_user(self.user_id)
            else:
                await self._api.unfollow_user(self.user_id)
        except APIError as exc:
            logger.warning(
                "Follow update failed | user_id=%s following=%s status=%s",
                self.user_id,
                following,
                exc.status_code,
            )
            self._apply(confirmed)
            raise FollowUpdateError(exc.detail or "Failed to update follow status", error=exc) from exc
        finally:
            self._busy = False

        self._confirmed = tentative
        return tentative

    def _apply(self, state: FollowState) -> None:
        self._state = state
        if self._on_change is None:
            return
        try:
            self._on_change(state)
        except Exception:
            logger.exception("Follow listener failed")

    def render(self) -> Markup:
        if not self.visible:
            return Markup("")
        tone = "bg-gray-200 text-gray-800" if self._state.is_following else "bg-blue-500 text-white"
        disabled = " disabled" if self._busy else ""
        return Markup(
            f"<button type=\"button\" data-user-id=\"{escape(self.user_id)}\" "
            f"class=\"rounded-lg px-6 py-2 font-semibold {tone}\"{disabled}>{escape(self.label)}</button>"
        )


__all__ = ["FollowAPI", "FollowButton", "FollowListener", "FollowState", "FollowUpdateError"]
