"""Shared page state and the authentication gate used by every page."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, TypeVar

from ...clients import APIError, UnauthorizedError
from ...constants import LOGIN_PATH
from ...services import SessionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageStatus(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    ERROR = "error"
    READY = "ready"


@dataclass(slots=True)
class PageState(Generic[T]):
    status: PageStatus
    data: T | None = None
    redirect_to: str | None = None
    error: str | None = None

    @classmethod
    def loading(cls) -> "PageState[T]":
        return cls(PageStatus.LOADING)

    @classmethod
    def redirect(cls, path: str) -> "PageState[T]":
        return cls(PageStatus.REDIRECT, redirect_to=path)

    @classmethod
    def failed(cls, message: str) -> "PageState[T]":
        return cls(PageStatus.ERROR, error=message)

    @classmethod
    def ready(cls, data: T) -> "PageState[T]":
        return cls(PageStatus.READY, data=data)


def gate(session: SessionManager) -> PageState | None:
    """Return the state to show instead of protected content, if any.

    While verification is running the answer is not yet known, so the page
    waits rather than redirecting.
    """

    state = session.state
    if state.loading:
        return PageState.loading()
    if not state.is_authenticated:
        return PageState.redirect(LOGIN_PATH)
    return None


def superseded(session: SessionManager) -> PageState:
    # Result belongs to a session that has since ended; the page must reload
    logger.debug("Dropping page result from superseded session")
    return gate(session) or PageState.loading()


async def load_protected(
    session: SessionManager,
    loader: Callable[[], Awaitable[T]],
    *,
    fallback_error: str,
) -> PageState[T]:
    """Run ``loader`` behind the gate, mapping API failures to page states."""

    blocked = gate(session)
    if blocked is not None:
        return blocked
    generation = session.generation
    try:
        data = await loader()
    except UnauthorizedError:
        if session.generation != generation:
            return superseded(session)
        session.revoke("server rejected credential")
        return PageState.redirect(LOGIN_PATH)
    except APIError as exc:
        if session.generation != generation:
            return superseded(session)
        logger.info("Page load failed: %s", exc.detail)
        return PageState.failed(exc.detail or fallback_error)
    if session.generation != generation:
        return superseded(session)
    return PageState.ready(data)


__all__ = ["PageState", "PageStatus", "gate", "load_protected", "superseded"]
