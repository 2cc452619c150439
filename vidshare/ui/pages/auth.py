"""Login, registration and logout form handlers."""
from __future__ import annotations

from ...clients import APIError
from ...constants import HOME_PATH, LOGIN_PATH
from ...services import SessionManager, SessionSupersededError
from .base import PageState


async def submit_login(session: SessionManager, username_or_email: str, password: str) -> PageState[None]:
    try:
        await session.login(username_or_email.strip(), password)
    except SessionSupersededError:
        return PageState.failed("Sign-in was interrupted. Please try again.")
    except APIError as exc:
        return PageState.failed(exc.detail or "Login failed")
    return PageState.redirect(HOME_PATH)


async def submit_register(session: SessionManager, username: str, email: str, password: str) -> PageState[None]:
    try:
        await session.register(username.strip(), email.strip(), password)
    except SessionSupersededError:
        return PageState.failed("Registration was interrupted. Please sign in.")
    except APIError as exc:
        return PageState.failed(exc.detail or "Registration failed")
    return PageState.redirect(HOME_PATH)


def submit_logout(session: SessionManager) -> PageState[None]:
    session.logout()
    return PageState.redirect(LOGIN_PATH)


__all__ = ["submit_login", "submit_register", "submit_logout"]
