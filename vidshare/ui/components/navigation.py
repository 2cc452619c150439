"""Top navigation bar."""
from __future__ import annotations

from markupsafe import Markup, escape

from ...services import SessionState
from .avatar import user_avatar

NAV_LINKS = (
    ("Explore", "/"),
    ("Feed", "/feed"),
    ("Upload", "/upload"),
)


def navbar(state: SessionState, *, app_name: str = "VideoShare") -> Markup:
    brand = f"<a href=\"/\" class=\"text-2xl font-bold\">{escape(app_name)}</a>"
    if state.loading:
        return Markup(f"<nav class=\"border-b bg-white\">{brand}</nav>")

    identity = state.identity
    if identity is None:
        links = (
            "<a href=\"/login\" class=\"px-4 py-2\">Login</a>"
            "<a href=\"/register\" class=\"rounded-lg bg-blue-500 px-4 py-2 text-white\">Sign Up</a>"
        )
    else:
        links = "".join(f"<a href=\"{href}\" class=\"px-4 py-2\">{label}</a>" for label, href in NAV_LINKS)
        links += (
            f"<a href=\"/users/{escape(identity.id)}\" class=\"flex items-center gap-2 px-4 py-2\">"
            f"{user_avatar(identity.username, 'sm')}{escape(identity.username)}</a>"
            "<button type=\"button\" data-action=\"logout\" class=\"px-4 py-2\">Logout</button>"
        )
    return Markup(f"<nav class=\"border-b bg-white\">{brand}<div class=\"flex items-center gap-4\">{links}</div></nav>")


__all__ = ["NAV_LINKS", "navbar"]
