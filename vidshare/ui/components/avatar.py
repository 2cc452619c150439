"""Initials badge shown next to usernames."""
from __future__ import annotations

from markupsafe import Markup, escape

AVATAR_SIZES = {
    "sm": "h-8 w-8 text-sm",
    "md": "h-10 w-10 text-base",
    "lg": "h-16 w-16 text-xl",
}


def initials(username: str) -> str:
    return "".join(part[0] for part in username.split(" ") if part).upper()[:2]


def user_avatar(username: str, size: str = "md") -> Markup:
    classes = AVATAR_SIZES.get(size, AVATAR_SIZES["md"])
    return Markup(
        f"<div class=\"{classes} flex items-center justify-center rounded-full "
        "bg-gradient-to-br from-purple-500 to-pink-500 font-semibold text-white\" "
        f"title=\"{escape(username)}\">{escape(initials(username))}</div>"
    )


__all__ = ["AVATAR_SIZES", "initials", "user_avatar"]
