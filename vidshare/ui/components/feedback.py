"""Loading and unavailable-media placeholders."""
from __future__ import annotations

from markupsafe import Markup, escape


def loading_spinner(*, label: str = "Loading") -> Markup:
    return Markup(
        f"""
        <div class=\"flex items-center justify-center gap-3 text-sm text-gray-500\">
            <span class=\"inline-block h-8 w-8 animate-spin rounded-full border-b-2 border-gray-400\"></span>
            <span class=\"sr-only\">{escape(label)}…</span>
        </div>
        """
    )


def unavailable_media(label: str) -> Markup:
    """Fixed placeholder shown in place of a video that cannot be played."""

    return Markup(
        f"""
        <div class=\"flex h-full w-full items-center justify-center bg-gray-100\" data-media-state=\"failed\">
            <p class=\"text-xs text-gray-500\">{escape(label)}</p>
        </div>
        """
    )


__all__ = ["loading_spinner", "unavailable_media"]
