"""Project-wide constant values."""
from __future__ import annotations

LOGIN_PATH = "/login"
HOME_PATH = "/"

UNAVAILABLE_MEDIA_MESSAGE = "Video unavailable"  # fixed affordance, never varies per error
PLAYER_UNAVAILABLE_MESSAGE = "Video not available"
PLAYBACK_FAILED_MESSAGE = "Failed to play video. The video format may not be supported."

MAX_TITLE_LENGTH = 200
VISIBILITY_CHOICES = ("public", "private")

__all__ = [
    "LOGIN_PATH",
    "HOME_PATH",
    "UNAVAILABLE_MEDIA_MESSAGE",
    "PLAYER_UNAVAILABLE_MESSAGE",
    "PLAYBACK_FAILED_MESSAGE",
    "MAX_TITLE_LENGTH",
    "VISIBILITY_CHOICES",
]
