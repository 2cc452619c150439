"""Expose reusable UI components."""
from __future__ import annotations

from . import feedback, navigation
from .avatar import user_avatar
from .follow_button import FollowButton, FollowState, FollowUpdateError
from .video_card import VideoCard
from .video_player import VideoPlayer

__all__ = [
    "feedback",
    "navigation",
    "user_avatar",
    "FollowButton",
    "FollowState",
    "FollowUpdateError",
    "VideoCard",
    "VideoPlayer",
]
