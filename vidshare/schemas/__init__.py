"""Convenience exports for schema layer."""
from .auth import Identity, LoginRequest, RegisterRequest, TokenResponse
from .follow import FollowResponse, MessageResponse, UnfollowResponse
from .profiles import UserProfile
from .videos import UploadVideoRequest, Video, VideoStreamResponse, Visibility

__all__ = [
    "Identity",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "FollowResponse",
    "MessageResponse",
    "UnfollowResponse",
    "UserProfile",
    "UploadVideoRequest",
    "Video",
    "VideoStreamResponse",
    "Visibility",
]
