"""Schemas for user profile endpoints."""
from __future__ import annotations

from .auth import Identity


class UserProfile(Identity):
    is_following: bool | None = None
    follower_count: int = 0
    following_count: int = 0


__all__ = ["UserProfile"]
