"""Schemas supporting follower APIs."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class FollowResponse(MessageResponse):
    follow: Any | None = None


class UnfollowResponse(MessageResponse):
    pass


__all__ = ["MessageResponse", "FollowResponse", "UnfollowResponse"]
