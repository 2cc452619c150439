"""Schemas for video listings and media access."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Visibility = Literal["public", "private"]


class Video(BaseModel):
    id: str
    title: str
    recipe: str | None = None
    visibility: Visibility = "public"
    blob_name: str
    # Not playable on its own: storage requires a signed access token
    blob_url: str
    user_id: str
    created_at: datetime


class VideoStreamResponse(BaseModel):
    """Short-lived playable URL for a single video."""

    url: str | None = None


class UploadVideoRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    recipe: str | None = None
    visibility: Visibility = "public"


__all__ = ["Visibility", "Video", "VideoStreamResponse", "UploadVideoRequest"]
