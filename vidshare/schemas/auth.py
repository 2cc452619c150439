"""Pydantic schemas for authentication exchanges with the API."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Identity(BaseModel):
    """Authenticated principal as issued by the server."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    # Not read by the client; servers may omit them from /auth/me
    email: str | None = None
    created_at: datetime | None = None


class LoginRequest(BaseModel):
    # The server accepts either the username or the email in this field
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Identity


__all__ = ["Identity", "LoginRequest", "RegisterRequest", "TokenResponse"]
