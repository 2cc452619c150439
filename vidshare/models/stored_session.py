"""SQLAlchemy ORM model for the persisted credential and identity pair."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from vidshare.database import Base


class StoredSession(Base):
    __tablename__ = "stored_sessions"

    # One row per storage slot; token and identity live in the same row
    slot = Column(String(64), primary_key=True)
    access_token = Column(Text, nullable=False)
    token_type = Column(String(32), nullable=False, default="bearer")
    identity_json = Column(Text, nullable=False)
    saved_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


__all__ = ["StoredSession"]
