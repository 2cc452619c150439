"""Convenience exports for ORM models."""
from .stored_session import StoredSession

__all__ = ["StoredSession"]
