"""Convenience exports for service layer."""
from .credential_store import (
    CredentialStore,
    CredentialStoreError,
    MemoryCredentialStore,
    SqlCredentialStore,
    StoredCredential,
)
from .media_resolver import MediaAccess, MediaAccessHandle, MediaResolver, MediaStatus
from .session_manager import (
    SessionError,
    SessionManager,
    SessionPhase,
    SessionState,
    SessionSupersededError,
)

__all__ = [
    "CredentialStore",
    "CredentialStoreError",
    "MemoryCredentialStore",
    "SqlCredentialStore",
    "StoredCredential",
    "MediaAccess",
    "MediaAccessHandle",
    "MediaResolver",
    "MediaStatus",
    "SessionError",
    "SessionManager",
    "SessionPhase",
    "SessionState",
    "SessionSupersededError",
]
