"""Durable storage for the credential and identity pair."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..models import StoredSession
from ..schemas import Identity
from ..security.vault import DataVaultError, decrypt_text, encrypt_text, vault_enabled

logger = logging.getLogger(__name__)


class CredentialStoreError(RuntimeError):
    """Raised when the credential pair cannot be written or removed."""


@dataclass(frozen=True, slots=True)
class StoredCredential:
    """Bearer token paired with the identity it authorizes."""

    access_token: str
    identity: Identity
    token_type: str = "bearer"

    def with_identity(self, identity: Identity) -> "StoredCredential":
        return StoredCredential(access_token=self.access_token, identity=identity, token_type=self.token_type)


class CredentialStore(Protocol):
    def load(self) -> StoredCredential | None:
        """Return the persisted pair, or ``None`` when nothing usable is stored."""
        ...

    def save(self, credential: StoredCredential) -> None:
        """Replace whatever is stored with ``credential``."""
        ...

    def clear(self) -> None:
        """Remove the stored pair."""
        ...


class MemoryCredentialStore:
    """Process-local store; the pair is swapped as a single object."""

    def __init__(self, initial: StoredCredential | None = None) -> None:
        self._stored = initial

    def load(self) -> StoredCredential | None:
        return self._stored

    def save(self, credential: StoredCredential) -> None:
        self._stored = credential

    def clear(self) -> None:
        self._stored = None


class SqlCredentialStore:
    """SQLAlchemy-backed store keeping token and identity in one row.

    Writes and deletes happen in a single transaction, so a reader can only
    ever observe both halves of the pair or neither. When a vault key is
    configured the token is encrypted before it reaches the database.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal, *, slot: str = "default") -> None:
        self._session_factory = session_factory
        self._slot = slot

    def load(self) -> StoredCredential | None:
        try:
            with self._session_factory() as db:
                row = db.get(StoredSession, self._slot)
                if row is None:
                    return None
                raw_token, token_type, identity_json = row.access_token, row.token_type, row.identity_json
        except SQLAlchemyError:
            logger.exception("Failed to read stored session (slot=%s)", self._slot)
            return None

        try:
            identity = Identity.model_validate_json(identity_json)
            token = decrypt_text(raw_token)
        except (ValidationError, DataVaultError):
            logger.warning("Discarding unreadable stored session (slot=%s)", self._slot)
            self._discard()
            return None
        if not token:
            self._discard()
            return None
        return StoredCredential(access_token=token, identity=identity, token_type=token_type or "bearer")

    def save(self, credential: StoredCredential) -> None:
        try:
            token = encrypt_text(credential.access_token) if vault_enabled() else credential.access_token
        except DataVaultError as exc:
            raise CredentialStoreError("Unable to encrypt session token") from exc
        with self._session_factory() as db:
            try:
                row = db.get(StoredSession, self._slot)
                if row is None:
                    row = StoredSession(slot=self._slot)
                    db.add(row)
                row.access_token = token
                row.token_type = credential.token_type
                row.identity_json = credential.identity.model_dump_json()
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise CredentialStoreError("Unable to persist session") from exc

    def clear(self) -> None:
        with self._session_factory() as db:
            try:
                row = db.get(StoredSession, self._slot)
                if row is None:
                    return
                db.delete(row)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise CredentialStoreError("Unable to remove stored session") from exc

    def _discard(self) -> None:
        try:
            self.clear()
        except CredentialStoreError:
            logger.exception("Failed to discard unreadable stored session (slot=%s)", self._slot)


__all__ = [
    "CredentialStore",
    "CredentialStoreError",
    "MemoryCredentialStore",
    "SqlCredentialStore",
    "StoredCredential",
]
