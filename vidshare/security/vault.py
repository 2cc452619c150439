"""At-rest protection for the persisted bearer token.

When ``VIDSHARE_VAULT_KEY`` holds a Fernet key, tokens are sealed before they
reach the session database and opened again on load. Values stored before a
key was configured carry no marker and are handed back unchanged.
"""
from __future__ import annotations

import threading
from typing import Final

from cryptography.fernet import Fernet, InvalidToken

from .secrets import MissingSecretError, optional_secret, require_secret

VAULT_KEY_ENV: Final[str] = "VIDSHARE_VAULT_KEY"
MARKER: Final[str] = "vault.v1:"


class DataVaultError(RuntimeError):
    """Raised when a token cannot be sealed or opened."""


class TokenVault:
    def __init__(self, key: str) -> None:
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except (ValueError, TypeError) as exc:
            raise DataVaultError(f"{VAULT_KEY_ENV} is not a valid Fernet key") from exc

    def seal(self, token: str) -> str:
        sealed = self._fernet.encrypt(token.encode("utf-8")).decode("ascii")
        return MARKER + sealed

    def open(self, sealed: str) -> str:
        try:
            return self._fernet.decrypt(sealed[len(MARKER) :].encode("ascii")).decode("utf-8")
        except InvalidToken as exc:
            raise DataVaultError("Stored token was sealed with a different key") from exc


_vault_lock = threading.Lock()
_vault_instance: TokenVault | None = None


def _active_vault() -> TokenVault:
    global _vault_instance
    with _vault_lock:
        if _vault_instance is None:
            try:
                _vault_instance = TokenVault(require_secret(VAULT_KEY_ENV))
            except MissingSecretError as exc:
                raise DataVaultError(str(exc)) from exc
        return _vault_instance


def vault_enabled() -> bool:
    return optional_secret(VAULT_KEY_ENV) is not None


def is_ciphertext(value: str | None) -> bool:
    return bool(value) and value.startswith(MARKER)


def encrypt_text(value: str) -> str:
    """Seal ``value`` with the configured key; already sealed values pass through."""

    if is_ciphertext(value):
        return value
    return _active_vault().seal(value or "")


def decrypt_text(value: str) -> str:
    """Open a sealed value; anything without the vault marker is returned as-is."""

    if not is_ciphertext(value):
        return value or ""
    return _active_vault().open(value)


__all__ = [
    "DataVaultError",
    "MARKER",
    "TokenVault",
    "VAULT_KEY_ENV",
    "decrypt_text",
    "encrypt_text",
    "is_ciphertext",
    "vault_enabled",
]
