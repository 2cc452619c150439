"""Read key material from the environment without echoing it back."""
from __future__ import annotations

import os
from typing import Final

__all__ = ["MissingSecretError", "require_secret", "optional_secret", "is_placeholder"]


class MissingSecretError(RuntimeError):
    """Raised when a required key is absent or still set to a sample value."""


# Values shipped in sample .env files; treated the same as unset
_PLACEHOLDER_VALUES: Final[frozenset[str]] = frozenset(
    {
        "changeme",
        "change-me",
        "placeholder",
        "example",
        "sample",
        "your-key-here",
        "none",
    }
)


def is_placeholder(value: str | None) -> bool:
    cleaned = (value or "").strip()
    return not cleaned or cleaned.lower() in _PLACEHOLDER_VALUES


def optional_secret(name: str) -> str | None:
    """Return the trimmed value of ``name``, or ``None`` when it is not really set."""

    value = os.getenv(name)
    return None if is_placeholder(value) else value.strip()


def require_secret(name: str) -> str:
    value = optional_secret(name)
    if value is None:
        raise MissingSecretError(f"Environment variable {name} must be set to a real key")
    return value
