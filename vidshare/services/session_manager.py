"""Authenticated-identity lifecycle for the browser client.

The session manager is the single owner of the credential/identity pair. It
moves through four phases::

    INITIALIZING -> ANONYMOUS                      (nothing persisted)
    INITIALIZING -> VERIFYING -> AUTHENTICATED     (server accepted the token)
                             -> ANONYMOUS          (any verification failure)

``login``/``register`` move ANONYMOUS to AUTHENTICATED, and ``logout`` or
``revoke`` return to ANONYMOUS from anywhere, synchronously and without I/O
beyond the local store.

Every transition that invalidates in-flight work advances a generation
counter. Each network call captures the generation it was issued under and
its result is dropped if the counter has moved on, so a late verification or
login response can never resurrect a session that was logged out.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from ..clients import APIError
from ..schemas import Identity, TokenResponse
from .credential_store import CredentialStore, CredentialStoreError, StoredCredential

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Raised when a session transition cannot be completed."""


class SessionSupersededError(SessionError):
    """Raised when a logout or newer sign-in made a pending result stale."""


class SessionPhase(str, Enum):
    INITIALIZING = "initializing"
    VERIFYING = "verifying"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of the session exposed to views."""

    phase: SessionPhase
    identity: Identity | None = None

    @property
    def verifying(self) -> bool:
        return self.phase in (SessionPhase.INITIALIZING, SessionPhase.VERIFYING)

    @property
    def loading(self) -> bool:
        return self.verifying

    @property
    def is_known(self) -> bool:
        """``True`` once the anonymous/authenticated outcome has been determined."""
        return not self.verifying

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


class SessionAPI(Protocol):
    async def verify_identity(self, token: str) -> Identity:
        ...

    async def authenticate(self, username_or_email: str, password: str) -> TokenResponse:
        ...

    async def register_account(self, username: str, email: str, password: str) -> Identity:
        ...


SessionListener = Callable[[SessionState], None]


class SessionManager:
    def __init__(self, api: SessionAPI, store: CredentialStore) -> None:
        self._api = api
        self._store = store
        self._credential: StoredCredential | None = None
        self._state = SessionState(SessionPhase.INITIALIZING)
        self._generation = 0
        self._listeners: list[SessionListener] = []
        self._known = asyncio.Event()

    # --- read side ----------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> Identity | None:
        return self._state.identity

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def access_token(self) -> str | None:
        """Bearer token for the current session; used as the API token provider."""
        credential = self._credential
        return credential.access_token if credential is not None else None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` for state changes and return an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def wait_until_known(self) -> SessionState:
        await self._known.wait()
        return self._state

    # --- transitions --------------------------------------------------------

    async def start(self) -> SessionState:
        """Recover a persisted session, verifying it with the server."""

        if self._state.phase is not SessionPhase.INITIALIZING:
            return self._state

        stored = self._store.load()
        if stored is None:
            self._set_session(None)
            return self._state

        generation = self._advance()
        self._set_session(None, SessionPhase.VERIFYING)
        try:
            identity = await self._api.verify_identity(stored.access_token)
        except APIError as exc:
            if self._is_current(generation):
                logger.info("Stored credential rejected (status=%s); continuing anonymously", exc.status_code)
                self._end_session("credential invalid")
            return self._state
        except Exception:
            if self._is_current(generation):
                logger.exception("Unexpected error while verifying stored credential")
                self._end_session("verification failed")
            return self._state

        if not self._is_current(generation):
            logger.debug("Dropping verification result for superseded generation %d", generation)
            return self._state

        # Server values win over whatever was persisted earlier
        credential = stored.with_identity(identity)
        self._persist(credential)
        self._set_session(credential)
        logger.info("Session restored for user %s", identity.id)
        return self._state

    async def login(self, username_or_email: str, password: str) -> Identity:
        """Authenticate and establish a session.

        Authentication failures propagate unchanged and leave the current
        state untouched. Raises :class:`SessionSupersededError` when a logout
        happened while the request was in flight.
        """

        return await self._login(username_or_email, password, self._generation)

    async def register(self, username: str, email: str, password: str) -> Identity:
        """Create an account, then sign in with the same username and password."""

        generation = self._generation
        await self._api.register_account(username, email, password)
        if not self._is_current(generation):
            raise SessionSupersededError("Session changed while registering")
        return await self._login(username, password, generation)

    def logout(self) -> None:
        self._end_session("logout")

    def revoke(self, reason: str = "revoked") -> None:
        """Discard the session after the server stopped honouring the credential."""
        self._end_session(reason)

    # --- internals ----------------------------------------------------------

    async def _login(self, username_or_email: str, password: str, generation: int) -> Identity:
        token = await self._api.authenticate(username_or_email, password)
        if not self._is_current(generation):
            logger.info("Dropping sign-in result superseded by a newer session change")
            raise SessionSupersededError("Session changed while signing in")

        credential = StoredCredential(
            access_token=token.access_token,
            identity=token.user,
            token_type=token.token_type,
        )
        self._advance()
        self._persist(credential)
        self._set_session(credential)
        logger.info("Signed in as user %s", token.user.id)
        return token.user

    def _advance(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _persist(self, credential: StoredCredential) -> None:
        try:
            self._store.save(credential)
        except CredentialStoreError:
            # The in-memory session stays valid for this run
            logger.exception("Failed to persist session for user %s", credential.identity.id)

    def _end_session(self, reason: str) -> None:
        self._advance()
        try:
            self._store.clear()
        except CredentialStoreError:
            logger.exception("Failed to clear stored session (%s)", reason)
        previous = self._state.phase
        self._set_session(None)
        if previous is not SessionPhase.ANONYMOUS:
            logger.info("Session ended (%s)", reason)

    def _set_session(self, credential: StoredCredential | None, phase: SessionPhase | None = None) -> None:
        # Credential and identity always change together
        if credential is not None:
            state = SessionState(SessionPhase.AUTHENTICATED, credential.identity)
        else:
            state = SessionState(phase or SessionPhase.ANONYMOUS)
        self._credential = credential
        self._state = state
        if state.is_known:
            self._known.set()
        self._notify(state)

    def _notify(self, state: SessionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session listener failed")


__all__ = [
    "SessionAPI",
    "SessionError",
    "SessionListener",
    "SessionManager",
    "SessionPhase",
    "SessionState",
    "SessionSupersededError",
]
