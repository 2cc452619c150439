"""Application entry point wiring the client core together."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx
from markupsafe import Markup

from .clients import VidshareAPIClient
from .config import Settings, get_settings
from .database import init_db
from .services import CredentialStore, MediaResolver, SessionManager, SessionState, SqlCredentialStore
from .ui.components.navigation import navbar

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@dataclass(slots=True)
class ClientApp:
    """One browser-client instance: API access, session and media resolution."""

    settings: Settings
    api: VidshareAPIClient
    session: SessionManager
    media: MediaResolver

    async def start(self) -> SessionState:
        state = await self.session.start()
        logger.info("Client ready (phase=%s)", state.phase.value)
        return state

    def navbar(self) -> Markup:
        return navbar(self.session.state, app_name=self.settings.app_name)

    async def aclose(self) -> None:
        await self.api.aclose()


def configure_logging(level: str | None = None) -> None:
    resolved = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT)


def build_client(
    settings: Settings | None = None,
    *,
    store: CredentialStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ClientApp:
    settings = settings or get_settings()
    api = VidshareAPIClient(settings.api_url, timeout=settings.api_timeout, transport=transport)
    if store is None:
        init_db()
        store = SqlCredentialStore(slot=settings.session_slot)
    session = SessionManager(api, store)
    # Protected calls always use whatever credential the session holds right now
    api.set_token_provider(lambda: session.access_token)
    return ClientApp(settings=settings, api=api, session=session, media=MediaResolver(api))


async def _check_session() -> SessionState:
    app = build_client()
    try:
        return await app.start()
    finally:
        await app.aclose()


def main() -> None:
    """Restore the persisted session and report who is signed in."""
    configure_logging()
    state = asyncio.run(_check_session())
    if state.identity is None:
        logger.info("No active session")
    else:
        logger.info("Signed in as %s", state.identity.username)


__all__ = ["ClientApp", "LOG_FORMAT", "build_client", "configure_logging", "main"]


if __name__ == "__main__":
    main()
