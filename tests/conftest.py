"""Shared test fixtures."""
from __future__ import annotations

import os

# Settings are read at import time, so point them at throwaway locations first.
os.environ.setdefault("VIDSHARE_SESSION_DB_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("VIDSHARE_API_URL", "http://testserver")
os.environ.pop("VIDSHARE_VAULT_KEY", None)

from typing import AsyncIterator, Iterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fake_api import FakeBackend, create_app  # noqa: E402
from vidshare.database import init_db  # noqa: E402
from vidshare.main import ClientApp, build_client  # noqa: E402
from vidshare.services import MemoryCredentialStore  # noqa: E402


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    """Isolated in-memory database with the session table created."""

    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
    engine.dispose()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def client_app(backend: FakeBackend) -> AsyncIterator[ClientApp]:
    """A fully wired client talking to the in-process fake API."""

    app = build_client(
        store=MemoryCredentialStore(),
        transport=httpx.ASGITransport(app=create_app(backend)),
    )
    yield app
    await app.aclose()
