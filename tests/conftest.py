"""
tests/conftest.py -- Shared test fixtures for loginflow.

This module provides:
  - fake_session: a FakeAuthSession (tests/fakes.py) for controller unit tests
  - navigator: a MagicMock navigator -- assert on navigate(path, replace=...)
  - session_store: a real SessionStore over a zero-delay mock backend
  - api_client: TestClient over the real FastAPI app with a patched lifespan
    that wires the session_store fixture into app.state

Async scenarios run inside plain test functions via asyncio.run().
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.backends import MockAuthBackend
from auth.session import SessionStore
from core.config import get_settings
from tests.fakes import FakeAuthSession


@pytest.fixture
def fake_session() -> FakeAuthSession:
    return FakeAuthSession()


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock()


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore(MockAuthBackend(delay=0))


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


def _patch_lifespan(store: SessionStore):
    """Return an async context manager that replaces the real lifespan.

    Wires the test store into app.state so routes never touch the
    process-wide store built from the real environment.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.session_store = store
        yield

    return test_lifespan


@pytest.fixture
def api_client(
    session_store: SessionStore, monkeypatch: pytest.MonkeyPatch
) -> Generator[tuple[TestClient, SessionStore], None, None]:
    """Yield (client, store) for API integration tests.

    Function-scoped: every test starts from a signed-out store. API_URL is
    cleared so the form renders in mock-backend mode (demo hint shown).
    """
    monkeypatch.delenv("API_URL", raising=False)
    monkeypatch.delenv("DASHBOARD_PATH", raising=False)
    get_settings.cache_clear()
    app.router.lifespan_context = _patch_lifespan(session_store)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, session_store
    get_settings.cache_clear()
