"""
auth/session.py -- Process-wide session store (the auth session service).

Pattern: Observable store. One SessionStore per process owns the login state;
login forms and other components read its snapshot and subscribe for change
notifications. Listeners are called synchronously, in subscription order,
after every state change.

Public surface used by the login form:
  is_authenticated             -- read
  auth_expired_message         -- read
  login(email, password)       -- command (async)
  clear_auth_expired_message() -- command (idempotent)
  subscribe(listener)          -- returns an unsubscribe callable

Everything else (logout, expire, check_expiry, user_email) is for the rest of
the client: an HTTP 401 anywhere calls expire(), which parks the "login
expired" message here until a login form displays and clears it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from functools import lru_cache

from auth.backends import AuthBackend, build_backend
from auth.models import AuthenticatedSession
from core.config import get_settings
from core.models import MSG_SESSION_EXPIRED, AuthSnapshot

logger = logging.getLogger("loginflow.session")

Listener = Callable[[], None]


class SessionStore:
    """Holds at most one authenticated session plus a pending expiry message.

    Usage:
        store = SessionStore(MockAuthBackend(delay=0))
        unsubscribe = store.subscribe(lambda: print(store.snapshot()))
        await store.login("test@test.com", "password1")
        store.expire()
        unsubscribe()
    """

    def __init__(
        self,
        backend: AuthBackend,
        session_ttl: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._backend = backend
        self._session_ttl = session_ttl
        self._clock = clock
        self._session: AuthenticatedSession | None = None
        self._expires_at: float | None = None
        self._expired_message: str | None = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def auth_expired_message(self) -> str | None:
        return self._expired_message

    @property
    def user_email(self) -> str | None:
        return self._session.email if self._session else None

    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(is_authenticated=self.is_authenticated, expired_message=self._expired_message)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; the returned callable removes it (idempotent)."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        # Copy: a listener may unsubscribe itself (or others) while we iterate.
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> None:
        """Authenticate through the backend. LoginFailure propagates to the caller."""
        session = await self._backend.authenticate(email, password)
        ttl = session.expires_in if session.expires_in else self._session_ttl
        self._session = session
        self._expires_at = self._clock() + ttl
        self._expired_message = None
        logger.info("Session started for %s (ttl=%ds)", session.email, ttl)
        self._notify()

    def logout(self) -> None:
        if self._session is None:
            return
        logger.info("Session ended for %s", self._session.email)
        self._session = None
        self._expires_at = None
        self._notify()

    def expire(self, message: str = MSG_SESSION_EXPIRED) -> None:
        """Drop the session and park an expiry message for the next login form."""
        if self._session is not None:
            logger.info("Session expired for %s", self._session.email)
        self._session = None
        self._expires_at = None
        self._expired_message = message
        self._notify()

    def check_expiry(self) -> bool:
        """Expire the session if its lifetime has passed. Returns True if it did."""
        if self._expires_at is None or self._clock() < self._expires_at:
            return False
        self.expire()
        return True

    def clear_auth_expired_message(self) -> None:
        if self._expired_message is None:
            return
        self._expired_message = None
        self._notify()


@lru_cache
def get_session_store() -> SessionStore:
    """Return the process-wide SessionStore, built from settings on first call.

    In tests: call get_session_store.cache_clear() to start from a fresh store.
    """
    settings = get_settings()
    return SessionStore(build_backend(settings), session_ttl=settings.session_ttl_seconds)
