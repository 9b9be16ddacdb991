"""
auth/backends.py -- Where a login attempt is actually decided.

Two backends share one async contract:

    async def authenticate(email, password) -> AuthenticatedSession
        raises LoginFailure on rejection

  MockAuthBackend: used when API_URL is not configured. Accepts any
      credentials that pass the form validator -- exactly what the demo hint
      on the login form promises. Sleeps first so the pending state shows.

  HttpAuthBackend: POST {API_URL}/auth/login with a JSON body. requests is
      blocking, so the call runs in a worker thread via asyncio.to_thread and
      the event loop stays free while the login is in flight.

Error mapping (HttpAuthBackend):
  2xx                    -> AuthenticatedSession (token from access_token or token)
  non-2xx                -> LoginFailure carrying {status, data: <JSON body>}
  RequestException / bad JSON on 2xx -> LoginFailure with no payload (fallback text)

Passwords and tokens are never logged.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Any, Optional, Protocol

import requests

from auth.models import AuthenticatedSession
from core.config import Settings
from core.models import Credentials, LoginFailure
from core.validator import validate

logger = logging.getLogger("loginflow.backends")

LOGIN_ENDPOINT = "/auth/login"


class AuthBackend(Protocol):
    async def authenticate(self, email: str, password: str) -> AuthenticatedSession: ...


class MockAuthBackend:
    def __init__(self, delay: float = 0.5, expires_in: Optional[int] = None) -> None:
        self.delay = delay
        self.expires_in = expires_in

    async def authenticate(self, email: str, password: str) -> AuthenticatedSession:
        if self.delay:
            await asyncio.sleep(self.delay)
        errors = validate(Credentials(email=email, password=password))
        if errors:
            # Report the first problem the form itself would show.
            first = next(iter(errors.values()))
            raise LoginFailure.from_message(first, status=400)
        logger.debug("Mock login accepted for %s", email)
        return AuthenticatedSession(email=email, access_token=secrets.token_urlsafe(32), expires_in=self.expires_in)


class HttpAuthBackend:
    """Talks to a real login API.

    Usage:
        backend = HttpAuthBackend("https://api.example.com")
        session = await backend.authenticate("me@example.com", "password1")
    """

    def __init__(self, api_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.url = api_url.rstrip("/") + LOGIN_ENDPOINT
        self.timeout = timeout
        # One pooled session per backend. max_redirects=3 -- a login endpoint
        # that bounces more than that is misconfigured.
        self._session = session or requests.Session()
        self._session.max_redirects = 3

    async def authenticate(self, email: str, password: str) -> AuthenticatedSession:
        return await asyncio.to_thread(self._post_login, email, password)

    def _post_login(self, email: str, password: str) -> AuthenticatedSession:
        try:
            resp = self._session.post(self.url, json={"email": email, "password": password}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Login request to %s failed: %s", self.url, e)
            raise LoginFailure() from e

        if not resp.ok:
            logger.info("Login API rejected %s with HTTP %d", email, resp.status_code)
            raise LoginFailure.from_payload({"response": {"status": resp.status_code, "data": _json_or_none(resp)}})

        body = _json_or_none(resp)
        token = (body or {}).get("access_token") or (body or {}).get("token")
        if not token:
            logger.warning("Login API returned HTTP %d without a token", resp.status_code)
            raise LoginFailure()
        expires_in = body.get("expires_in")
        return AuthenticatedSession(
            email=email,
            access_token=str(token),
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
        )


def _json_or_none(resp: requests.Response) -> Optional[dict[str, Any]]:
    try:
        data = resp.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def build_backend(settings: Settings) -> AuthBackend:
    """Pick the backend for the configured environment."""
    if settings.uses_mock_backend:
        logger.info("No API_URL configured -- using mock login backend")
        return MockAuthBackend(delay=settings.mock_login_delay)
    logger.info("Using login API at %s", settings.api_url)
    return HttpAuthBackend(settings.api_url, timeout=settings.request_timeout)
