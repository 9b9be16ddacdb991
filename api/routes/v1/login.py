"""
api/routes/v1/login.py -- Login form and session endpoints.

Routes:
  GET  /api/v1/login            -- mount the form, return its rendered view
  POST /api/v1/login            -- mount the form, fill it, submit, return the view
  GET  /api/v1/session          -- current session snapshot (read-only)
  POST /api/v1/session/expire   -- mark the session expired (e.g. after a 401)
  POST /api/v1/logout           -- end the session

Every login request mounts a fresh LoginFlowController against the
process-wide SessionStore and disposes it before the response is sent, so a
form instance lives exactly as long as one request. Navigation is captured
with a HistoryNavigator starting at /login; if the controller navigated, the
target is returned as redirect_to for the front end to follow (with
history-replace semantics).

Reconciliation runs before any submit: an already-authenticated session is
redirected without calling login again, and a pending expiry message is shown
in exactly one view.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from api.models import ExpireRequest, LoginRequest, LoginViewResponse, SessionResponse
from auth.session import SessionStore
from core.config import get_settings
from core.controller import LoginFlowController
from core.models import EMAIL_FIELD, MSG_SESSION_EXPIRED, PASSWORD_FIELD
from core.navigation import HistoryNavigator

logger = logging.getLogger("loginflow.api")

LOGIN_PATH = "/login"

router = APIRouter()


def _mount(request: Request) -> tuple[LoginFlowController, HistoryNavigator]:
    settings = get_settings()
    store: SessionStore = request.app.state.session_store
    store.check_expiry()
    navigator = HistoryNavigator(LOGIN_PATH)
    controller = LoginFlowController(
        store,
        navigator,
        show_hint=settings.uses_mock_backend,
        dashboard_path=settings.dashboard_path,
    )
    return controller, navigator


def _render(controller: LoginFlowController, navigator: HistoryNavigator) -> LoginViewResponse:
    redirect_to = navigator.current if navigator.current != LOGIN_PATH else None
    return LoginViewResponse.from_view(controller.view(), redirect_to=redirect_to)


@router.get("/login", response_model=LoginViewResponse)
async def login_form(request: Request) -> LoginViewResponse:
    """Render the empty login form (or the redirect, if already signed in)."""
    controller, navigator = _mount(request)
    with controller:
        return _render(controller, navigator)


@router.post("/login", response_model=LoginViewResponse)
async def login_submit(request: Request, body: LoginRequest) -> LoginViewResponse:
    """Fill the form with the posted values and submit it.

    Validation failures and login rejections both come back as 200 with the
    form view -- they are form states, not transport errors.
    """
    controller, navigator = _mount(request)
    with controller:
        controller.set_field(EMAIL_FIELD, body.email)
        controller.set_field(PASSWORD_FIELD, body.password)
        await controller.submit()
        return _render(controller, navigator)


@router.get("/session", response_model=SessionResponse)
async def session_info(request: Request) -> SessionResponse:
    """Peek at the session. Does not consume the pending expiry message."""
    store: SessionStore = request.app.state.session_store
    store.check_expiry()
    return SessionResponse(
        is_authenticated=store.is_authenticated,
        email=store.user_email,
        expired_message=store.auth_expired_message,
    )


@router.post("/session/expire", response_model=SessionResponse)
async def session_expire(request: Request, body: ExpireRequest) -> SessionResponse:
    """Mark the session expired. The next login form shows the message once.

    Unauthenticated: the store is the single client session of this process,
    so any caller that can reach the host can expire it. Bind the host to
    localhost (uvicorn's default, 127.0.0.1).
    """
    store: SessionStore = request.app.state.session_store
    store.expire(body.message or MSG_SESSION_EXPIRED)
    return SessionResponse(is_authenticated=False, expired_message=store.auth_expired_message)


@router.post("/logout", response_model=SessionResponse)
async def logout(request: Request) -> SessionResponse:
    """End the process-wide session. Unauthenticated, like /session/expire."""
    store: SessionStore = request.app.state.session_store
    store.logout()
    return SessionResponse(is_authenticated=False)
