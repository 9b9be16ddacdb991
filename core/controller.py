"""
core/controller.py -- Login form state machine.

Pattern: State machine over SubmissionStatus.

    idle --valid submit--> submitting --login ok--> succeeded (navigates away)
      ^                        |
      |                        +--login rejected--> failed --valid submit--> submitting
      +-- invalid submit (stays idle, login never called)

The controller owns the form's credentials and errors for the lifetime of one
mounted form. Session state belongs to the auth session service; the
controller only reads is_authenticated / auth_expired_message, calls
login() / clear_auth_expired_message(), and subscribes for change
notifications so reconciliation is push-based.

Teardown: dispose() (or leaving the `with` block) unsubscribes and marks the
instance dead. A login that resolves afterwards is ignored -- it must never
mutate a dead form or raise.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from core.models import (
    DASHBOARD_PATH,
    FIELD_NAMES,
    MSG_LOGIN_FAILED,
    Credentials,
    FieldErrors,
    LoginFailure,
    LoginView,
    SubmissionStatus,
)
from core.navigation import Navigator
from core.validator import validate

logger = logging.getLogger("loginflow.controller")

SUBMIT_LABEL = "登入"
SUBMIT_LABEL_PENDING = "登入中..."
DEMO_HINT = "測試帳號：任意 email 格式 / 密碼需包含英數且8位以上"


class AuthSession(Protocol):
    """The slice of the auth session service the controller depends on."""

    @property
    def is_authenticated(self) -> bool: ...

    @property
    def auth_expired_message(self) -> Optional[str]: ...

    async def login(self, email: str, password: str) -> None: ...

    def clear_auth_expired_message(self) -> None: ...

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]: ...


class LoginFlowController:
    """Drives one mounted login form.

    Usage:
        with LoginFlowController(session, navigator, show_hint=True) as form:
            form.set_field("email", "test@test.com")
            form.set_field("password", "password1")
            await form.submit()
            view = form.view()
    """

    def __init__(
        self,
        session: AuthSession,
        navigator: Navigator,
        show_hint: bool = False,
        dashboard_path: str = DASHBOARD_PATH,
    ) -> None:
        self._session = session
        self._navigator = navigator
        self._show_hint = show_hint
        self._dashboard_path = dashboard_path

        self.credentials = Credentials()
        self.field_errors: FieldErrors = {}
        self.status = SubmissionStatus.IDLE
        self.api_error: Optional[str] = None
        self.expired_message: Optional[str] = None

        self._navigated = False
        self._disposed = False
        self._unsubscribe = session.subscribe(self.reconcile)
        try:
            self.reconcile()
        except Exception:
            self.dispose()
            raise

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> "LoginFlowController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Detach from the session service. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Form operations
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        """Update one credential field.

        Errors from the last submit stay on screen until the next submit.
        Edits while a login is in flight are dropped; the inputs are disabled.
        So are edits once the form has redirected to the dashboard.
        """
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown login field: {name!r}")
        if self.status is SubmissionStatus.SUBMITTING:
            logger.debug("Ignoring edit to %s while submitting", name)
            return
        if self._navigated:
            logger.debug("Ignoring edit to %s after redirect", name)
            return
        setattr(self.credentials, name, value)

    async def submit(self) -> SubmissionStatus:
        """Validate, then log in if the fields are valid. Returns the resulting status.

        No-op while a login is in flight, after success (terminal), and once
        reconciliation has redirected a signed-in session away from the form.
        """
        if self._disposed or self.status in (SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCEEDED):
            return self.status
        if self._navigated:
            logger.debug("Ignoring submit after redirect")
            return self.status

        # Every attempt starts clean: both fields re-validated, old API error dropped.
        self.api_error = None
        self.field_errors = validate(self.credentials)
        if self.field_errors:
            self.status = SubmissionStatus.IDLE
            return self.status

        self.status = SubmissionStatus.SUBMITTING
        email, password = self.credentials.email, self.credentials.password
        try:
            await self._session.login(email, password)
        except LoginFailure as exc:
            if self._stale("rejection"):
                return self.status
            logger.info("Login rejected for %s (status=%s)", email, exc.status)
            self.status = SubmissionStatus.FAILED
            self.api_error = exc.display_message
            return self.status
        except Exception:
            if self._stale("error"):
                return self.status
            logger.exception("Unexpected error during login for %s", email)
            self.status = SubmissionStatus.FAILED
            self.api_error = MSG_LOGIN_FAILED
            return self.status

        if self._stale("success"):
            return self.status
        logger.info("Login succeeded for %s", email)
        self.status = SubmissionStatus.SUCCEEDED
        self._go_to_dashboard()
        return self.status

    def reconcile(self) -> None:
        """Bring the form in line with the current session snapshot.

        Called at construction and on every session notification.
        """
        if self._disposed:
            return
        if self._session.is_authenticated:
            self._go_to_dashboard()
        message = self._session.auth_expired_message
        if message is not None:
            self.expired_message = message
            # Clearing notifies subscribers, which re-enters reconcile() with
            # the message already gone.
            self._session.clear_auth_expired_message()

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def submitting(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTING

    def view(self) -> LoginView:
        return LoginView(
            status=self.status,
            email=self.credentials.email,
            field_errors=dict(self.field_errors),
            api_error=self.api_error,
            expired_message=self.expired_message,
            submit_label=SUBMIT_LABEL_PENDING if self.submitting else SUBMIT_LABEL,
            disabled=self.submitting,
            hint=DEMO_HINT if self._show_hint else None,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _go_to_dashboard(self) -> None:
        # Session notification and submit completion can both see success.
        if self._navigated:
            return
        self._navigated = True
        self._navigator.navigate(self._dashboard_path, replace=True)

    def _stale(self, outcome: str) -> bool:
        if self._disposed:
            logger.debug("Discarding login %s for a disposed form", outcome)
            return True
        return False
