"""
API request and response models for the loginflow HTTP host.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in core/models.py, which
own the internal domain representation. Route handlers map between the two.

Field format checks (email shape, password rules) are NOT done here -- the
form validator owns them and reports them as field_errors in the view, the
same way an in-browser form would.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import LoginView, SubmissionStatus

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/login. Values are taken verbatim."""

    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=1024)


class ExpireRequest(BaseModel):
    """Request body for POST /api/v1/session/expire."""

    message: Optional[str] = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LoginViewResponse(BaseModel):
    """Rendered state of the login form. The password is never echoed back."""

    model_config = ConfigDict(frozen=True)

    status: SubmissionStatus
    email: str
    field_errors: dict[str, str]
    api_error: Optional[str]
    expired_message: Optional[str]
    submit_label: str
    disabled: bool
    hint: Optional[str]
    title: str
    subtitle: str
    email_label: str
    password_label: str
    redirect_to: Optional[str] = None

    @classmethod
    def from_view(cls, view: LoginView, redirect_to: Optional[str] = None) -> "LoginViewResponse":
        """Factory Method -- the mapping lives beside the output model."""
        return cls(
            status=view.status,
            email=view.email,
            field_errors=view.field_errors,
            api_error=view.api_error,
            expired_message=view.expired_message,
            submit_label=view.submit_label,
            disabled=view.disabled,
            hint=view.hint,
            title=view.title,
            subtitle=view.subtitle,
            email_label=view.email_label,
            password_label=view.password_label,
            redirect_to=redirect_to,
        )


class SessionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_authenticated: bool
    email: Optional[str] = None
    expired_message: Optional[str] = None


class ErrorDetail(BaseModel):
    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Uniform error envelope for every non-2xx response."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
