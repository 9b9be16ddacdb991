"""
core/models.py -- Login form domain types and user-facing messages.

Dataclasses for form state and the rendered view; a pydantic model for the
failure payload a login rejection may carry (response.data.message).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

# Form field names. The controller rejects anything else in set_field().
EMAIL_FIELD = "email"
PASSWORD_FIELD = "password"
FIELD_NAMES = (EMAIL_FIELD, PASSWORD_FIELD)

DASHBOARD_PATH = "/dashboard"

MSG_INVALID_EMAIL = "請輸入有效的 Email 格式"
MSG_PASSWORD_TOO_SHORT = "密碼必須至少 8 個字元"
MSG_PASSWORD_COMPOSITION = "密碼必須包含英文字母和數字"
MSG_LOGIN_FAILED = "登入失敗，請稍後再試"
MSG_SESSION_EXPIRED = "登入已過期，請重新登入"

# Field-level errors keyed by EMAIL_FIELD / PASSWORD_FIELD. Empty = valid.
FieldErrors = dict[str, str]


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class Credentials:
    email: str = ""
    password: str = ""


@dataclass(frozen=True)
class AuthSnapshot:
    is_authenticated: bool = False
    expired_message: Optional[str] = None


@dataclass(frozen=True)
class LoginView:
    """Everything a host UI needs to render the login form.

    Derived from controller state on demand; never stored.
    """

    status: SubmissionStatus
    email: str
    field_errors: FieldErrors = field(default_factory=dict)
    api_error: Optional[str] = None
    expired_message: Optional[str] = None
    submit_label: str = "登入"
    disabled: bool = False
    hint: Optional[str] = None
    title: str = "歡迎回來"
    subtitle: str = "請登入以繼續"
    email_label: str = "電子郵件"
    password_label: str = "密碼"


# ---------------------------------------------------------------------------
# Login failure payload
# ---------------------------------------------------------------------------


class FailureData(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: Optional[str] = None


class FailureResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    status: Optional[int] = None
    data: Optional[FailureData] = None


class FailurePayload(BaseModel):
    """Shape of a rejected login: {response?: {status?, data?: {message?}}}."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    response: Optional[FailureResponse] = None

    @property
    def message(self) -> Optional[str]:
        if self.response is None or self.response.data is None:
            return None
        return self.response.data.message


class LoginFailure(Exception):
    """Raised by an auth session service when a login attempt is rejected.

    The payload is optional: transport failures carry none, server rejections
    carry whatever the server sent back.
    """

    def __init__(self, payload: Optional[FailurePayload] = None) -> None:
        self.payload = payload or FailurePayload()
        super().__init__(self.payload.message or MSG_LOGIN_FAILED)

    @classmethod
    def from_payload(cls, raw: Any) -> "LoginFailure":
        """Build from a raw dict. Anything that does not fit the shape is treated as no payload."""
        if not isinstance(raw, dict):
            return cls()
        try:
            return cls(FailurePayload.model_validate(raw))
        except ValidationError:
            return cls()

    @classmethod
    def from_message(cls, message: str, status: Optional[int] = None) -> "LoginFailure":
        return cls(FailurePayload(response=FailureResponse(status=status, data=FailureData(message=message))))

    @property
    def status(self) -> Optional[int]:
        return self.payload.response.status if self.payload.response else None

    @property
    def display_message(self) -> str:
        """Server-provided message when present and non-empty, else the fixed fallback."""
        return self.payload.message or MSG_LOGIN_FAILED
