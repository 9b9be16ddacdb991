"""
validator.py -- Field validation for the login form.

Pure functions. No network, no logging, no side effects. Both fields are
always checked so a submit attempt shows every problem at once.
"""

import re
from typing import Optional

from core.models import (
    EMAIL_FIELD,
    MSG_INVALID_EMAIL,
    MSG_PASSWORD_COMPOSITION,
    MSG_PASSWORD_TOO_SHORT,
    PASSWORD_FIELD,
    Credentials,
    FieldErrors,
)

# local@domain.tld -- no whitespace, exactly one "@", a dot in the domain with
# a non-empty label after it.
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LETTER_RE = re.compile(r"[A-Za-z]")
_DIGIT_RE = re.compile(r"[0-9]")

MIN_PASSWORD_LENGTH = 8


def validate_email(value: str) -> Optional[str]:
    # fullmatch: "$" alone would accept a trailing newline.
    if not _EMAIL_RE.fullmatch(value):
        return MSG_INVALID_EMAIL
    return None


def validate_password(value: str) -> Optional[str]:
    """Return the password error, or None.

    Length wins: a short password never also reports the composition error.
    """
    if len(value) < MIN_PASSWORD_LENGTH:
        return MSG_PASSWORD_TOO_SHORT
    if not (_LETTER_RE.search(value) and _DIGIT_RE.search(value)):
        return MSG_PASSWORD_COMPOSITION
    return None


def validate(credentials: Credentials) -> FieldErrors:
    errors: FieldErrors = {}
    email_error = validate_email(credentials.email)
    if email_error:
        errors[EMAIL_FIELD] = email_error
    password_error = validate_password(credentials.password)
    if password_error:
        errors[PASSWORD_FIELD] = password_error
    return errors
