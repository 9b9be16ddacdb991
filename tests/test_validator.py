"""Unit tests for the login form validator in core/validator.py.

Covers:
- Email shape (local@domain.tld)
- Password length check takes precedence over the composition check
- Both fields are always evaluated together
- Purity (same input, same output)
"""

import pytest

from core.models import (
    MSG_INVALID_EMAIL,
    MSG_PASSWORD_COMPOSITION,
    MSG_PASSWORD_TOO_SHORT,
    Credentials,
)
from core.validator import validate, validate_email, validate_password

# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


class TestValidateEmail:
    @pytest.mark.parametrize(
        "email",
        ["test@test.com", "a@b.co", "first.last+tag@sub.example.org", "用戶@例子.公司"],
    )
    def test_accepts_well_formed(self, email: str) -> None:
        assert validate_email(email) is None

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "abc",
            "@test.com",  # empty local part
            "test@",  # empty domain
            "test@test",  # no dot in domain
            "test@test.",  # empty label after dot
            "te st@test.com",  # whitespace
            "test@@test.com",
            "test@test.com\n",  # trailing newline
            "\ntest@test.com",
        ],
    )
    def test_rejects_malformed(self, email: str) -> None:
        assert validate_email(email) == MSG_INVALID_EMAIL


# ---------------------------------------------------------------------------
# Password
# ---------------------------------------------------------------------------


class TestValidatePassword:
    def test_valid_password(self) -> None:
        assert validate_password("password1") is None

    @pytest.mark.parametrize("password", ["", "abc1", "abcdefg", "1234567", "!!!!!!!"])
    def test_short_password_reports_length_only(self, password: str) -> None:
        """Under 8 characters: length error, never the composition error."""
        assert validate_password(password) == MSG_PASSWORD_TOO_SHORT

    @pytest.mark.parametrize("password", ["12345678", "abcdefgh", "ABCDEFGH", "!@#$%^&*", "密碼密碼密碼密碼"])
    def test_long_password_missing_letter_or_digit(self, password: str) -> None:
        assert validate_password(password) == MSG_PASSWORD_COMPOSITION

    def test_exactly_eight_characters_is_long_enough(self) -> None:
        assert validate_password("abcdefg1") is None

    def test_non_ascii_digits_do_not_count(self) -> None:
        # Full-width digits are not ASCII digits.
        assert validate_password("abcdefg１") == MSG_PASSWORD_COMPOSITION


# ---------------------------------------------------------------------------
# validate()
# ---------------------------------------------------------------------------


class TestValidate:
    def test_valid_credentials_return_empty_mapping(self) -> None:
        assert validate(Credentials(email="test@test.com", password="password1")) == {}

    def test_invalid_email_with_valid_password(self) -> None:
        assert validate(Credentials(email="abc", password="password1")) == {"email": MSG_INVALID_EMAIL}

    def test_both_errors_reported_together(self) -> None:
        errors = validate(Credentials(email="abc", password="123"))
        assert errors == {"email": MSG_INVALID_EMAIL, "password": MSG_PASSWORD_TOO_SHORT}

    def test_malformed_email_does_not_hide_composition_error(self) -> None:
        errors = validate(Credentials(email="abc", password="12345678"))
        assert errors == {"email": MSG_INVALID_EMAIL, "password": MSG_PASSWORD_COMPOSITION}

    def test_is_pure(self) -> None:
        creds = Credentials(email="abc", password="abc1")
        assert validate(creds) == validate(creds)
        assert creds == Credentials(email="abc", password="abc1")
