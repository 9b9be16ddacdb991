"""Tests for the command-line entry point in main.py.

main() is called in-process with an argv list; the process-wide session store
is replaced with a zero-delay mock store via patch so no settings-driven
backend (and no network) is involved.
"""

import asyncio
import json
from unittest.mock import patch

import pytest

import main
from auth.backends import MockAuthBackend
from auth.session import SessionStore
from core.models import MSG_INVALID_EMAIL


@pytest.fixture
def store() -> SessionStore:
    s = SessionStore(MockAuthBackend(delay=0))
    with patch("main.get_session_store", return_value=s):
        yield s


def test_run_login_success(store: SessionStore) -> None:
    view, redirect = asyncio.run(main.run_login(store, "test@test.com", "password1"))
    assert redirect == "/dashboard"
    assert view.status.value == "succeeded"
    assert store.listener_count == 0


def test_run_login_skips_submit_when_signed_in(store: SessionStore) -> None:
    asyncio.run(store.login("test@test.com", "password1"))
    view, redirect = asyncio.run(main.run_login(store, "abc", "x"))
    assert redirect == "/dashboard"
    assert view.field_errors == {}


def test_main_success_exit_code(store: SessionStore, capsys: pytest.CaptureFixture) -> None:
    code = main.main(["--email", "test@test.com", "--password", "password1"])
    assert code == 0
    assert "-> /dashboard" in capsys.readouterr().out


def test_main_validation_failure(store: SessionStore, capsys: pytest.CaptureFixture) -> None:
    code = main.main(["--email", "abc", "--password", "password1"])
    out = capsys.readouterr().out
    assert code == 1
    assert MSG_INVALID_EMAIL in out


def test_main_json_output(store: SessionStore, capsys: pytest.CaptureFixture) -> None:
    main.main(["--email", "test@test.com", "--password", "password1", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "succeeded"
    assert data["redirect_to"] == "/dashboard"
    assert "password" not in data


def test_main_prompts_for_password(store: SessionStore) -> None:
    with patch("main.getpass.getpass", return_value="password1") as prompt:
        assert main.main(["--email", "test@test.com"]) == 0
    prompt.assert_called_once()
