#!/usr/bin/env python3
"""
loginflow -- Drive the login form from the terminal.

Usage:
  python main.py --email test@test.com
  python main.py --email test@test.com --password password1
  python main.py --email test@test.com --password password1 --json

Environment variables:
  API_URL   Base URL of the login API. When unset, the mock backend accepts
            any well-formed email and a password of 8+ characters with both
            letters and digits.

Exit status: 0 when the dashboard was reached, 1 otherwise.
"""

import argparse
import asyncio
import getpass
import json
import logging
import sys
from dataclasses import asdict
from typing import Optional

from auth.session import SessionStore, get_session_store
from core.config import get_settings
from core.controller import LoginFlowController
from core.models import EMAIL_FIELD, PASSWORD_FIELD, LoginView
from core.navigation import HistoryNavigator

logger = logging.getLogger("loginflow.cli")

LOGIN_PATH = "/login"


async def run_login(
    store: SessionStore,
    email: str,
    password: str,
    show_hint: bool = False,
    dashboard_path: str = "/dashboard",
) -> tuple[LoginView, Optional[str]]:
    """Mount one form, submit the given credentials, return (view, redirect target or None)."""
    navigator = HistoryNavigator(LOGIN_PATH)
    with LoginFlowController(store, navigator, show_hint=show_hint, dashboard_path=dashboard_path) as form:
        # A signed-in session has already been redirected; the form ignores these.
        form.set_field(EMAIL_FIELD, email)
        form.set_field(PASSWORD_FIELD, password)
        await form.submit()
        view = form.view()
    redirect = navigator.current if navigator.current != LOGIN_PATH else None
    return view, redirect


def print_view(view: LoginView, redirect: Optional[str]) -> None:
    print(f"  {view.title} -- {view.subtitle}")
    if view.hint:
        print(f"  {view.hint}")
    if view.expired_message:
        print(f"  [i] {view.expired_message}")
    for name, label in ((EMAIL_FIELD, view.email_label), (PASSWORD_FIELD, view.password_label)):
        if name in view.field_errors:
            print(f"  [!] {label}: {view.field_errors[name]}")
    if view.api_error:
        print(f"  [!] {view.api_error}")
    if redirect:
        print(f"  -> {redirect}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="loginflow",
        description="Validate and submit login credentials through the login form controller.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--email", required=True, help="Email address to log in with")
    parser.add_argument("--password", help="Password (prompted for when omitted)")
    parser.add_argument("--json", action="store_true", help="Print the rendered form state as JSON")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    password = args.password if args.password is not None else getpass.getpass("  Password: ")
    store = get_session_store()
    view, redirect = asyncio.run(
        run_login(
            store,
            args.email,
            password,
            show_hint=settings.uses_mock_backend,
            dashboard_path=settings.dashboard_path,
        )
    )

    if args.json:
        data = asdict(view)
        data["status"] = view.status.value
        data["redirect_to"] = redirect
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print_view(view, redirect)
    return 0 if redirect else 1


if __name__ == "__main__":
    sys.exit(main())
