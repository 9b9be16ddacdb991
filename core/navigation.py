"""
navigation.py -- Navigator contract and an in-memory history implementation.

The controller only ever calls navigate(path, replace=...). Hosts supply
whatever performs the redirect: a browser router, an HTTP redirect, or the
HistoryNavigator below for the CLI and the JSON API.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger("loginflow.navigation")


class Navigator(Protocol):
    def navigate(self, path: str, replace: bool = False) -> None: ...


class HistoryNavigator:
    """A history stack with push and replace semantics.

    Usage:
        nav = HistoryNavigator("/login")
        nav.navigate("/dashboard", replace=True)
        nav.current   # "/dashboard"
        nav.entries   # ["/dashboard"] -- back does not return to /login
    """

    def __init__(self, initial: str = "/") -> None:
        self._entries: list[str] = [initial]

    @property
    def current(self) -> str:
        return self._entries[-1]

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def navigate(self, path: str, replace: bool = False) -> None:
        if replace:
            logger.debug("navigate %s -> %s (replace)", self.current, path)
            self._entries[-1] = path
        else:
            logger.debug("navigate %s -> %s", self.current, path)
            self._entries.append(path)

    def back(self) -> str:
        """Pop the current entry. The first entry is never popped."""
        if len(self._entries) > 1:
            self._entries.pop()
        return self.current
