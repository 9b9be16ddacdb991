"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Backends produce these;
the session store holds at most one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AuthenticatedSession:
    """A successful login as seen by this client.

    access_token is opaque here -- it is only carried, never inspected.
    expires_in is the server's lifetime hint in seconds; None means the
    session store applies its own TTL.
    """

    email: str
    access_token: str
    expires_in: int | None = None
