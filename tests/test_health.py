"""
tests/test_health.py -- Integration tests for GET /api/v1/health.

Covers:
  - 200 response with status and version
  - No session required
"""

from __future__ import annotations

from api.main import __version__


def test_health_returns_200_with_version(api_client):
    """Health endpoint returns 200 with status and version."""
    client, _ = api_client
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": __version__}


def test_health_does_not_touch_session(api_client):
    """Health checks must not mount a form or consume a pending expiry message."""
    client, store = api_client
    store.expire()
    client.get("/api/v1/health")
    assert store.auth_expired_message is not None
