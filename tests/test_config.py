"""Unit tests for core/config.py Settings validation.

Settings are built with explicit keyword arguments (which take precedence over
the environment) except where the env-var mapping itself is under test.
"""

import pytest

from core.config import Settings, get_settings


def test_defaults() -> None:
    s = Settings(api_url="")
    assert s.uses_mock_backend
    assert s.dashboard_path == "/dashboard"
    assert s.session_ttl_seconds == 3600


def test_api_url_trailing_slash_stripped() -> None:
    s = Settings(api_url=" https://api.example.com/ ")
    assert s.api_url == "https://api.example.com"
    assert not s.uses_mock_backend


def test_api_url_requires_http_scheme() -> None:
    with pytest.raises(ValueError):
        Settings(api_url="ftp://api.example.com")


@pytest.mark.parametrize("path", ["dashboard", "//evil.example.com", "https://evil.example.com"])
def test_dashboard_path_must_be_local(path: str) -> None:
    with pytest.raises(ValueError):
        Settings(dashboard_path=path)


@pytest.mark.parametrize(
    "kwargs",
    [{"session_ttl_seconds": 0}, {"request_timeout": 0}, {"mock_login_delay": -1}, {"log_level": "LOUD"}],
)
def test_rejects_bad_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_log_level_normalized() -> None:
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_URL", "http://localhost:8080")
    monkeypatch.setenv("DASHBOARD_PATH", "/home")
    get_settings.cache_clear()
    try:
        s = get_settings()
        assert s.api_url == "http://localhost:8080"
        assert s.dashboard_path == "/home"
        assert get_settings() is s
    finally:
        get_settings.cache_clear()
