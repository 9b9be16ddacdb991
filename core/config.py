"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads happen here. No module should call os.getenv()
or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file. Field names map to env var names
      (e.g. api_url -> API_URL).

  @model_validator(mode="after"): Cross-field checks once every field is
      resolved. Bad values are a startup failure, not a runtime surprise.

API_URL semantics:
  Empty string means "no external login API". The mock backend is used and
  the login form shows the demo-account hint. Any other value must be an
  http(s) base URL; POST {API_URL}/auth/login is the login endpoint.

Layer rule: core/ is the kernel. This module may not import from api/ or auth/.
"""

import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("loginflow.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() works in tests without a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Login API
    # ------------------------------------------------------------------

    api_url: str = ""
    request_timeout: float = 10.0
    # Simulated latency of the mock backend so the pending state is visible.
    mock_login_delay: float = 0.5

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    session_ttl_seconds: int = 3600
    dashboard_path: str = "/dashboard"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Normalize API_URL and reject values that would misroute users.

        DASHBOARD_PATH must be a local path. "//host" is protocol-relative and
        would send the user off-site after login.
        """
        self.api_url = self.api_url.strip().rstrip("/")
        if self.api_url and not self.api_url.startswith(("http://", "https://")):
            raise ValueError("API_URL must start with http:// or https://.")
        if not self.dashboard_path.startswith("/") or self.dashboard_path.startswith("//"):
            raise ValueError("DASHBOARD_PATH must be a local path starting with a single '/'.")
        if self.session_ttl_seconds <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be positive.")
        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive.")
        if self.mock_login_delay < 0:
            raise ValueError("MOCK_LOGIN_DELAY must not be negative.")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level!r}")
        if not self.api_url:
            logger.debug("API_URL not set -- using the mock login backend")
        return self

    @property
    def uses_mock_backend(self) -> bool:
        return not self.api_url


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
