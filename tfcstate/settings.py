"""CLI configuration loaded from TFC_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tfcstate.errors import ConfigurationError

DEFAULT_API_URL = "https://app.terraform.io/api/v2"
DEFAULT_UNLOCK_REASON = "Lock released by Terraform CLI"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class TfcSettings(BaseSettings):
    """tfcstate settings.

    All fields are read from environment variables with the ``TFC_`` prefix.
    For example, ``TFC_TOKEN`` maps to ``token`` and ``TFC_STATE_FILE`` to
    ``state_file``.  Relative paths resolve against the current directory at
    the time they are used.

    The CLI applies its global options on top of these values with
    ``model_copy(update=...)`` and hands the result to each command, so
    nothing below is ever mutated in place.
    """

    model_config = SettingsConfigDict(
        env_prefix="TFC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Remote API ------------------------------------------------------------
    token: SecretStr | None = None
    """Terraform Cloud API token, sent as a bearer token.  Required for any
    command that talks to the remote API."""

    api_url: str = DEFAULT_API_URL

    unlock_reason: str = DEFAULT_UNLOCK_REASON
    """Reason string attached to every unlock request."""

    # -- Local files -----------------------------------------------------------
    registry_file: Path = Path(".workspaces")
    """JSON file holding the name -> workspace ID registry."""

    state_file: Path = Path("state.tfstate")
    """Where ``pull`` writes and ``push`` reads the state document."""

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            msg = f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    # -- Helpers ---------------------------------------------------------------

    def require_token(self) -> str:
        """Return the API token or raise ``ConfigurationError`` if unset."""
        if self.token is None or not self.token.get_secret_value():
            msg = "TFC_TOKEN environment variable is not set"
            raise ConfigurationError(msg)
        return self.token.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> TfcSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``get_settings.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return TfcSettings()
