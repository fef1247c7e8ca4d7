"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tfcstate.errors import ConfigurationError
from tfcstate.settings import DEFAULT_API_URL, DEFAULT_UNLOCK_REASON, TfcSettings, get_settings


def test_defaults() -> None:
    settings = TfcSettings()

    assert settings.token is None
    assert settings.api_url == DEFAULT_API_URL
    assert settings.registry_file == Path(".workspaces")
    assert settings.state_file == Path("state.tfstate")
    assert settings.unlock_reason == DEFAULT_UNLOCK_REASON
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFC_TOKEN", "secret-token")
    monkeypatch.setenv("TFC_API_URL", "https://tfe.example.com/api/v2")
    monkeypatch.setenv("TFC_STATE_FILE", "out/prod.tfstate")

    settings = TfcSettings()

    assert settings.require_token() == "secret-token"
    assert settings.api_url == "https://tfe.example.com/api/v2"
    assert settings.state_file == Path("out/prod.tfstate")


def test_token_is_not_shown_in_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFC_TOKEN", "secret-token")
    assert "secret-token" not in repr(TfcSettings())


@pytest.mark.parametrize("value", [None, ""])
def test_require_token_missing(monkeypatch: pytest.MonkeyPatch, value: str | None) -> None:
    if value is not None:
        monkeypatch.setenv("TFC_TOKEN", value)

    with pytest.raises(ConfigurationError, match="TFC_TOKEN"):
        TfcSettings().require_token()


def test_dotenv_file_in_current_directory(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TFC_TOKEN=from-dotenv\nUNRELATED=1\n")

    assert TfcSettings().require_token() == "from-dotenv"


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("TFC_TOKEN", "later")

    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings().require_token() == "later"


def test_log_level_is_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFC_LOG_LEVEL", "info")

    assert TfcSettings().log_level == "INFO"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFC_LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError, match="unknown log level"):
        TfcSettings()
