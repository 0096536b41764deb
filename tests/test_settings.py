from datetime import timedelta
from pathlib import Path

import pytest

from utils.settings import DEFAULT_API_URL, DEFAULT_MODEL, Settings

ENV_VARS = (
    "COPYLEAKS_EMAIL", "COPYLEAKS_API_KEY", "COPYLEAKS_TOKEN", "COPYLEAKS_ID_URL",
    "COPYLEAKS_API_URL", "COPYLEAKS_MODEL", "TOKEN_TTL_HOURS", "LOGIN_TIMEOUT_SECONDS",
    "DETECT_TIMEOUT_SECONDS", "DATABASE_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert not settings.configured
    assert settings.api_url == DEFAULT_API_URL
    assert settings.model == DEFAULT_MODEL
    assert settings.token_ttl == timedelta(hours=47)
    assert settings.database_dir is None


def test_login_pair_requires_both_values(monkeypatch):
    monkeypatch.setenv("COPYLEAKS_EMAIL", "dev@example.com")
    assert not Settings.from_env().configured
    monkeypatch.setenv("COPYLEAKS_API_KEY", "key")
    assert Settings.from_env().configured


def test_token_alone_counts_as_configured(monkeypatch):
    monkeypatch.setenv("COPYLEAKS_TOKEN", "static")
    settings = Settings.from_env()
    assert settings.configured
    assert not settings.has_login_pair


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TOKEN_TTL_HOURS", "1.5")
    monkeypatch.setenv("COPYLEAKS_API_URL", "https://api.example/")
    monkeypatch.setenv("DATABASE_DIR", str(tmp_path))
    settings = Settings.from_env()
    assert settings.token_ttl == timedelta(minutes=90)
    assert settings.api_url == "https://api.example"
    assert settings.database_dir == Path(tmp_path)


@pytest.mark.parametrize("value", ["soon", "0", "-4"])
def test_invalid_ttl_is_a_configuration_error(monkeypatch, value):
    monkeypatch.setenv("TOKEN_TTL_HOURS", value)
    with pytest.raises(RuntimeError):
        Settings.from_env()
