from __future__ import annotations

import pytest

from drupal_headless.config import (
    ClientConfig,
    default_client_config,
    get_base_url,
    get_settings,
    normalize_base_url,
)
from drupal_headless.errors import ConfigError


def test_client_config_strips_trailing_slash():
    config = ClientConfig(base_url=" https://cms.example.com/ ")
    assert config.base_url == "https://cms.example.com"


@pytest.mark.parametrize("base_url", [None, "", "   ", "/jsonapi", "cms.example.com", "ftp://cms.example.com"])
def test_client_config_rejects_invalid_base(base_url):
    with pytest.raises(ConfigError):
        ClientConfig(base_url=base_url)


def test_blank_secret_is_not_configured():
    assert ClientConfig(base_url="https://cms.example.com", routes_secret="   ").secret_value() is None
    assert ClientConfig(base_url="https://cms.example.com").secret_value() is None


def test_secret_is_trimmed_and_hidden():
    config = ClientConfig(base_url="https://cms.example.com", routes_secret=" hush ")

    assert config.secret_value() == "hush"
    assert "hush" not in repr(config)
    assert "hush" not in str(config.model_dump())


def test_default_client_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DRUPAL_BASE_URL", "https://env.example.com/")
    monkeypatch.setenv("DRUPAL_ROUTES_SECRET", "env-secret")
    monkeypatch.setenv("DRUPAL_REQUEST_TIMEOUT", "5")

    config = default_client_config()

    assert config.base_url == "https://env.example.com"
    assert config.secret_value() == "env-secret"
    assert config.timeout == 5.0


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("DRUPAL_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("DRUPAL_ROUTES_SECRET", "env-secret")

    config = default_client_config("https://explicit.example.com", "explicit")

    assert config.base_url == "https://explicit.example.com"
    assert config.secret_value() == "explicit"


def test_default_client_config_without_base_raises():
    with pytest.raises(ConfigError):
        default_client_config()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_get_base_url(monkeypatch):
    assert get_base_url("http://localhost:8080/") == "http://localhost:8080"
    monkeypatch.setenv("DRUPAL_BASE_URL", "https://env.example.com")
    assert get_base_url() == "https://env.example.com"


def test_normalize_base_url_keeps_path():
    assert normalize_base_url("https://example.com/drupal/") == "https://example.com/drupal"
