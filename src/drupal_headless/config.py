"""Client configuration.

``ClientConfig`` is the explicit configuration every component receives.
``Settings`` reads the same values from ``DRUPAL_``-prefixed environment
variables; it is consulted only at the outermost boundary through
``get_settings()`` / ``default_client_config()`` and never from inside
the pagination engine or the normalizer.
"""

from __future__ import annotations

from functools import lru_cache

import httpx
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from drupal_headless.errors import ConfigError

DEFAULT_TIMEOUT_SECONDS = 30.0

_ALLOWED_SCHEMES = ("http", "https")


def normalize_base_url(value: str | None) -> str:
    """Validate a base origin and strip its trailing slash.

    Args:
        value: Candidate base URL, e.g. ``https://cms.example.com/``.

    Returns:
        The base URL without a trailing slash.

    Raises:
        ConfigError: If the value is empty, relative, or not http(s).
    """
    if not value or not value.strip():
        raise ConfigError(
            "Drupal base URL is not configured (set DRUPAL_BASE_URL or pass base_url)"
        )

    candidate = value.strip()
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise ConfigError(f"Invalid Drupal base URL: {candidate!r}") from exc

    if url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise ConfigError(
            f"Drupal base URL must be an absolute http(s) URL, got {candidate!r}"
        )

    return candidate.rstrip("/")


class Settings(BaseSettings):
    """Settings loaded from environment variables with the DRUPAL_ prefix.

    For example ``DRUPAL_BASE_URL=https://cms.example.com`` and
    ``DRUPAL_ROUTES_SECRET=...``.
    """

    base_url: str | None = None
    routes_secret: SecretStr | None = None
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS

    model_config = SettingsConfigDict(env_prefix="DRUPAL_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


class ClientConfig(BaseModel):
    """Explicit configuration threaded through every component.

    ``routes_secret`` is a ``SecretStr`` so it never shows up in reprs or
    logs. Empty secrets are treated as "not configured".
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    routes_secret: SecretStr | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @field_validator("base_url", mode="before")
    @classmethod
    def _validate_base_url(cls, value: object) -> str:
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Drupal base URL must be a string, got {type(value).__name__}")
        return normalize_base_url(value)

    @field_validator("routes_secret", mode="before")
    @classmethod
    def _blank_secret_is_none(cls, value: object) -> object:
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def secret_value(self) -> str | None:
        """Return the plain routes secret, or ``None`` when not configured."""
        if self.routes_secret is None:
            return None
        return self.routes_secret.get_secret_value()


def get_base_url(base_url: str | None = None) -> str:
    """Return ``base_url`` if given, else the configured default, validated.

    Raises:
        ConfigError: If neither source yields an absolute http(s) URL.
    """
    if base_url is None:
        base_url = get_settings().base_url
    return normalize_base_url(base_url)


def default_client_config(
    base_url: str | None = None,
    routes_secret: str | None = None,
) -> ClientConfig:
    """Build a ``ClientConfig``, filling gaps from the environment.

    Explicit arguments win over environment values.
    """
    settings = get_settings()
    if routes_secret is None and settings.routes_secret is not None:
        routes_secret = settings.routes_secret.get_secret_value()
    return ClientConfig(
        base_url=get_base_url(base_url),
        routes_secret=routes_secret,
        timeout=settings.request_timeout,
    )
