"""
Settings and configuration for the amazee.ai client.

Centralizes configuration values and provides validation with fail-fast behavior.
Settings are read from a host app instance. The CLI builds that app instance
from environment variables and reads the HTTP timeout from the environment too.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from .errors import MissingConfigError

if TYPE_CHECKING:
    from .host import AppInstance

__all__ = [
    "Settings",
    "DEFAULT_BACKEND_URL",
    "DEFAULT_HTTP_TIMEOUT_S",
    "BACKEND_TOKEN_KEY",
    "BACKEND_URL_KEY",
    "PROJECT_NAME_KEY",
    "ADMIN_EMAIL_KEY",
    "env_var_for",
    "settings_from_app_instance",
    "HTTP_TIMEOUT_ENV_VAR",
    "http_timeout_from_env",
]

DEFAULT_BACKEND_URL = "https://backend.main.amazeeai.us2.amazee.io"
DEFAULT_HTTP_TIMEOUT_S = 30.0
HTTP_TIMEOUT_ENV_VAR = "AMAZEE_AI_HTTP_TIMEOUT"

# App instance keys
BACKEND_TOKEN_KEY = "amazee-ai-backend-token"
BACKEND_URL_KEY = "amazee-ai-backend-url"
PROJECT_NAME_KEY = "lagoon-project-name"
ADMIN_EMAIL_KEY = "amazee-ai-admin-email"


@dataclass(frozen=True)
class Settings:
    """
    Connection settings for ``BackendClient``.

    Attributes:
        backend_token: Bearer token for the backend API (required)
        backend_url: Base URL of the backend API
        http_timeout_s: Connect/read timeout per request in seconds
    """
    backend_token: str
    backend_url: str = DEFAULT_BACKEND_URL
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.backend_token:
            raise ValueError("backend_token is required")

        if not self.backend_url:
            raise ValueError("backend_url is required")

        try:
            url = httpx.URL(self.backend_url)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid backend_url format: {self.backend_url}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid backend_url format: {self.backend_url}")

        if self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")


def env_var_for(key: str) -> str:
    """
    Environment variable name backing an app instance key.

    ``amazee-ai-backend-token`` -> ``AMAZEE_AI_BACKEND_TOKEN``
    """
    return key.upper().replace("-", "_")


def settings_from_app_instance(app_instance: "AppInstance",
                               http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S) -> Settings:
    """
    Build settings from an app instance's key/value store.

    An empty backend URL falls back to ``DEFAULT_BACKEND_URL``. The timeout is
    not an app instance key; hosts pass it in directly.

    Raises:
        MissingConfigError: If the backend token is empty or absent
        ValueError: If the URL or timeout is malformed
    """
    token = app_instance.get_key_value(BACKEND_TOKEN_KEY)
    if not token:
        raise MissingConfigError("amazee.ai backend token is required to be set in the app instance")

    url = app_instance.get_key_value(BACKEND_URL_KEY)
    if not url:
        url = DEFAULT_BACKEND_URL

    return Settings(backend_token=token, backend_url=url, http_timeout_s=http_timeout_s)


def http_timeout_from_env() -> float:
    """
    Read the per-request timeout from ``AMAZEE_AI_HTTP_TIMEOUT``.

    Returns:
        Timeout in seconds, ``DEFAULT_HTTP_TIMEOUT_S`` when unset or empty

    Raises:
        ValueError: If the value is not a positive number
    """
    raw = os.getenv(HTTP_TIMEOUT_ENV_VAR)
    if not raw:
        return DEFAULT_HTTP_TIMEOUT_S

    try:
        timeout = float(raw)
    except ValueError as e:
        raise ValueError(f"{HTTP_TIMEOUT_ENV_VAR} must be a number, got {raw!r}") from e
    if timeout <= 0:
        raise ValueError(f"{HTTP_TIMEOUT_ENV_VAR} must be positive, got {raw!r}")
    return timeout
