"""
HTTP client for the amazee.ai backend API.

One method per backend endpoint. Every successful body is validated into a
response model; every transport failure or non-2xx answer becomes a
``ClientError`` carrying the HTTP status code when there is one.
"""
from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

import httpx
import pydantic

from .errors import ClientError, ValidationError
from .models import (
    AdministratorResponse,
    BackendModel,
    HealthResponse,
    LlmKeysResponse,
    TeamResponse,
    VdbKeysResponse,
)
from .settings import DEFAULT_BACKEND_URL, DEFAULT_HTTP_TIMEOUT_S, Settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BackendModel)

USER_AGENT = "polydock-amazeeai/0.1.0"

# Error bodies are echoed into exception messages; keep them readable
_MAX_ERROR_BODY_CHARS = 512


class BackendClient:
    """
    Client for the amazee.ai team and key management API.

    Authenticates every request with a bearer token and speaks JSON only.
    Not safe to share across threads without external serialization.
    """

    def __init__(self, api_key: str, api_url: str = DEFAULT_BACKEND_URL, *,
                 timeout_s: float = DEFAULT_HTTP_TIMEOUT_S,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize backend client.

        Args:
            api_key: Bearer token for the backend
            api_url: Base URL of the backend (trailing slash is dropped)
            timeout_s: Connect and read timeout per request
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout_s = timeout_s

        self.client = httpx.Client(
            base_url=self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> BackendClient:
        return cls(
            settings.backend_token,
            settings.backend_url,
            timeout_s=settings.http_timeout_s,
        )

    def create_team(self, name: str, admin_email: str) -> TeamResponse:
        """Create a team owned by ``admin_email``."""
        response = self._request(
            "POST", "/v1/teams",
            json={"name": name, "admin_email": admin_email},
            failure="Failed to create team",
        )
        return self._map_response(TeamResponse, response)

    def add_team_administrator(self, team_id: str, email: str) -> AdministratorResponse:
        """Grant ``email`` the administrator role on a team."""
        response = self._request(
            "POST", f"/v1/teams/{team_id}/administrators",
            json={"email": email},
            failure="Failed to add team administrator",
        )
        return self._map_response(AdministratorResponse, response)

    def generate_llm_keys(self, team_id: str) -> LlmKeysResponse:
        response = self._request(
            "POST", f"/v1/teams/{team_id}/keys/llm",
            json={},
            failure="Failed to generate LLM keys",
        )
        return self._map_response(LlmKeysResponse, response)

    def generate_vdb_keys(self, team_id: str) -> VdbKeysResponse:
        response = self._request(
            "POST", f"/v1/teams/{team_id}/keys/vdb",
            json={},
            failure="Failed to generate VDB keys",
        )
        return self._map_response(VdbKeysResponse, response)

    def get_team(self, team_id: str) -> TeamResponse:
        response = self._request("GET", f"/v1/teams/{team_id}", failure="Failed to get team")
        return self._map_response(TeamResponse, response)

    def health(self) -> HealthResponse:
        response = self._request("GET", "/health", failure="Failed to check health")
        return self._map_response(HealthResponse, response)

    def ping(self) -> bool:
        """
        Check whether the backend reports itself healthy.

        A ``ClientError`` during the health check means "not healthy" and is
        not raised. Validation errors still propagate, and
        ``BackendOperations.ping`` reports them as ``WorkflowError``.
        """
        try:
            return self.health().is_healthy
        except ClientError as e:
            logger.debug(f"Health check against {self.api_url} failed: {e}")
            return False

    def _request(self, method: str, path: str, *, failure: str, **kwargs) -> httpx.Response:
        """
        Send a request and raise ``ClientError`` unless it succeeded.

        Args:
            method: HTTP verb
            path: Path relative to ``api_url``
            failure: Message prefix used when the request fails
        """
        logger.debug(f"{method} {self.api_url}{path}")

        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ClientError(
                f"{failure}: {status} {e.response.reason_phrase}{_error_body(e.response)}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            raise ClientError(f"{failure}: {e}") from e

    def _map_response(self, model: Type[M], response: httpx.Response) -> M:
        """
        Decode and validate a response body into ``model``.

        Raises:
            ValidationError: If the body is not JSON or does not match the model
        """
        try:
            return model.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            logger.error(f"Invalid {model.__name__} from {response.request.url}: {e}")
            raise ValidationError(
                "Failed to validate API response",
                errors=e.errors(include_url=False),
                status_code=response.status_code,
            ) from e

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _error_body(response: httpx.Response) -> str:
    text = response.text.strip()
    if not text:
        return ""
    if len(text) > _MAX_ERROR_BODY_CHARS:
        text = text[:_MAX_ERROR_BODY_CHARS - 3].rstrip() + "..."
    return f" - {text}"
