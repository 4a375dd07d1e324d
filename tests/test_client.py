"""
Tests for the amazee.ai HTTP client.

Exercises BackendClient against the in-memory FakeBackend through
httpx.MockTransport: request shape, response mapping, and the translation
of HTTP and transport failures into ClientError/ValidationError.
"""
from __future__ import annotations

import httpx
import pytest

from polydock_amazeeai.client import BackendClient
from polydock_amazeeai.errors import ApiError, ClientError, ValidationError
from polydock_amazeeai.models import (
    AdministratorResponse,
    HealthResponse,
    LlmKeysResponse,
    TeamResponse,
    VdbKeysResponse,
)
from polydock_amazeeai.settings import DEFAULT_BACKEND_URL, Settings
from tests.fakes import FakeBackend
from tests.fakes.fake_backend import team_payload


class TestClientConstruction:
    """Test client configuration."""

    def test_default_url(self):
        """Test the client defaults to the production backend URL."""
        client = BackendClient("token")
        assert client.api_url == DEFAULT_BACKEND_URL
        client.close()

    def test_trailing_slash_is_stripped(self):
        """Test a trailing slash on the URL is dropped."""
        client = BackendClient("token", "https://backend.test/")
        assert client.api_url == "https://backend.test"
        client.close()

    def test_from_settings(self):
        """Test the client takes token, URL and timeout from settings."""
        settings = Settings(backend_token="secret", backend_url="https://backend.test", http_timeout_s=12.0)
        client = BackendClient.from_settings(settings)

        assert client.api_key == "secret"
        assert client.api_url == "https://backend.test"
        assert client.client.timeout.read == 12.0
        assert client.client.timeout.connect == 12.0
        client.close()

    def test_default_timeout_is_thirty_seconds(self):
        client = BackendClient("token")
        assert client.client.timeout.connect == 30.0
        assert client.client.timeout.read == 30.0
        client.close()


class TestRequestShape:
    """Test every endpoint is called with the right verb, path, body and headers."""

    def test_every_request_is_authenticated_json(self, client, backend):
        """Test bearer token and JSON headers are sent."""
        client.health()

        request = backend.requests[0]
        assert request.headers["Authorization"] == "Bearer test-backend-token"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Accept"] == "application/json"

    def test_create_team(self, client, backend):
        """Test create_team posts name and admin email."""
        team = client.create_team("test-team", "admin@example.com")

        assert backend.paths() == ["POST /v1/teams"]
        assert backend.body(0) == {"name": "test-team", "admin_email": "admin@example.com"}
        assert isinstance(team, TeamResponse)
        assert team.id == 123
        assert team.name == "test-team"
        assert team.admin_email == "admin@example.com"

    def test_add_team_administrator(self, client, backend):
        """Test add_team_administrator posts the email to the team."""
        client.create_team("test-team", "admin@example.com")
        admin = client.add_team_administrator("123", "admin@example.com")

        assert backend.paths()[-1] == "POST /v1/teams/123/administrators"
        assert backend.body(1) == {"email": "admin@example.com"}
        assert isinstance(admin, AdministratorResponse)
        assert admin.id == 456
        assert admin.team_id == 123
        assert admin.role == "administrator"

    def test_generate_llm_keys(self, client, backend):
        """Test LLM keys are requested with an empty JSON body."""
        client.create_team("test-team", "admin@example.com")
        keys = client.generate_llm_keys("123")

        assert backend.paths()[-1] == "POST /v1/teams/123/keys/llm"
        assert backend.body(1) == {}
        assert isinstance(keys, LlmKeysResponse)
        assert keys.litellm_token == "llm-key-abc123def456"

    def test_generate_vdb_keys(self, client, backend):
        """Test VDB keys are requested with an empty JSON body."""
        client.create_team("test-team", "admin@example.com")
        keys = client.generate_vdb_keys("123")

        assert backend.paths()[-1] == "POST /v1/teams/123/keys/vdb"
        assert backend.body(1) == {}
        assert isinstance(keys, VdbKeysResponse)
        assert keys.litellm_token == "vdb-key-xyz789uvw012"

    def test_get_team(self, client, backend):
        """Test get_team issues a GET for the team."""
        client.create_team("test-team", "admin@example.com")
        team = client.get_team("123")

        assert backend.paths()[-1] == "GET /v1/teams/123"
        assert backend.requests[-1].content == b""
        assert team.id == 123

    def test_health(self, client, backend):
        health = client.health()

        assert backend.paths() == ["GET /health"]
        assert isinstance(health, HealthResponse)
        assert health.status == "healthy"

    def test_base_url_path_prefix_is_kept(self):
        """Test a base URL with a path prefix keeps it for every endpoint."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"status": "healthy"})

        with BackendClient("token", "https://backend.test/api", transport=httpx.MockTransport(handler)) as client:
            client.health()

        assert seen == ["/api/health"]

    def test_create_team_then_administrator_share_team_id(self, client):
        """Test the administrator belongs to the team that was created."""
        team = client.create_team("test-team", "admin@example.com")
        admin = client.add_team_administrator(str(team.id), "admin@example.com")

        assert admin.team_id == team.id
        assert admin.team_name == team.name


class TestErrorTranslation:
    """Test failures become ClientError or ValidationError."""

    def test_http_error_becomes_client_error(self, client, backend):
        """Test a non-2xx answer raises ClientError with the status code."""
        backend.fail("POST", "/v1/teams", 422, "name already taken")

        with pytest.raises(ClientError) as exc_info:
            client.create_team("test-team", "admin@example.com")

        assert exc_info.value.status_code == 422
        assert str(exc_info.value).startswith("Failed to create team: 422")
        assert "name already taken" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_not_found_team(self, client):
        """Test an unknown team raises ClientError with status 404."""
        with pytest.raises(ClientError) as exc_info:
            client.get_team("999")

        assert exc_info.value.status_code == 404
        assert "Failed to get team" in str(exc_info.value)

    @pytest.mark.parametrize("method, path, call, prefix", [
        ("POST", "/v1/teams/1/administrators", lambda c: c.add_team_administrator("1", "a@b.c"),
         "Failed to add team administrator"),
        ("POST", "/v1/teams/1/keys/llm", lambda c: c.generate_llm_keys("1"), "Failed to generate LLM keys"),
        ("POST", "/v1/teams/1/keys/vdb", lambda c: c.generate_vdb_keys("1"), "Failed to generate VDB keys"),
        ("GET", "/health", lambda c: c.health(), "Failed to check health"),
    ])
    def test_error_messages_name_the_operation(self, client, backend, method, path, call, prefix):
        backend.fail(method, path, 503, "")

        with pytest.raises(ClientError) as exc_info:
            call(client)

        assert str(exc_info.value) == f"{prefix}: 503 Service Unavailable"
        assert exc_info.value.status_code == 503

    def test_long_error_bodies_are_truncated(self, client, backend):
        backend.fail("GET", "/health", 500, "x" * 5000)

        with pytest.raises(ClientError) as exc_info:
            client.health()

        assert len(str(exc_info.value)) < 600
        assert str(exc_info.value).endswith("...")

    def test_connection_error_becomes_client_error(self, client, backend):
        """Test a transport failure raises ClientError without a status code."""
        backend.raise_on("POST", "/v1/teams", httpx.ConnectError("connection refused"))

        with pytest.raises(ClientError) as exc_info:
            client.create_team("test-team", "admin@example.com")

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    def test_timeout_becomes_client_error(self, client, backend):
        """Test a timed-out request raises ClientError."""
        backend.raise_on("GET", "/v1/teams/1", httpx.ReadTimeout("timed out"))

        with pytest.raises(ClientError, match="Failed to get team: timed out"):
            client.get_team("1")

    def test_missing_field_becomes_validation_error(self, client, backend):
        """Test a body missing a required field raises ValidationError."""
        payload = team_payload()
        del payload["admin_email"]
        backend.respond("POST", "/v1/teams", payload)

        with pytest.raises(ValidationError) as exc_info:
            client.create_team("test-team", "admin@example.com")

        assert not isinstance(exc_info.value, ClientError)
        assert str(exc_info.value) == "Failed to validate API response"
        assert exc_info.value.errors[0]["loc"] == ("admin_email",)
        assert exc_info.value.status_code == 200

    def test_invalid_json_becomes_validation_error(self, client, backend):
        """Test a non-JSON body raises ValidationError."""
        backend._overrides[("GET", "/health")] = httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(ValidationError):
            client.health()

    def test_extra_fields_do_not_fail(self, client, backend):
        """Test unknown keys in a body are ignored."""
        backend.respond("GET", "/health", {"status": "healthy", "version": "1.2.3", "db": "ok"})

        assert client.health().status == "healthy"

    def test_both_error_kinds_share_a_base(self):
        assert issubclass(ClientError, ApiError)
        assert issubclass(ValidationError, ApiError)
        assert not issubclass(ValidationError, ClientError)


class TestPing:
    """Test ping() truth table."""

    def test_healthy(self, client):
        assert client.ping() is True

    @pytest.mark.parametrize("status", ["unhealthy", "degraded", "HEALTHY", ""])
    def test_other_status_is_unhealthy(self, status):
        backend = FakeBackend(status=status)
        with BackendClient("token", "https://backend.test", transport=backend.transport) as client:
            assert client.ping() is False

    def test_http_error_is_unhealthy(self, client, backend):
        """Test a failing health endpoint yields False instead of raising."""
        backend.fail("GET", "/health", 500)
        assert client.ping() is False

    def test_transport_error_is_unhealthy(self, client, backend):
        """Test an unreachable backend yields False instead of raising."""
        backend.raise_on("GET", "/health", httpx.ConnectError("no route to host"))
        assert client.ping() is False

    def test_validation_error_propagates(self, client, backend):
        """Test a malformed health body is not mistaken for a transport failure."""
        backend.respond("GET", "/health", {"state": "healthy"})

        with pytest.raises(ValidationError):
            client.ping()
