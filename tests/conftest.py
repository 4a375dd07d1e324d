"""Root pytest configuration for polydock-amazeeai tests."""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from polydock_amazeeai.client import BackendClient
from polydock_amazeeai.host import DictAppInstance
from polydock_amazeeai.models import (
    AdministratorResponse,
    LlmKeysResponse,
    TeamResponse,
    VdbKeysResponse,
)
from polydock_amazeeai.operations import BackendOperations
from polydock_amazeeai.settings import ADMIN_EMAIL_KEY, BACKEND_TOKEN_KEY, BACKEND_URL_KEY, PROJECT_NAME_KEY

from .fakes import FakeBackend, RecordingLogger

CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real amazee.ai settings from leaking into tests."""
    for name in ("AMAZEE_AI_BACKEND_TOKEN", "AMAZEE_AI_BACKEND_URL", "LAGOON_PROJECT_NAME",
                 "AMAZEE_AI_ADMIN_EMAIL", "AMAZEE_AI_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def backend():
    """Standard in-memory backend."""
    return FakeBackend()


@pytest.fixture
def client(backend):
    """Real client wired to the fake backend."""
    with BackendClient("test-backend-token", "https://backend.test", transport=backend.transport) as c:
        yield c


@pytest.fixture
def ops_logger():
    return RecordingLogger()


@pytest.fixture
def mock_client():
    """Client double with the real client's method signatures."""
    return Mock(spec=BackendClient)


@pytest.fixture
def operations(ops_logger, mock_client):
    """Facade already holding ``mock_client``."""
    ops = BackendOperations(ops_logger, client_factory=lambda settings: mock_client)
    ops._client = mock_client
    return ops


@pytest.fixture
def app_instance():
    """App instance with every key set."""
    return DictAppInstance({
        BACKEND_TOKEN_KEY: "test-backend-token",
        BACKEND_URL_KEY: "https://backend.main.amazeeai.us2.amazee.io",
        PROJECT_NAME_KEY: "test-project",
        ADMIN_EMAIL_KEY: "admin@example.com",
    })


@pytest.fixture
def team():
    return TeamResponse(
        id=123,
        name="test-team",
        admin_email="admin@example.com",
        phone=None,
        billing_address=None,
        is_active=True,
        is_always_free=False,
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
        last_payment=None,
    )


@pytest.fixture
def administrator():
    return AdministratorResponse(
        id=456,
        email="admin@example.com",
        is_active=True,
        is_admin=True,
        team_id=123,
        team_name="test-team",
        role="administrator",
    )


@pytest.fixture
def llm_keys():
    return LlmKeysResponse(
        id=123,
        database_name="test-db",
        name="test-llm-key",
        database_host="localhost",
        database_username="user",
        database_password="password",
        litellm_token="llm-key-abc123def456",
        litellm_api_url="https://api.llm.amazee.ai/v1",
        region="us-east-1",
        created_at=CREATED_AT,
        owner_id=1,
        team_id=123,
    )


@pytest.fixture
def vdb_keys():
    return VdbKeysResponse(
        id=456,
        litellm_token="vdb-key-xyz789uvw012",
        litellm_api_url="https://api.vdb.amazee.ai/v1",
        owner_id=1,
        team_id=123,
        region="us-east-1",
        name="test-vdb-key",
    )
