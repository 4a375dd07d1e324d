"""
polydock-amazeeai: typed client and operations facade for the amazee.ai backend.
"""
from .client import BackendClient
from .errors import (
    ApiError,
    BackendError,
    ClientError,
    MissingConfigError,
    NotConfiguredError,
    ServiceUnavailableError,
    ValidationError,
    WorkflowError,
)
from .host import AppInstance, DictAppInstance, OperationsLogger, StdlibOperationsLogger, TeamOperations
from .models import (
    AdministratorResponse,
    HealthResponse,
    LlmKeysResponse,
    TeamCredentials,
    TeamResponse,
    VdbKeysResponse,
)
from .operations import BackendOperations
from .settings import DEFAULT_BACKEND_URL, Settings

__version__ = "0.1.0"

__all__ = [
    "BackendClient",
    "BackendOperations",
    "Settings",
    "DEFAULT_BACKEND_URL",
    "AppInstance",
    "DictAppInstance",
    "OperationsLogger",
    "StdlibOperationsLogger",
    "TeamOperations",
    "TeamResponse",
    "AdministratorResponse",
    "LlmKeysResponse",
    "VdbKeysResponse",
    "HealthResponse",
    "TeamCredentials",
    "BackendError",
    "ApiError",
    "ClientError",
    "ValidationError",
    "WorkflowError",
    "MissingConfigError",
    "NotConfiguredError",
    "ServiceUnavailableError",
]
