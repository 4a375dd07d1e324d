"""
Interfaces between the operations facade and its host application.

The host supplies configuration through ``AppInstance`` and receives log
entries through ``OperationsLogger``. ``TeamOperations`` is the operation set
the host calls. Concrete implementations here cover the CLI and tests; a
workflow engine brings its own.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, Protocol

from .models import TeamCredentials, TeamResponse
from .settings import ADMIN_EMAIL_KEY, BACKEND_TOKEN_KEY, BACKEND_URL_KEY, PROJECT_NAME_KEY, env_var_for

__all__ = [
    "AppInstance",
    "OperationsLogger",
    "TeamOperations",
    "DictAppInstance",
    "StdlibOperationsLogger",
]

LogContext = dict[str, Any]


class AppInstance(Protocol):
    """
    Key/value configuration source of a host app instance.

    An absent key is reported as ``None`` or ``""``; callers treat both as
    missing.
    """

    def get_key_value(self, key: str) -> Optional[str]:
        ...


class OperationsLogger(Protocol):
    """Leveled logger with a per-operation context dict."""

    def info(self, message: str, context: LogContext) -> None:
        ...

    def error(self, message: str, context: LogContext) -> None:
        ...

    def get_log_context(self, location: str) -> LogContext:
        """Base context for log entries emitted from ``location``."""
        ...


class TeamOperations(Protocol):
    """Operations exposed to the host application."""

    def configure_client_from_host(self, app_instance: AppInstance) -> None:
        ...

    def ping(self) -> bool:
        ...

    def create_team_and_setup_administrator(self, app_instance: AppInstance) -> TeamResponse:
        ...

    def generate_keys_for_team(self, app_instance: AppInstance, team_id: str) -> TeamCredentials:
        ...

    def get_team_details(self, team_id: str) -> TeamResponse:
        ...


class DictAppInstance:
    """``AppInstance`` backed by a plain mapping."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self.values = dict(values or {})

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Optional[str]]] = None) -> DictAppInstance:
        """
        Read the known app instance keys from environment variables.

        ``amazee-ai-backend-token`` is read from ``AMAZEE_AI_BACKEND_TOKEN`` and
        so on. Non-empty ``overrides`` win over the environment.
        """
        values = {}
        for key in (BACKEND_TOKEN_KEY, BACKEND_URL_KEY, PROJECT_NAME_KEY, ADMIN_EMAIL_KEY):
            value = os.getenv(env_var_for(key))
            if value:
                values[key] = value
        for key, value in (overrides or {}).items():
            if value:
                values[key] = value
        return cls(values)

    def get_key_value(self, key: str) -> Optional[str]:
        return self.values.get(key)


class StdlibOperationsLogger:
    """
    ``OperationsLogger`` on top of a standard library logger.

    The context dict travels in ``extra={"context": ...}`` and is also
    appended to the message so it shows up with default formatters.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, owner: str = "BackendOperations"):
        self.logger = logger or logging.getLogger("polydock_amazeeai.operations")
        self.owner = owner

    def info(self, message: str, context: LogContext) -> None:
        self.logger.info(f"{message} {_format_context(context)}", extra={"context": context})

    def error(self, message: str, context: LogContext) -> None:
        self.logger.error(f"{message} {_format_context(context)}", extra={"context": context})

    def get_log_context(self, location: str) -> LogContext:
        return {"class": self.owner, "location": location}


def _format_context(context: LogContext) -> str:
    return " ".join(f"{key}={value!r}" for key, value in context.items())
