"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like the app instance
and the operations facade, avoiding global state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .host import AppInstance, DictAppInstance
from .operations import BackendOperations
from .settings import DEFAULT_HTTP_TIMEOUT_S, http_timeout_from_env


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Holds the app instance built from environment variables and option
    overrides, and lazily configures the operations facade against it.
    Use it as a context manager so the facade's HTTP client is released.
    """
    app_instance: AppInstance
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    _operations: Optional[BackendOperations] = None

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Optional[str]]] = None) -> CLIContext:
        """
        Create CLI context from environment variables.

        Args:
            overrides: App instance keys given on the command line

        Returns:
            CLIContext wrapping a ``DictAppInstance``

        Raises:
            ValueError: If ``AMAZEE_AI_HTTP_TIMEOUT`` is malformed
        """
        return cls(
            app_instance=DictAppInstance.from_env(overrides),
            http_timeout_s=http_timeout_from_env(),
        )

    @property
    def operations(self) -> BackendOperations:
        """
        Get or create the configured facade (lazy initialization).

        Configuring runs the health check, so a missing token or an
        unhealthy backend fails here with a ``WorkflowError``.
        """
        if self._operations is None:
            self._operations = BackendOperations(http_timeout_s=self.http_timeout_s)
            self._operations.configure_client_from_host(self.app_instance)
        return self._operations

    def close(self):
        """Release the facade's client, if one was created."""
        if self._operations is not None:
            self._operations.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
