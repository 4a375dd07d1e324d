"""
Operations Facade - Application service layer.

Sits between a host application (workflow engine, CLI) and the amazee.ai
client. Reads configuration from the host, builds the client, sequences
client calls per business operation, and turns every failure into a
``WorkflowError`` the host understands.
"""
from __future__ import annotations

from typing import Callable, Optional

from ..client import BackendClient
from ..errors import ApiError, MissingConfigError, NotConfiguredError, ServiceUnavailableError, WorkflowError
from ..host import AppInstance, OperationsLogger, StdlibOperationsLogger
from ..models import TeamCredentials, TeamResponse
from ..settings import (
    ADMIN_EMAIL_KEY,
    DEFAULT_HTTP_TIMEOUT_S,
    PROJECT_NAME_KEY,
    Settings,
    settings_from_app_instance,
)

ClientFactory = Callable[[Settings], BackendClient]


class BackendOperations:
    """
    Application service facade for amazee.ai operations.

    Design Notes: Operations Facade

    A host composes this facade by holding an instance of it. The facade
    owns at most one ``BackendClient``, created by
    ``configure_client_from_host`` and never replaced afterwards except by
    configuring again, which closes the previous one. It centralizes:

    - Precondition checks on host configuration (fail before any request)
    - Call ordering (team before administrator, LLM keys before VDB keys)
    - Logging around each backend call through the injected logger
    - Error boundary (API errors are re-raised as ``WorkflowError``)

    Nothing is rolled back: when the second call of a pair fails, the
    first call's remote side effect stays in place and the operation fails.
    """

    def __init__(self, logger: Optional[OperationsLogger] = None, *,
                 client_factory: ClientFactory = BackendClient.from_settings,
                 http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S):
        """
        Initialize operations facade.

        Args:
            logger: Log sink for operation entries (defaults to stdlib logging)
            client_factory: Builds the client from settings (tests inject fakes)
            http_timeout_s: Per-request timeout for clients built by this facade
        """
        self.logger = logger or StdlibOperationsLogger()
        self.client_factory = client_factory
        self.http_timeout_s = http_timeout_s
        self._client: Optional[BackendClient] = None

    @property
    def client(self) -> BackendClient:
        """
        The configured client.

        Raises:
            NotConfiguredError: If ``configure_client_from_host`` has not run
        """
        if self._client is None:
            raise NotConfiguredError("amazee.ai client not found")
        return self._client

    def configure_client_from_host(self, app_instance: AppInstance) -> None:
        """
        Build the client from app instance configuration and health-check it.

        Raises:
            MissingConfigError: If the backend token is empty
            WorkflowError: If the configured URL is malformed or the ping errors
            ServiceUnavailableError: If the backend reports itself unhealthy
        """
        try:
            settings = settings_from_app_instance(app_instance, http_timeout_s=self.http_timeout_s)
            client = self.client_factory(settings)
        except ValueError as e:
            raise WorkflowError(f"Invalid amazee.ai client configuration: {e}") from e

        if self._client is not client:
            self.close()
        self._client = client

        if not self.ping():
            raise ServiceUnavailableError("amazee.ai API is not healthy")

    def ping(self) -> bool:
        """
        Health-check the backend.

        Returns False when the backend is reachable but unhealthy. An API
        error escaping ``BackendClient.ping`` is raised as ``WorkflowError``.
        """
        context = dict(self.logger.get_log_context("ping"))

        try:
            healthy = self.client.ping()
        except ApiError as e:
            self.logger.error(f"Error pinging amazee.ai API: {e}", context)
            raise WorkflowError(f"Error pinging amazee.ai API: {e}") from e

        if healthy:
            self.logger.info("amazee.ai API is healthy", context)
        else:
            self.logger.error("amazee.ai API is not healthy", context)
        return healthy

    def create_team_and_setup_administrator(self, app_instance: AppInstance) -> TeamResponse:
        """
        Create a team for the app instance and make the admin email its administrator.

        Returns:
            The created team (not the administrator record)

        Raises:
            MissingConfigError: If the admin email is empty
            WorkflowError: If either backend call fails
        """
        context = dict(self.logger.get_log_context("create_team_and_setup_administrator"))

        project_name = app_instance.get_key_value(PROJECT_NAME_KEY)
        admin_email = app_instance.get_key_value(ADMIN_EMAIL_KEY)

        if not admin_email:
            raise MissingConfigError("amazee.ai admin email is required")

        context["project_name"] = project_name
        context["admin_email"] = admin_email

        try:
            self.logger.info("Creating team on amazee.ai", context)
            team = self.client.create_team(project_name or "", admin_email)

            context["team_id"] = team.id
            self.logger.info("Team created successfully", {**context, "team": team})

            self.logger.info("Setting up team administrator", context)
            administrator = self.client.add_team_administrator(str(team.id), admin_email)

            self.logger.info("Team administrator set up successfully", {**context, "administrator": administrator})
            return team
        except ApiError as e:
            self.logger.error(f"Error creating team or setting up administrator: {e}", context)
            raise WorkflowError(f"Error creating team or setting up administrator: {e}") from e

    def generate_keys_for_team(self, app_instance: AppInstance, team_id: str) -> TeamCredentials:
        """
        Generate LLM keys, then VDB keys, for a team.

        ``app_instance`` is accepted so hosts can pass their instance
        uniformly; no configuration is read from it.

        Raises:
            WorkflowError: If either key generation fails; LLM keys issued
                before a VDB failure are not returned
        """
        context = dict(self.logger.get_log_context("generate_keys_for_team"))
        context["team_id"] = team_id

        try:
            self.logger.info("Generating LLM keys for team", context)
            llm_keys = self.client.generate_llm_keys(team_id)

            self.logger.info("Generating VDB keys for team", context)
            vdb_keys = self.client.generate_vdb_keys(team_id)

            credentials = TeamCredentials(team_id=team_id, llm_keys=llm_keys, vdb_keys=vdb_keys)

            self.logger.info("Keys generated successfully for team", context)
            return credentials
        except ApiError as e:
            self.logger.error(f"Error generating keys for team: {e}", context)
            raise WorkflowError(f"Error generating keys for team: {e}") from e

    def get_team_details(self, team_id: str) -> TeamResponse:
        """
        Fetch a team.

        Raises:
            WorkflowError: If the backend call fails
        """
        context = dict(self.logger.get_log_context("get_team_details"))
        context["team_id"] = team_id

        try:
            self.logger.info("Getting team details", context)
            team = self.client.get_team(team_id)

            self.logger.info("Team details retrieved successfully", context)
            return team
        except ApiError as e:
            self.logger.error(f"Error getting team details: {e}", context)
            raise WorkflowError(f"Error getting team details: {e}") from e

    def close(self):
        """Close the configured client, if any."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
