"""
Response models for the amazee.ai backend API.

These Pydantic models are the only shapes the client ever returns. Each one
validates the decoded JSON body strictly: required fields must be present and
of the right type, while keys the backend adds later are ignored.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BackendModel(BaseModel):
    """Immutable, strict, tolerant of superfluous keys."""
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)


class TeamResponse(BackendModel):
    """A billable team on amazee.ai."""
    id: int = Field(..., description="Server-assigned team id")
    name: str = Field(..., description="Team name")
    admin_email: str = Field(..., description="Email of the team's primary admin")
    phone: Optional[str] = Field(default=None, description="Contact phone")
    billing_address: Optional[str] = Field(default=None, description="Billing address")
    is_active: bool = Field(..., description="Whether the team is active")
    is_always_free: bool = Field(..., description="Whether the team is never billed")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    last_payment: Optional[datetime] = Field(default=None, description="Last payment timestamp")


class AdministratorResponse(BackendModel):
    """A user holding the administrator role on a team."""
    id: int = Field(..., description="User id")
    email: str = Field(..., description="User email")
    is_active: bool = Field(..., description="Whether the user is active")
    is_admin: bool = Field(..., description="Whether the user is a system admin")
    team_id: int = Field(..., description="Team the user administers")
    team_name: str = Field(..., description="Name of that team")
    role: str = Field(..., description="Role on the team")


class LlmKeysResponse(BackendModel):
    """
    LLM credentials issued to a team.

    Carries secret material: ``litellm_token`` and ``database_password`` are
    kept out of ``repr`` so they do not end up in log lines.
    """
    id: int = Field(..., description="Key id")
    database_name: str = Field(..., description="Vector database name")
    name: str = Field(..., description="Key name")
    database_host: str = Field(..., description="Database host")
    database_username: str = Field(..., description="Database user")
    database_password: str = Field(..., repr=False, description="Database password")
    litellm_token: str = Field(..., repr=False, description="LiteLLM API token")
    litellm_api_url: str = Field(..., description="LiteLLM API base URL")
    region: str = Field(..., description="Region the key was issued in")
    created_at: datetime = Field(..., description="Creation timestamp")
    owner_id: int = Field(..., description="Owning user id")
    team_id: int = Field(..., description="Owning team id")


class VdbKeysResponse(BackendModel):
    """Vector database credentials issued to a team."""
    id: int = Field(..., description="Key id")
    litellm_token: str = Field(..., repr=False, description="LiteLLM API token")
    litellm_api_url: str = Field(..., description="LiteLLM API base URL")
    owner_id: int = Field(..., description="Owning user id")
    team_id: int = Field(..., description="Owning team id")
    region: str = Field(..., description="Region the key was issued in")
    name: str = Field(..., description="Key name")


class HealthResponse(BackendModel):
    """Body of ``GET /health``."""
    status: str = Field(..., description="Service status string")

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"


class TeamCredentials(BackendModel):
    """Both key sets generated for one team."""
    team_id: str = Field(..., description="Team id the keys were generated for")
    llm_keys: LlmKeysResponse = Field(..., description="LLM credentials")
    vdb_keys: VdbKeysResponse = Field(..., description="Vector database credentials")


__all__ = [
    "BackendModel",
    "TeamResponse",
    "AdministratorResponse",
    "LlmKeysResponse",
    "VdbKeysResponse",
    "HealthResponse",
    "TeamCredentials",
]
