"""
amazee.ai error classes.

Two tiers: the API tier is raised by the HTTP client, the workflow tier is
what the operations facade surfaces to the host application. API errors
never reach the host unchanged; the facade re-raises them as workflow
errors with the original message embedded.
"""
from __future__ import annotations

from typing import Any, Optional


class BackendError(Exception):
    """Base class for every error raised by this package."""
    pass


class ApiError(BackendError):
    """
    Base class for errors raised by ``BackendClient``.

    Carries the HTTP status code when the backend answered at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClientError(ApiError):
    """
    Transport-level failure.

    Raised when:
    - The backend answers with a non-2xx status
    - The connection fails or the request times out
    """
    pass


class ValidationError(ApiError):
    """
    Response body could not be mapped onto a response model.

    Raised when:
    - The body is not valid JSON
    - A required field is missing or has the wrong type
    """

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None,
                 status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)
        self.errors = errors or []


class WorkflowError(BackendError):
    """
    Failure surfaced to the host application.

    Every facade operation raises this (or a subclass) and nothing else.
    """
    pass


class MissingConfigError(WorkflowError):
    """A required app instance key is empty or absent."""
    pass


class NotConfiguredError(WorkflowError):
    """An operation was called before the client was configured."""
    pass


class ServiceUnavailableError(WorkflowError):
    """The backend answered the health check but is not healthy."""
    pass


__all__ = [
    "BackendError",
    "ApiError",
    "ClientError",
    "ValidationError",
    "WorkflowError",
    "MissingConfigError",
    "NotConfiguredError",
    "ServiceUnavailableError",
]
