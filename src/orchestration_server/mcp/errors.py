"""Orchestration server exception hierarchy."""

from typing import Any, Dict, List, Optional


class OrchestrationError(Exception):
    """Base exception for all orchestration server errors."""


class ConfigurationError(OrchestrationError):
    """Raised when required configuration (credential, repository) is missing or invalid."""


class ActionValidationError(OrchestrationError):
    """
    Raised when tool arguments fail their structural schema.

    Always raised before the Issue Store is touched, so no partial
    mutation happens.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class IssueStoreError(OrchestrationError):
    """Raised when the Issue Store rejects or fails a request."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class IssueNotFoundError(IssueStoreError):
    """Raised when an issue number does not exist in the repository."""
