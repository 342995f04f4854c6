"""Public exceptions for the Case Management SDK."""

from typing import Any


class CaseManagementError(Exception):
    """Base exception for all Case Management SDK errors."""


class CaseManagementAPIError(CaseManagementError):
    """Non-success response from the Case Management API.

    Carries the server's error envelope unchanged in ``body``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}


class CaseManagementTimeoutError(CaseManagementError):
    """Request did not complete within the configured timeout."""


class CaseManagementConnectionError(CaseManagementError):
    """Transport-level failure (DNS, refused connection, broken stream)."""


class CaseManagementConfigError(CaseManagementError):
    """Configuration error (missing service URL or credentials)."""


class CaseManagementValidationError(CaseManagementError):
    """Validation error for request/response data."""
