"""
Exception types for the Docsie connector.

Fetch-phase errors propagate to the caller; upload errors are caught per
document by the uploader and recorded instead of raised.
"""

from typing import Optional


class ConnectorError(Exception):
    """Base class for all connector errors."""


class ConfigurationError(ConnectorError):
    """Raised when a required credential or setting is missing."""


class ApiError(ConnectorError):
    """
    A non-2xx response from a remote API.

    Attributes:
        status_code: HTTP status code of the response
        reason: HTTP reason phrase (e.g. "Unauthorized")
        endpoint: The endpoint path that was requested
    """

    service = "API"

    def __init__(self, status_code: int, reason: str, endpoint: str, detail: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.endpoint = endpoint
        self.detail = detail
        message = f"{self.service} error: {status_code} {reason} ({endpoint})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DocsieApiError(ApiError):
    """Non-2xx response from the Docsie API."""

    service = "Docsie API"


class AuthenticationError(DocsieApiError):
    """Docsie rejected the credentials (401/403)."""


class MavenApiError(ApiError):
    """Non-2xx response from the Maven AGI API."""

    service = "Maven API"
