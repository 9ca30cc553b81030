"""
Custom exception hierarchy for the MCP server.

Provides explicit failure modes instead of silent failures and generic exceptions.
Startup errors (configuration, credentials, dependencies) abort the process;
GraphApiError is raised by the Graph client and recovered by the directory facade.
"""

from typing import Any, Optional


class MCPServerError(Exception):
    """
    Base exception for all MCP server errors.

    All custom exceptions in the MCP server should inherit from this class
    to allow catching all MCP-related errors with a single except clause.
    """

    pass


class ConfigurationError(MCPServerError):
    """
    Configuration validation failed.

    Raised when required configuration values are missing or invalid.
    Examples:
    - Missing AZURE_TENANT_ID for any credential flow
    - Missing AZURE_CLIENT_SECRET for the client secret flow
    - Missing REDIRECT_URI for the interactive browser flow
    """

    pass


class AuthSetupError(MCPServerError):
    """
    Authentication setup failed.

    Raised when the Graph credential cannot be constructed.
    Examples:
    - Unreadable certificate file
    - Invalid redirect URI
    """

    pass


class ServiceRegistrationError(MCPServerError):
    """
    Service registration failed.

    Raised when a service cannot be registered with the factory.
    Examples:
    - Duplicate service domain
    """

    pass


class DependencyError(MCPServerError):
    """
    Required dependency is not available.

    Raised when a required package or module is not installed.
    Examples:
    - FastMCP not installed
    - Azure SDK not available
    """

    pass


class GraphApiError(MCPServerError):
    """
    Microsoft Graph returned a non-success HTTP status.

    Carries the HTTP status, the Graph error code and message parsed from the
    response body, and the raw body text.
    """

    def __init__(
        self,
        status: int,
        message: str,
        code: Optional[str] = None,
        body: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message
        self.body = body

    def __str__(self) -> str:
        text = f"GraphApiError: {self.message} (status {self.status}"
        if self.code:
            text += f", code {self.code}"
        text += ")"
        if self.body:
            text += f"\nResponse body: {self.body}"
        return text
