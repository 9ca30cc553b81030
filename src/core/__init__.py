"""
Core module for MCP server components, result envelopes and factory patterns.
"""

from .envelope import ErrorKind, Failure, ResultEnvelope, Success
from .exceptions import (
    AuthSetupError,
    ConfigurationError,
    DependencyError,
    GraphApiError,
    MCPServerError,
    ServiceRegistrationError,
)
from .factory import Domain, MCPToolBase, MCPToolFactory

__all__ = [
    "Domain",
    "MCPToolBase",
    "MCPToolFactory",
    "ErrorKind",
    "Failure",
    "ResultEnvelope",
    "Success",
    "MCPServerError",
    "ConfigurationError",
    "AuthSetupError",
    "GraphApiError",
    "ServiceRegistrationError",
    "DependencyError",
]
