"""
Configuration settings for the Directory MCP Server.

This module holds the server settings and the identity settings used to
select one of the supported credential flows for Microsoft Graph.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

AuthFlow = Literal[
    "interactive", "client_secret", "certificate", "device_code", "environment"
]

DEFAULT_GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]


class MCPServerConfig(BaseSettings):
    """Directory MCP Server configuration.

    Groups:
    - Server settings (host, port, debug, name)
    - Credential flow selection (AUTH_FLOW)
    - Azure AD identity settings consumed by the active flow
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra environment variables
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=5000, description="Port to bind to")
    debug: bool = Field(default=False, description="Enable debug mode")
    server_name: str = Field(default="DirectoryMcpServer", description="Server name")

    # Credential flow
    auth_flow: AuthFlow = Field(
        default="interactive",
        description="Credential flow used to call Microsoft Graph",
    )

    # Identity settings
    tenant_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_TENANT_ID", "tenant_id"),
        description="Azure AD tenant ID",
    )
    client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_CLIENT_ID", "client_id"),
        description="Application (client) ID",
    )
    client_secret: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_CLIENT_SECRET", "client_secret"),
        description="Client secret for the app-only client secret flow",
    )
    redirect_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("REDIRECT_URI", "redirectUri", "redirect_uri"),
        description="Redirect URI registered for the interactive browser flow",
    )
    certificate_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "AZURE_CLIENT_CERTIFICATE_PATH", "certificate_path"
        ),
        description="Path to the PEM or PKCS12 certificate for the certificate flow",
    )
    certificate_password: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "AZURE_CLIENT_CERTIFICATE_PASSWORD", "certificate_password"
        ),
        description="Password protecting the certificate, if any",
    )
    graph_scopes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GRAPH_SCOPES),
        description="Scopes requested when acquiring Graph tokens",
    )


# Global configuration instance - lazy initialized
_mcp_config: MCPServerConfig | None = None


def get_mcp_config(config: MCPServerConfig | None = None) -> MCPServerConfig:
    """Get the global MCP server configuration with optional injection.

    Args:
        config: Optional config instance to inject (useful for testing).
                If provided, sets this as the global config.

    Returns:
        The global MCPServerConfig instance.
    """
    global _mcp_config
    if config is not None:
        _mcp_config = config
    if _mcp_config is None:
        _mcp_config = MCPServerConfig()
    return _mcp_config


def reset_config() -> None:
    """Reset the config singleton for testing."""
    global _mcp_config
    _mcp_config = None
