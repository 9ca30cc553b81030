"""
Configuration module for the Directory MCP Server.
"""

from .settings import (
    DEFAULT_GRAPH_SCOPES,
    AuthFlow,
    MCPServerConfig,
    get_mcp_config,
    reset_config,
)

__all__ = [
    "DEFAULT_GRAPH_SCOPES",
    "AuthFlow",
    "MCPServerConfig",
    "get_mcp_config",
    "reset_config",
]
