"""
Directory MCP Server - FastMCP server exposing Microsoft Graph user tools.

This module wires the server together:
- Loads configuration and selects the Graph credential flow (fails fast on
  missing identity settings)
- Builds the directory facade and registers tool services
- Health check endpoint for container orchestration

Usage:
    # Interactive browser flow (default)
    python server.py

    # App-only client secret flow with debug logging
    python server.py --auth-flow client_secret --debug

    # stdio transport
    python server.py --transport stdio
"""

import argparse
import logging
import sys
from typing import Any, Optional, cast

from auth.credentials import create_graph_client, credential_config_from_settings
from config.settings import MCPServerConfig, get_mcp_config
from core.exceptions import (
    AuthSetupError,
    ConfigurationError,
    DependencyError,
    ServiceRegistrationError,
)
from core.factory import MCPToolBase, MCPToolFactory
from fastmcp import FastMCP
from fastmcp.server.server import Transport
from graph.directory import DirectoryClient
from pydantic import ValidationError
from services.demo_service import DemoService
from services.directory_service import DirectoryService
from starlette.requests import Request
from starlette.responses import JSONResponse

# Setup logging - will be reconfigured based on config
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# Service Registration
# =============================================================================


def create_directory_client(config: MCPServerConfig) -> DirectoryClient:
    """Build the directory facade for the configured credential flow.

    Args:
        config: The MCP server configuration.

    Returns:
        DirectoryClient, unconfigured when the environment flow has no variables.

    Raises:
        ConfigurationError: If the active flow is missing required settings.
        AuthSetupError: If the credential cannot be constructed.
    """
    credential_config = credential_config_from_settings(config)
    graph = create_graph_client(credential_config, scopes=config.graph_scopes)
    return DirectoryClient(graph)


def get_default_services(
    directory: Optional[DirectoryClient] = None,
) -> list[MCPToolBase]:
    """Return default service instances.

    Args:
        directory: Facade for the directory tools. Defaults to unconfigured.

    Returns:
        List containing the DirectoryService and DemoService instances.
    """
    return [
        DirectoryService(directory),
        DemoService(),
    ]


def create_factory(services: Optional[list[MCPToolBase]] = None) -> MCPToolFactory:
    """Create factory with services.

    Args:
        services: Optional list of services to register. If None, uses defaults.

    Returns:
        Configured MCPToolFactory instance.
    """
    factory = MCPToolFactory()
    for service in services or get_default_services():
        factory.register_service(service)
    return factory


# =============================================================================
# Endpoint Registration
# =============================================================================


def register_health_endpoint(mcp_server: FastMCP) -> None:
    """Register health check endpoint for container orchestration.

    Args:
        mcp_server: The FastMCP server instance.
    """

    @mcp_server.custom_route("/health", methods=["GET"], name="health_check")
    async def health_check(request: Request) -> JSONResponse:
        """Simple health check endpoint for container orchestration."""
        return JSONResponse(
            content={"status": "healthy", "service": "directory-mcp-server"},
            headers={"Content-Type": "application/json"},
        )

    logger.info("Health check endpoint registered at /health")


# =============================================================================
# Server Initialization
# =============================================================================


def create_fastmcp_server(
    config: Optional[MCPServerConfig] = None,
    services: Optional[list[MCPToolBase]] = None,
) -> FastMCP:
    """Create and configure FastMCP server.

    Args:
        config: Optional config instance. If None, uses global config.
        services: Optional list of services. If None, builds the defaults
                  with a directory facade for the configured credential flow.

    Returns:
        Configured FastMCP server instance.

    Raises:
        ConfigurationError: If configuration validation fails.
        AuthSetupError: If credential setup fails.
        DependencyError: If required dependencies are not available.
    """
    try:
        config = config or get_mcp_config()

        # Configure logging based on debug setting
        log_level = logging.DEBUG if config.debug else logging.INFO
        logging.getLogger().setLevel(log_level)

        if services is None:
            services = get_default_services(create_directory_client(config))

        factory = create_factory(services)
        mcp_server = factory.create_mcp_server(name=config.server_name)

        register_health_endpoint(mcp_server)
        log_server_info(factory, config)

        logger.info(
            "FastMCP server created successfully",
            extra={"auth_flow": config.auth_flow},
        )
        return mcp_server

    except ImportError as e:
        logger.error("FastMCP not available", extra={"error": str(e)})
        raise DependencyError(
            "FastMCP not installed. Install with: pip install fastmcp"
        ) from e


# =============================================================================
# Global Server Instance (Lazy Initialization via __getattr__)
# =============================================================================

_mcp: Optional[FastMCP] = None
_initialized: bool = False


def _lazy_init() -> None:
    """Initialize mcp on first access using the environment configuration."""
    global _mcp, _initialized
    if _initialized:
        return
    _initialized = True
    try:
        _mcp = create_fastmcp_server()
    except (ConfigurationError, AuthSetupError) as e:
        logger.error(f"Server initialization failed: {e}")
        raise


def __getattr__(name: str) -> Any:
    """Lazy initialization of module-level mcp.

    This enables `fastmcp run server.py` to work without eager initialization.
    """
    if name == "mcp":
        _lazy_init()
        return _mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# =============================================================================
# Server Runtime
# =============================================================================


def log_server_info(factory: MCPToolFactory, config: MCPServerConfig) -> None:
    """Log a summary of registered services and tools.

    Args:
        factory: The factory holding the registered services.
        config: The MCP server configuration.
    """
    summary = factory.get_tool_summary()

    logger.info(
        "Server initialized",
        extra={
            "server_name": config.server_name,
            "total_services": summary["total_services"],
            "total_tools": summary["total_tools"],
            "auth_flow": config.auth_flow,
        },
    )

    for domain, info in summary["services"].items():
        logger.info(
            f"Service registered: {domain}",
            extra={"tool_count": info["tool_count"], "class_name": info["class_name"]},
        )


def run_server(
    server_instance: FastMCP,
    transport: Transport = "streamable-http",
    host: str = "0.0.0.0",
    port: int = 5000,
    **kwargs: Any,
) -> None:
    """Run the FastMCP server.

    Args:
        server_instance: The FastMCP server to run.
        transport: Transport protocol (default: streamable-http).
        host: Host to bind to (HTTP only).
        port: Port to bind to (HTTP only).
        **kwargs: Additional arguments passed to server.run().
    """
    logger.info(
        "Starting FastMCP server",
        extra={"transport": transport, "host": host, "port": port},
    )
    if transport == "stdio":
        server_instance.run(transport=transport)
    else:
        server_instance.run(transport=transport, host=host, port=port, **kwargs)


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    """Main entry point with argument parsing."""
    global _mcp, _initialized

    parser = argparse.ArgumentParser(description="Directory MCP Server")
    parser.add_argument(
        "--transport",
        "-t",
        choices=["streamable-http", "stdio"],
        default="streamable-http",
        help="Transport protocol (default: streamable-http)",
    )
    parser.add_argument("--host", default=None, help="Host to bind to (default: HOST or 0.0.0.0)")
    parser.add_argument(
        "--port", "-p", type=int, default=None, help="Port to bind to (default: PORT or 5000)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--auth-flow",
        choices=["interactive", "client_secret", "certificate", "device_code", "environment"],
        default=None,
        help="Credential flow for Microsoft Graph (default: AUTH_FLOW or interactive)",
    )

    args = parser.parse_args()

    # Build config overrides from CLI
    overrides: dict[str, Any] = {}
    if args.debug:
        overrides["debug"] = True
    if args.auth_flow:
        overrides["auth_flow"] = args.auth_flow
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port

    try:
        base_config = get_mcp_config()
        config = base_config.model_copy(update=overrides) if overrides else base_config
        services = get_default_services(create_directory_client(config))
        server = create_fastmcp_server(config=config, services=services)
    except (
        ValidationError,
        ConfigurationError,
        AuthSetupError,
        DependencyError,
        ServiceRegistrationError,
    ) as e:
        print(f"Failed to create server: {e}", file=sys.stderr)
        sys.exit(1)

    # Mark as initialized to prevent lazy init from overwriting
    _mcp = server
    _initialized = True

    # Banner goes to stderr so stdio transport keeps stdout for protocol messages
    print("Starting Directory MCP Server", file=sys.stderr)
    print(f"Transport: {args.transport.upper()}", file=sys.stderr)
    print(f"Auth flow: {config.auth_flow}", file=sys.stderr)
    print(f"Host: {config.host}", file=sys.stderr)
    print(f"Port: {config.port}", file=sys.stderr)
    print("-" * 50, file=sys.stderr)

    run_server(
        server,
        transport=cast(Transport, args.transport),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
