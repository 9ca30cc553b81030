"""
Test configuration for Directory MCP Server tests.

Provides shared fixtures for:
- Environment isolation (no .env loading, no AZURE_* leakage)
- A stub Graph client that records calls
- Fabricated Graph user records
- A mock MCP server that collects registered tools
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# =============================================================================
# Pre-collection environment setup (runs BEFORE test modules are imported)
# =============================================================================


def pytest_configure(config):
    """Set environment defaults before test collection.

    The environment flow never fails at startup, so importing the server
    module cannot trip the credential validation.
    """
    os.environ.setdefault("AUTH_FLOW", "environment")


# Add the server sources to path
directory_mcp_server_path = Path(__file__).parent.parent
sys.path.insert(0, str(directory_mcp_server_path))

from graph_stubs import StubGraphClient, make_graph_user  # noqa: E402


# =============================================================================
# Test Constants
# =============================================================================

TEST_TENANT_ID = "test-tenant-12345"
TEST_CLIENT_ID = "test-client-67890"
TEST_CLIENT_SECRET = "test-secret-abcdef"
TEST_REDIRECT_URI = "http://localhost:5000/callback"


# =============================================================================
# Auto-use fixture to prevent .env file loading
# =============================================================================


@pytest.fixture(autouse=True)
def prevent_dotenv_loading(monkeypatch, tmp_path):
    """Prevent Pydantic settings from reading .env file during tests."""
    original_cwd = os.getcwd()

    empty_env = tmp_path / ".env"
    empty_env.write_text("")

    os.chdir(tmp_path)

    yield

    os.chdir(original_cwd)


# =============================================================================
# Environment Variable Fixtures
# =============================================================================


def _clear_identity_env(monkeypatch):
    """Helper to clear any existing identity environment variables."""
    for var in [
        "AUTH_FLOW",
        "AZURE_TENANT_ID",
        "AZURE_CLIENT_ID",
        "AZURE_CLIENT_SECRET",
        "AZURE_CLIENT_CERTIFICATE_PATH",
        "AZURE_CLIENT_CERTIFICATE_PASSWORD",
        "REDIRECT_URI",
        "redirectUri",
        "GRAPH_SCOPES",
    ]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_env_client_secret(monkeypatch):
    """Set environment variables for the app-only client secret flow."""
    _clear_identity_env(monkeypatch)
    monkeypatch.setenv("AUTH_FLOW", "client_secret")
    monkeypatch.setenv("AZURE_TENANT_ID", TEST_TENANT_ID)
    monkeypatch.setenv("AZURE_CLIENT_ID", TEST_CLIENT_ID)
    monkeypatch.setenv("AZURE_CLIENT_SECRET", TEST_CLIENT_SECRET)


@pytest.fixture
def mock_env_interactive(monkeypatch):
    """Set environment variables for the interactive browser flow."""
    _clear_identity_env(monkeypatch)
    monkeypatch.setenv("AUTH_FLOW", "interactive")
    monkeypatch.setenv("AZURE_TENANT_ID", TEST_TENANT_ID)
    monkeypatch.setenv("AZURE_CLIENT_ID", TEST_CLIENT_ID)
    monkeypatch.setenv("redirectUri", TEST_REDIRECT_URI)


@pytest.fixture
def mock_env_empty(monkeypatch):
    """Clear all identity variables, leaving the environment flow selected."""
    _clear_identity_env(monkeypatch)
    monkeypatch.setenv("AUTH_FLOW", "environment")


# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def stub_graph_factory():
    """Factory for stub Graph clients."""
    return StubGraphClient


@pytest.fixture
def graph_users() -> List[Dict[str, Any]]:
    """Three fabricated Graph user records."""
    return [make_graph_user(i) for i in range(1, 4)]


@pytest.fixture
def graph_user_detail() -> Dict[str, Any]:
    """A Graph user record with detail fields and sign-in activity."""
    return make_graph_user(
        7,
        createdDateTime="2023-01-15T09:30:00Z",
        city="Seattle",
        country="United States",
        companyName="Contoso",
        signInActivity={"lastSignInDateTime": "2024-05-01T12:00:00Z"},
    )


# =============================================================================
# MCP Server Fixtures
# =============================================================================


@pytest.fixture
def mock_mcp_server():
    """Mock MCP server for testing."""

    class MockMCP:
        def __init__(self):
            self.tools = []

        def tool(self, tags=None):
            def decorator(func):
                self.tools.append({"func": func, "tags": tags or []})
                return func

            return decorator

        def get_tool(self, name):
            for tool in self.tools:
                if tool["func"].__name__ == name:
                    return tool["func"]
            raise KeyError(name)

    return MockMCP()
