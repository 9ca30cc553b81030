"""
Microsoft Graph directory tools service.

This service exposes the directory facade as four MCP tools:
- get_user_profile: Signed-in user's name and UPN
- get_users: List or search users
- get_user_by_id: One user by object ID or UPN
- get_graph_authentication_info: Setup guidance (no Graph call)
"""

import json
from typing import Optional

from core.factory import Domain, MCPToolBase
from graph.directory import DirectoryClient


class DirectoryService(MCPToolBase):
    """Tools for reading users from Microsoft Graph.

    Every structured tool returns a JSON string: the success payload, or an
    error object of the form ``{"error": kind, "message": ...}``.
    """

    def __init__(self, directory: Optional[DirectoryClient] = None) -> None:
        """Initialize the directory service.

        Args:
            directory: Facade to call. Defaults to an unconfigured facade.
        """
        super().__init__(Domain.DIRECTORY)
        self.directory = directory or DirectoryClient()

    def register_tools(self, mcp) -> None:
        """Register directory tools with the MCP server.

        Args:
            mcp: The FastMCP server instance to register tools with.
        """
        directory = self.directory

        @mcp.tool(tags={self.domain.value})
        async def get_user_profile() -> str:
            """Gets the current user's profile information."""
            return await directory.get_current_user_profile()

        @mcp.tool(tags={self.domain.value})
        async def get_users(
            filter: Optional[str] = None,
            search: Optional[str] = None,
            top: int = 10,
            select: Optional[str] = None,
        ) -> str:
            """Gets a list of users from Microsoft Graph with optional filtering.

            Requires proper authentication to be configured.

            Args:
                filter: Optional filter to apply to the user query
                    (e.g., "startswith(displayName,'John')" or "department eq 'Sales'").
                search: Optional search query to find users
                    (e.g., "John Smith" or "john@contoso.com").
                top: Maximum number of users to return (default: 10, max: 100).
                select: Comma-separated list of properties to select
                    (e.g., "displayName,mail,department").

            Returns:
                JSON with totalCount, users, appliedFilter, appliedSearch and
                selectedProperties, or a JSON error object.
            """
            result = await directory.list_users(
                filter=filter, search=search, top=top, select=select
            )
            return result.to_json()

        @mcp.tool(tags={self.domain.value})
        async def get_user_by_id(user_id: str, select: Optional[str] = None) -> str:
            """Gets detailed information about a specific user from Microsoft Graph.

            Args:
                user_id: User ID (GUID) or User Principal Name (email) of the user
                    to retrieve.
                select: Comma-separated list of properties to select
                    (e.g., "displayName,mail,department").

            Returns:
                JSON with the user's details, or a JSON error object.
            """
            result = await directory.get_user_by_id(user_id, select=select)
            return result.to_json()

        @mcp.tool(tags={self.domain.value})
        def get_graph_authentication_info() -> str:
            """Gets configuration information needed to authenticate with Microsoft Graph API."""
            return json.dumps(directory.get_authentication_info(), indent=2)

        self.tools = [
            get_user_profile,
            get_users,
            get_user_by_id,
            get_graph_authentication_info,
        ]

    @property
    def tool_count(self) -> int:
        """Return the number of tools provided by this service.

        Returns:
            The number of tools (4).
        """
        return 4
