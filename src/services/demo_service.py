"""
Demo tools service.

Two tools that need no authentication:
- get_random_number: Random integer in [min, max)
- get_italy_cities: An Italian city in the north or south
"""

import random

from fastmcp.exceptions import ToolError

from core.factory import Domain, MCPToolBase


def random_number(min: int = 0, max: int = 100) -> int:
    """Return a random integer with min inclusive and max exclusive.

    Raises:
        ValueError: If min is greater than max.
    """
    if min > max:
        raise ValueError(f"min ({min}) must not be greater than max ({max})")
    if min == max:
        return min
    return random.randrange(min, max)


def italy_city(north_or_south: str = "north") -> str:
    # Anything other than "north" means south.
    if north_or_south == "north":
        return "Milan"
    return "Naples"


class DemoService(MCPToolBase):
    """Sample tools for demonstration purposes."""

    def __init__(self) -> None:
        """Initialize the demo service."""
        super().__init__(Domain.DEMO)

    def register_tools(self, mcp) -> None:
        """Register demo tools with the MCP server.

        Args:
            mcp: The FastMCP server instance to register tools with.
        """

        @mcp.tool(tags={self.domain.value})
        def get_random_number(min: int = 0, max: int = 100) -> str:
            """Generates a random number between the specified minimum and maximum values.

            Args:
                min: Minimum value (inclusive).
                max: Maximum value (exclusive).
            """
            try:
                return str(random_number(min, max))
            except ValueError as e:
                raise ToolError(str(e)) from e

        @mcp.tool(tags={self.domain.value})
        def get_italy_cities(north_or_south: str = "north") -> str:
            """Get a city representing Italy.

            Args:
                north_or_south: Indicate if you want a city in the north or south.
            """
            return italy_city(north_or_south)

        self.tools = [get_random_number, get_italy_cities]

    @property
    def tool_count(self) -> int:
        """Return the number of tools provided by this service."""
        return 2
