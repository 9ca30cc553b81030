"""
Directory MCP Server - Microsoft Graph user tools over the Model Context Protocol.

A FastMCP server that lists, searches and fetches directory users through
Microsoft Graph. The Graph credential comes from one of several OAuth flows
(interactive browser, client secret, client certificate, device code or
environment variables), selected by configuration at startup.
"""

__version__ = "0.1.0"
