"""
Async HTTP client for the Microsoft Graph API.

The client holds an azure-identity credential and opens one aiohttp session
per request, so a single instance can serve concurrent tool calls.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Sequence

import aiohttp
from azure.core.credentials import TokenCredential

from config.settings import DEFAULT_GRAPH_SCOPES
from core.exceptions import GraphApiError

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"


async def _build_graph_error(resp: aiohttp.ClientResponse) -> GraphApiError:
    """Parse a Graph error response into a GraphApiError.

    Graph error bodies look like ``{"error": {"code": ..., "message": ...}}``.
    """
    body = await resp.text()
    code = None
    message = body or (resp.reason or f"HTTP {resp.status}")
    try:
        error = json.loads(body).get("error", {})
        code = error.get("code")
        message = error.get("message") or message
    except (ValueError, AttributeError):
        pass
    return GraphApiError(status=resp.status, message=message, code=code, body=body)


class GraphClient:
    """Authenticated GET access to Microsoft Graph endpoints."""

    def __init__(
        self,
        credential: TokenCredential,
        scopes: Optional[Sequence[str]] = None,
        base_url: str = GRAPH_BASE_URL,
    ) -> None:
        self.credential = credential
        self.scopes = list(scopes or DEFAULT_GRAPH_SCOPES)
        self.base_url = base_url.rstrip("/")

    async def get_token(self) -> str:
        """Acquire an access token for the configured scopes.

        azure-identity credentials for the interactive and device code flows are
        synchronous only, so token acquisition runs in a worker thread.
        """
        token = await asyncio.to_thread(self.credential.get_token, *self.scopes)
        return token.token

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Issue an authenticated GET request against a Graph endpoint.

        Args:
            endpoint: Path relative to the Graph base URL, e.g. ``/users``.
            params: OData query parameters (``$filter``, ``$top``, ...).
            headers: Extra request headers (e.g. ``ConsistencyLevel``).

        Returns:
            The decoded JSON body, or None for an empty response.

        Raises:
            GraphApiError: If Graph returns a non-success status.
        """
        token = await self.get_token()
        request_headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if headers:
            request_headers.update(headers)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        logger.debug("Graph GET", extra={"url": url, "params": params})

        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params, headers=request_headers) as resp:
                if resp.status >= 400:
                    raise await _build_graph_error(resp)
                if resp.status == 204:
                    return None
                return await resp.json()
