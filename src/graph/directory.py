"""
Directory client facade over Microsoft Graph.

Translates tool parameters into Graph user queries and maps every outcome,
including faults, into a result envelope. No operation raises to its caller.

Known limitation: ``totalCount`` in list results is the number of users in
the returned page, not the directory-wide total.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from core.envelope import ErrorKind, Failure, ResultEnvelope, Success
from core.exceptions import GraphApiError

from .client import GraphClient
from .models import QuerySpec, UserDetail, UserSummary

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Microsoft Graph client not configured"

CONFIGURATION_HINT = {
    "clientId": "Your Azure AD application client ID",
    "tenantId": "Your Azure AD tenant ID",
    "clientSecret": "Your Azure AD application client secret (for app-only access)",
    "scopes": ["https://graph.microsoft.com/.default"],
}

AUTHENTICATION_INFO: Dict[str, Any] = {
    "message": "To use Microsoft Graph tools, you need to configure authentication",
    "steps": [
        "1. Register an application in Azure Active Directory",
        "2. Grant appropriate permissions (User.Read.All, User.ReadBasic.All, etc.)",
        "3. Create a client secret or certificate",
        "4. Set AUTH_FLOW and the matching AZURE_* environment variables, then restart the server",
    ],
    "requiredPermissions": [
        "User.Read.All - Read all users' full profiles",
        "User.ReadBasic.All - Read all users' basic profiles",
        "User.Read - Read signed-in user's profile",
        "Directory.Read.All - Read directory data",
    ],
    "supportedFlows": {
        "interactive": ["AZURE_TENANT_ID", "AZURE_CLIENT_ID", "REDIRECT_URI"],
        "client_secret": ["AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET"],
        "certificate": [
            "AZURE_TENANT_ID",
            "AZURE_CLIENT_ID",
            "AZURE_CLIENT_CERTIFICATE_PATH",
            "AZURE_CLIENT_CERTIFICATE_PASSWORD (optional)",
        ],
        "device_code": ["AZURE_TENANT_ID", "AZURE_CLIENT_ID"],
        "environment": ["AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET"],
    },
    "codeExample": """
# Example of how to build a Graph client with ClientSecretCredential
from azure.identity import ClientSecretCredential

credential = ClientSecretCredential(
    tenant_id="your-tenant-id",
    client_id="your-client-id",
    client_secret="your-client-secret",
)
graph = GraphClient(credential)
""",
}


def _graph_api_failure(exc: GraphApiError) -> Failure:
    return Failure(
        ErrorKind.GRAPH_API_ERROR,
        exc.message,
        {"code": exc.status, "details": str(exc)},
    )


def _unexpected_failure(exc: BaseException) -> Failure:
    return Failure(
        ErrorKind.UNEXPECTED_ERROR,
        str(exc) or type(exc).__name__,
        {"type": type(exc).__name__},
    )


class DirectoryClient:
    """Typed user operations over an optional Graph client.

    When ``graph`` is None every remote operation reports ``not_configured``
    without attempting a call.
    """

    def __init__(self, graph: Optional[GraphClient] = None) -> None:
        self.graph = graph

    @property
    def is_configured(self) -> bool:
        return self.graph is not None

    async def get_current_user_profile(self) -> str:
        """Return ``"User: Name (UPN)"`` for the signed-in user."""
        if self.graph is None:
            return f"Error: {NOT_CONFIGURED_MESSAGE}"
        try:
            user = await self.graph.get("/me") or {}
            name = user.get("displayName") or ""
            upn = user.get("userPrincipalName") or ""
            return f"User: {name} ({upn})"
        except (Exception, asyncio.CancelledError) as e:
            logger.warning(f"Failed to get current user profile: {e}")
            message = e.message if isinstance(e, GraphApiError) else str(e)
            return f"Error: {message}"

    async def list_users(
        self,
        filter: Optional[str] = None,
        search: Optional[str] = None,
        top: int = 10,
        select: Optional[str] = None,
    ) -> ResultEnvelope:
        """List users from the directory.

        Args:
            filter: OData filter expression passed through unchanged.
            search: Search term; quoted and sent with ConsistencyLevel: eventual.
            top: Page size; values outside 1..100 fall back to 10.
            select: Comma separated property names.

        Returns:
            Success with totalCount, users and the applied parameters, or a Failure.
        """
        query = QuerySpec(filter=filter, search=search, top=top, select=select)

        if self.graph is None:
            return Failure(
                ErrorKind.NOT_CONFIGURED,
                "Authentication needs to be properly configured to access Microsoft Graph API",
                {"configurationRequired": copy.deepcopy(CONFIGURATION_HINT)},
            )

        try:
            data = await self.graph.get(
                "/users", params=query.to_params(), headers=query.headers
            )
            records = (data or {}).get("value") or []
            users = [UserSummary.model_validate(r).to_payload() for r in records]

            logger.info(
                "Listed users",
                extra={"count": len(users), "top": query.top, "search": bool(query.search)},
            )
            return Success(
                {
                    "totalCount": len(users),
                    "users": users,
                    "appliedFilter": filter,
                    "appliedSearch": search,
                    "selectedProperties": select,
                }
            )
        except GraphApiError as e:
            logger.error(f"Graph API error listing users ({e.status}): {e.message}")
            return _graph_api_failure(e)
        except (Exception, asyncio.CancelledError) as e:
            logger.error(f"Unexpected error listing users: {e}")
            return _unexpected_failure(e)

    async def get_user_by_id(
        self, user_id: str, select: Optional[str] = None
    ) -> ResultEnvelope:
        """Get one user by object ID or user principal name.

        Args:
            user_id: Object ID (GUID) or UPN; Graph resolves either form.
            select: Comma separated property names.

        Returns:
            Success with the user's details, or a Failure.
        """
        if not user_id or not user_id.strip():
            return Failure(
                ErrorKind.INVALID_INPUT, "User ID or User Principal Name is required"
            )

        if self.graph is None:
            return Failure(
                ErrorKind.NOT_CONFIGURED,
                "Authentication needs to be properly configured to access Microsoft Graph API",
                {"configurationRequired": copy.deepcopy(CONFIGURATION_HINT)},
            )

        not_found = Failure(
            ErrorKind.NOT_FOUND, f"No user found with ID or UPN: {user_id}"
        )
        query = QuerySpec(select=select)
        params = {"$select": ",".join(query.select)} if query.select else None

        try:
            record = await self.graph.get(
                f"/users/{quote(user_id, safe='@')}", params=params
            )
            if not record:
                return not_found

            payload = UserDetail.from_graph(record).to_payload()
            payload["selectedProperties"] = select
            return Success(payload)
        except GraphApiError as e:
            if e.status == 404:
                return not_found
            logger.error(f"Graph API error getting user ({e.status}): {e.message}")
            return _graph_api_failure(e)
        except (Exception, asyncio.CancelledError) as e:
            logger.error(f"Unexpected error getting user: {e}")
            return _unexpected_failure(e)

    def get_authentication_info(self) -> Dict[str, Any]:
        """Return static setup guidance for Graph authentication."""
        return copy.deepcopy(AUTHENTICATION_INFO)
