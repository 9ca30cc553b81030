"""
Microsoft Graph access: HTTP client, user models and the directory facade.
"""

from .client import GRAPH_BASE_URL, GraphClient
from .directory import DirectoryClient
from .models import QuerySpec, UserDetail, UserSummary

__all__ = [
    "GRAPH_BASE_URL",
    "DirectoryClient",
    "GraphClient",
    "QuerySpec",
    "UserDetail",
    "UserSummary",
]
