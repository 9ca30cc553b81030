"""
MCP tool services.
"""

from .demo_service import DemoService
from .directory_service import DirectoryService

__all__ = ["DemoService", "DirectoryService"]
