"""
GitHub MCP Server

Exposes a filtered catalog of GitHub tools to MCP agents.
"""

__version__ = "0.1.0"

from .base import MCPTool, ToolDefinition, ToolParameter, ToolResult
from .filters import FilterConfig
from .registry import ToolRegistry

__all__ = [
    "FilterConfig",
    "MCPTool",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
    "__version__",
]
