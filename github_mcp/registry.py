"""
MCP Tool Registry

Builds the exposed tool catalog once at startup and dispatches calls
against it.

The full catalog comes from ``github_mcp.tools.CATALOG``. Each entry goes
through the capability filter in catalog order; entries that fail either
gate (read-only mode for mutating tools, include/exclude lists) are
simply left out. Nothing is reordered and no handler runs while the
registry is built.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import (
    ArgumentBag,
    ToolContext,
    ToolDefinition,
    ToolNotFoundError,
    ToolResult,
)
from .client import GitHubClient
from .filters import FilterConfig
from .resources import ResourceTemplate, repository_resource_templates
from .tools import build_catalog
from .translations import TranslationHelper

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Ordered, read-only view of the tools a server instance exposes."""

    def __init__(
        self,
        tools: Iterable[ToolDefinition],
        resource_templates: Iterable[ResourceTemplate] = (),
    ):
        registered: Dict[str, ToolDefinition] = {}
        for definition in tools:
            if definition.name in registered:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            registered[definition.name] = definition
        self._tools = registered
        self._resource_templates = tuple(resource_templates)

    @classmethod
    def build(
        cls,
        client: GitHubClient,
        filter_config: FilterConfig,
        t: Optional[TranslationHelper] = None,
    ) -> "ToolRegistry":
        exposed: List[ToolDefinition] = []
        for tool in build_catalog(client, t):
            if not filter_config.allows(tool.name, mutating=tool.mutating):
                logger.debug(f"Skipping tool: {tool.name}")
                continue
            exposed.append(tool.to_definition())
            logger.info(f"Registered tool: {tool.name} ({tool.category})")

        logger.info(
            f"Tool registry built. Exposed tools: {len(exposed)} "
            f"(read_only={filter_config.read_only})"
        )
        return cls(exposed, repository_resource_templates())

    def get_all_tools(self) -> Dict[str, ToolDefinition]:
        return dict(self._tools)

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """
        Get a specific tool by name.
        Returns None if the tool is unknown or was filtered out.
        """
        return self._tools.get(name)

    def get_tools_by_category(self, category: str) -> Dict[str, ToolDefinition]:
        return {
            name: tool
            for name, tool in self._tools.items()
            if tool.category == category
        }

    def list_tool_names(self) -> List[str]:
        return list(self._tools)

    def get_openai_tools_schema(self) -> List[Dict[str, Any]]:
        """
        Get all tools in OpenAI function calling format.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": name,
                    "description": definition.description,
                    "parameters": definition.input_schema(),
                },
            }
            for name, definition in self._tools.items()
        ]

    @property
    def resource_templates(self) -> List[ResourceTemplate]:
        return list(self._resource_templates)

    def find_resource_template(self, uri: str) -> Optional[ResourceTemplate]:
        for template in self._resource_templates:
            if template.match(uri) is not None:
                return template
        return None

    async def execute_tool(
        self,
        name: str,
        arguments: Optional[ArgumentBag] = None,
        context: Optional[ToolContext] = None,
    ) -> ToolResult:
        """
        Execute an exposed tool by name.

        Raises ToolNotFoundError for names outside the exposed catalog,
        whether they were never implemented or were filtered out.
        """
        tool = self._tools.get(name)
        if tool is None or tool.handler is None:
            raise ToolNotFoundError(name)

        ctx = context or ToolContext(tool_name=name)
        logger.info(f"Executing tool {name} (request {ctx.request_id})")
        return await tool.handler(ctx, arguments or {})

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools
