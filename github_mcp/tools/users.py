"""
User Tools
"""

from typing import List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult
from ..params import optional_str
from ._github import GitHubTool


class GetMeTool(GitHubTool):
    """Details of the user the token belongs to."""

    @property
    def name(self) -> str:
        return "get_me"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_GET_ME_DESCRIPTION",
            'Get details of the authenticated GitHub user. Use this when a request include "me", "my"...',
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="reason", type="string",
                          description="Optional: reason the session was created"),
        ]

    @property
    def category(self) -> str:
        return "users"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        # accepted for the caller's benefit, not sent to GitHub
        optional_str(args, "reason")

        response = await self.client.get("user")
        return self.respond(response, "failed to get user")


TOOLS = [GetMeTool]
