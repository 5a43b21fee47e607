"""
Search Tools

Code and user search across GitHub.
"""

from typing import List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult
from ..params import optional_str, required_str
from ._github import GitHubTool, pagination, pagination_params


class SearchCodeTool(GitHubTool):

    @property
    def name(self) -> str:
        return "search_code"

    @property
    def description(self) -> str:
        return self.t("TOOL_SEARCH_CODE_DESCRIPTION", "Search for code across GitHub repositories")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="q", type="string", description="Search query using GitHub code search syntax",
                          required=True),
            ToolParameter(name="sort", type="string", description="Sort field ('indexed' only)"),
            ToolParameter(name="order", type="string", description="Sort order", enum=["asc", "desc"]),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        params = {
            "q": required_str(args, "q"),
            "sort": optional_str(args, "sort"),
            "order": optional_str(args, "order"),
            **pagination(args),
        }
        response = await self.client.get("search/code", params=params)
        return self.respond(response, "failed to search code")


class SearchUsersTool(GitHubTool):

    @property
    def name(self) -> str:
        return "search_users"

    @property
    def description(self) -> str:
        return self.t("TOOL_SEARCH_USERS_DESCRIPTION", "Search for GitHub users")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="q", type="string", description="Search query using GitHub users search syntax",
                          required=True),
            ToolParameter(name="sort", type="string", description="Sort field",
                          enum=["followers", "repositories", "joined"]),
            ToolParameter(name="order", type="string", description="Sort order", enum=["asc", "desc"]),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        params = {
            "q": required_str(args, "q"),
            "sort": optional_str(args, "sort"),
            "order": optional_str(args, "order"),
            **pagination(args),
        }
        response = await self.client.get("search/users", params=params)
        return self.respond(response, "failed to search users")


TOOLS = [SearchCodeTool, SearchUsersTool]
