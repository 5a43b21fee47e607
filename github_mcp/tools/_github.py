"""
Shared pieces for GitHub-backed tools.
"""

from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from ..base import ArgumentBag, MCPTool, ToolParameter, ToolResult
from ..client import GitHubClient, GitHubResponse
from ..params import optional_int_with_default
from ..translations import TranslationHelper, null_translation


def owner_param() -> ToolParameter:
    return ToolParameter(name="owner", type="string", description="Repository owner", required=True)


def repo_param() -> ToolParameter:
    return ToolParameter(name="repo", type="string", description="Repository name", required=True)


def pagination_params() -> List[ToolParameter]:
    return [
        ToolParameter(
            name="page",
            type="number",
            description="Page number for pagination (min 1)",
            minimum=1,
        ),
        ToolParameter(
            name="perPage",
            type="number",
            description="Results per page for pagination (min 1, max 100)",
            minimum=1,
            maximum=100,
        ),
    ]


def pagination(args: ArgumentBag) -> Dict[str, int]:
    """Query parameters for page/perPage, defaulting to page 1 of 30."""
    return {
        "page": optional_int_with_default(args, "page", 1),
        "per_page": optional_int_with_default(args, "perPage", 30),
    }


def repo_path(owner: str, repo: str, *parts: object) -> str:
    segments = [quote(owner, safe=""), quote(repo, safe="")]
    segments.extend(quote(str(p), safe="/") for p in parts)
    return "repos/" + "/".join(segments)


def json_field(response: GitHubResponse, *keys: str) -> Any:
    """
    Walk nested objects of a JSON body, e.g. json_field(r, "head", "sha").
    None when the body or any level on the way is not an object.
    """
    value = response.json()
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


class GitHubTool(MCPTool):
    """MCPTool bound to a GitHub client and a description lookup."""

    def __init__(self, client: GitHubClient, t: Optional[TranslationHelper] = None):
        self.client = client
        self.t = t or null_translation()

    def respond(
        self,
        response: GitHubResponse,
        failure: str,
        expected: Iterable[int] = (200,),
    ) -> ToolResult:
        """
        JSON payload on an expected status, otherwise a tool error
        carrying GitHub's response body.
        """
        if response.status_code not in tuple(expected):
            return self.failed(response, failure)
        return ToolResult.from_payload(response.json())

    @staticmethod
    def failed(response: GitHubResponse, failure: str) -> ToolResult:
        return ToolResult.tool_error(f"{failure}: {response.text}")
