"""
Issue Tools

Read and write GitHub issues and issue comments.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult
from ..params import (
    optional_int,
    optional_str,
    optional_string_array,
    required_int,
    required_str,
)
from ._github import (
    GitHubTool,
    owner_param,
    pagination,
    pagination_params,
    repo_param,
    repo_path,
)


def parse_iso_timestamp(value: str) -> str:
    """
    Normalize an ISO 8601 timestamp (or a bare YYYY-MM-DD date) to the
    UTC form GitHub expects.
    """
    if not value:
        raise ValueError("empty timestamp")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(
            f"invalid ISO 8601 timestamp: {value} (supported formats: "
            "YYYY-MM-DDThh:mm:ssZ or YYYY-MM-DD)"
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class GetIssueTool(GitHubTool):
    """Get a single issue."""

    @property
    def name(self) -> str:
        return "get_issue"

    @property
    def description(self) -> str:
        return self.t("TOOL_GET_ISSUE_DESCRIPTION", "Get details of a specific issue in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="issue_number", type="number",
                          description="The number of the issue", required=True),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        issue_number = required_int(args, "issue_number")

        response = await self.client.get(f"{repo_path(owner, repo)}/issues/{issue_number}")
        return self.respond(response, "failed to get issue")


class SearchIssuesTool(GitHubTool):

    @property
    def name(self) -> str:
        return "search_issues"

    @property
    def description(self) -> str:
        return self.t("TOOL_SEARCH_ISSUES_DESCRIPTION", "Search for issues and pull requests across GitHub repositories")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="q", type="string", description="Search query using GitHub issues search syntax",
                          required=True),
            ToolParameter(
                name="sort",
                type="string",
                description="Sort field (defaults to best match)",
                enum=[
                    "comments", "reactions", "reactions-+1", "reactions--1",
                    "reactions-smile", "reactions-thinking_face", "reactions-heart",
                    "reactions-tada", "interactions", "created", "updated",
                ],
            ),
            ToolParameter(name="order", type="string", description="Sort order", enum=["asc", "desc"]),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        query = required_str(args, "q")
        params = {
            "q": query,
            "sort": optional_str(args, "sort"),
            "order": optional_str(args, "order"),
            **pagination(args),
        }

        response = await self.client.get("search/issues", params=params)
        return self.respond(response, "failed to search issues")


class ListIssuesTool(GitHubTool):

    @property
    def name(self) -> str:
        return "list_issues"

    @property
    def description(self) -> str:
        return self.t("TOOL_LIST_ISSUES_DESCRIPTION", "List issues in a GitHub repository with filtering options")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="state", type="string", description="Filter by state",
                          enum=["open", "closed", "all"]),
            ToolParameter(name="labels", type="array", description="Filter by labels"),
            ToolParameter(name="sort", type="string", description="Sort by",
                          enum=["created", "updated", "comments"]),
            ToolParameter(name="direction", type="string", description="Sort direction",
                          enum=["asc", "desc"]),
            ToolParameter(name="since", type="string", description="Filter by date (ISO 8601 timestamp)"),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        labels = optional_string_array(args, "labels")
        since = optional_str(args, "since")

        params: Dict[str, Any] = {
            "state": optional_str(args, "state"),
            "sort": optional_str(args, "sort"),
            "direction": optional_str(args, "direction"),
            **pagination(args),
        }
        if labels:
            params["labels"] = ",".join(labels)
        if since:
            try:
                params["since"] = parse_iso_timestamp(since)
            except ValueError as e:
                return ToolResult.tool_error(f"failed to list issues: {e}")

        response = await self.client.get(f"{repo_path(owner, repo)}/issues", params=params)
        return self.respond(response, "failed to list issues")


class CreateIssueTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_issue"

    @property
    def description(self) -> str:
        return self.t("TOOL_CREATE_ISSUE_DESCRIPTION", "Create a new issue in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="title", type="string", description="Issue title", required=True),
            ToolParameter(name="body", type="string", description="Issue body content"),
            ToolParameter(name="assignees", type="array", description="Usernames to assign to this issue"),
            ToolParameter(name="labels", type="array", description="Labels to apply to this issue"),
            ToolParameter(name="milestone", type="number", description="Milestone number"),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        payload: Dict[str, Any] = {
            "title": required_str(args, "title"),
            "body": optional_str(args, "body"),
            "assignees": optional_string_array(args, "assignees"),
            "labels": optional_string_array(args, "labels"),
        }
        milestone = optional_int(args, "milestone")
        if milestone:
            payload["milestone"] = milestone

        response = await self.client.post(f"{repo_path(owner, repo)}/issues", json=payload)
        return self.respond(response, "failed to create issue", expected=(201,))


class AddIssueCommentTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "add_issue_comment"

    @property
    def description(self) -> str:
        return self.t("TOOL_ADD_ISSUE_COMMENT_DESCRIPTION", "Add a comment to an existing issue")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="issue_number", type="number", description="Issue number to comment on",
                          required=True),
            ToolParameter(name="body", type="string", description="Comment text", required=True),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        issue_number = required_int(args, "issue_number")
        body = required_str(args, "body")

        response = await self.client.post(
            f"{repo_path(owner, repo)}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return self.respond(response, "failed to create comment", expected=(201,))


class UpdateIssueTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "update_issue"

    @property
    def description(self) -> str:
        return self.t("TOOL_UPDATE_ISSUE_DESCRIPTION", "Update an existing issue in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="issue_number", type="number", description="Issue number to update",
                          required=True),
            ToolParameter(name="title", type="string", description="New title"),
            ToolParameter(name="body", type="string", description="New description"),
            ToolParameter(name="state", type="string", description="New state", enum=["open", "closed"]),
            ToolParameter(name="labels", type="array", description="New labels"),
            ToolParameter(name="assignees", type="array", description="New assignees"),
            ToolParameter(name="milestone", type="number", description="New milestone number"),
        ]

    @property
    def category(self) -> str:
        return "issues"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        issue_number = required_int(args, "issue_number")

        # only send the fields the caller set
        payload: Dict[str, Any] = {}
        for field in ("title", "body", "state"):
            value = optional_str(args, field)
            if value:
                payload[field] = value
        for field in ("labels", "assignees"):
            values = optional_string_array(args, field)
            if values:
                payload[field] = values
        milestone = optional_int(args, "milestone")
        if milestone:
            payload["milestone"] = milestone

        response = await self.client.patch(f"{repo_path(owner, repo)}/issues/{issue_number}", json=payload)
        return self.respond(response, "failed to update issue")


READ_TOOLS = [GetIssueTool, SearchIssuesTool, ListIssuesTool]
WRITE_TOOLS = [CreateIssueTool, AddIssueCommentTool, UpdateIssueTool]
