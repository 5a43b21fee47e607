"""
Pull Request Tools

Inspect pull requests (files, status checks, comments, reviews) and
create, review, merge or update them.
"""

from typing import Any, Dict, List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult, TypeMismatchError
from ..params import (
    optional_bool,
    optional_object_array,
    optional_str,
    required_int,
    required_str,
)
from ._github import (
    GitHubTool,
    json_field,
    owner_param,
    pagination,
    pagination_params,
    repo_param,
    repo_path,
)


def pull_number_param(description: str = "Pull request number") -> ToolParameter:
    return ToolParameter(name="pullNumber", type="number", description=description, required=True)


class _PullRequestTool(GitHubTool):

    @property
    def category(self) -> str:
        return "pull_requests"

    def _target(self, args: ArgumentBag) -> str:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        pull_number = required_int(args, "pullNumber")
        return f"{repo_path(owner, repo)}/pulls/{pull_number}"


class GetPullRequestTool(_PullRequestTool):

    @property
    def name(self) -> str:
        return "get_pull_request"

    @property
    def description(self) -> str:
        return self.t("TOOL_GET_PULL_REQUEST_DESCRIPTION", "Get details of a specific pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [owner_param(), repo_param(), pull_number_param()]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        response = await self.client.get(self._target(args))
        return self.respond(response, "failed to get pull request")


class ListPullRequestsTool(_PullRequestTool):

    @property
    def name(self) -> str:
        return "list_pull_requests"

    @property
    def description(self) -> str:
        return self.t("TOOL_LIST_PULL_REQUESTS_DESCRIPTION", "List and filter repository pull requests")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="state", type="string", description="Filter by state",
                          enum=["open", "closed", "all"]),
            ToolParameter(name="head", type="string", description="Filter by head user/org and branch"),
            ToolParameter(name="base", type="string", description="Filter by base branch"),
            ToolParameter(name="sort", type="string", description="Sort by",
                          enum=["created", "updated", "popularity", "long-running"]),
            ToolParameter(name="direction", type="string", description="Sort direction",
                          enum=["asc", "desc"]),
            *pagination_params(),
        ]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        params = {
            "state": optional_str(args, "state"),
            "head": optional_str(args, "head"),
            "base": optional_str(args, "base"),
            "sort": optional_str(args, "sort"),
            "direction": optional_str(args, "direction"),
            **pagination(args),
        }

        response = await self.client.get(f"{repo_path(owner, repo)}/pulls", params=params)
        return self.respond(response, "failed to list pull requests")


class GetPullRequestFilesTool(_PullRequestTool):

    @property
    def name(self) -> str:
        return "get_pull_request_files"

    @property
    def description(self) -> str:
        return self.t("TOOL_GET_PULL_REQUEST_FILES_DESCRIPTION", "Get the list of files changed in a pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [owner_param(), repo_param(), pull_number_param()]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        response = await self.client.get(f"{self._target(args)}/files", params={"per_page": 100})
        return self.respond(response, "failed to get pull request files")


class GetPullRequestStatusTool(_PullRequestTool):
    """Combined commit status of the pull request's head commit."""

    @property
    def name(self) -> str:
        return "get_pull_request_status"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_GET_PULL_REQUEST_STATUS_DESCRIPTION",
            "Get the combined status of all status checks for a pull request",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [owner_param(), repo_param(), pull_number_param()]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        pull_number = required_int(args, "pullNumber")

        pr_response = await self.client.get(f"{repo_path(owner, repo)}/pulls/{pull_number}")
        if pr_response.status_code != 200:
            return self.failed(pr_response, "failed to get pull request")
        head_sha = json_field(pr_response, "head", "sha")
        if not isinstance(head_sha, str) or not head_sha:
            return ToolResult.tool_error("failed to get pull request: head commit is missing")

        response = await self.client.get(repo_path(owner, repo, "commits", head_sha, "status"))
        return self.respond(response, "failed to get combined status")


class GetPullRequestCommentsTool(_PullRequestTool):

    @property
    def name(self) -> str:
        return "get_pull_request_comments"

    @property
    def description(self) -> str:
        return self.t("TOOL_GET_PULL_REQUEST_COMMENTS_DESCRIPTION", "Get the review comments on a pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [owner_param(), repo_param(), pull_number_param()]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        response = await self.client.get(f"{self._target(args)}/comments", params={"per_page": 100})
        return self.respond(response, "failed to get pull request comments")


class GetPullRequestReviewsTool(_PullRequestTool):

    @property
    def name(self) -> str:
        return "get_pull_request_reviews"

    @property
    def description(self) -> str:
        return self.t("TOOL_GET_PULL_REQUEST_REVIEWS_DESCRIPTION", "Get the reviews on a pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [owner_param(), repo_param(), pull_number_param()]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        response = await self.client.get(f"{self._target(args)}/reviews")
        return self.respond(response, "failed to get pull request reviews")


class MergePullRequestTool(_PullRequestTool):
    mutating = True

    @property
    def name(self) -> str:
        return "merge_pull_request"

    @property
    def description(self) -> str:
        return self.t("TOOL_MERGE_PULL_REQUEST_DESCRIPTION", "Merge a pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            pull_number_param(),
            ToolParameter(name="commit_title", type="string", description="Title for merge commit"),
            ToolParameter(name="commit_message", type="string", description="Extra detail for merge commit"),
            ToolParameter(name="merge_method", type="string", description="Merge method",
                          enum=["merge", "squash", "rebase"]),
        ]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        target = self._target(args)
        payload: Dict[str, Any] = {}
        for field in ("commit_title", "commit_message", "merge_method"):
            value = optional_str(args, field)
            if value:
                payload[field] = value

        response = await self.client.put(f"{target}/merge", json=payload)
        return self.respond(response, "failed to merge pull request")


class UpdatePullRequestBranchTool(_PullRequestTool):
    mutating = True

    @property
    def name(self) -> str:
        return "update_pull_request_branch"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_UPDATE_PULL_REQUEST_BRANCH_DESCRIPTION",
            "Update a pull request branch with the latest changes from the base branch",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            pull_number_param(),
            ToolParameter(name="expectedHeadSha", type="string",
                          description="The expected SHA of the pull request's HEAD ref"),
        ]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        target = self._target(args)
        payload: Dict[str, Any] = {}
        expected_head_sha = optional_str(args, "expectedHeadSha")
        if expected_head_sha:
            payload["expected_head_sha"] = expected_head_sha

        response = await self.client.put(f"{target}/update-branch", json=payload)
        if response.is_accepted:
            return ToolResult.text("Pull request branch update is in progress")
        return self.failed(response, "failed to update pull request branch")


class CreatePullRequestReviewTool(_PullRequestTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_pull_request_review"

    @property
    def description(self) -> str:
        return self.t("TOOL_CREATE_PULL_REQUEST_REVIEW_DESCRIPTION", "Create a review on a pull request")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            pull_number_param(),
            ToolParameter(name="body", type="string", description="Review comment text"),
            ToolParameter(name="event", type="string", description="Review action to perform", required=True,
                          enum=["APPROVE", "REQUEST_CHANGES", "COMMENT"]),
            ToolParameter(name="commitId", type="string", description="SHA of commit to review"),
            ToolParameter(
                name="comments",
                type="array",
                description="Line-specific comments array of objects to place comments on pull request changes",
                items={
                    "type": "object",
                    "properties": {
                        "path": {"type": "string", "description": "path to the file"},
                        "position": {"type": "number", "description": "line number in the diff"},
                        "line": {"type": "number", "description": "line number in the file"},
                        "body": {"type": "string", "description": "comment body"},
                    },
                    "required": ["path", "body"],
                },
            ),
        ]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        target = self._target(args)
        payload: Dict[str, Any] = {"event": required_str(args, "event")}
        body = optional_str(args, "body")
        if body:
            payload["body"] = body
        commit_id = optional_str(args, "commitId")
        if commit_id:
            payload["commit_id"] = commit_id
        comments = [_review_comment(i, c) for i, c in enumerate(optional_object_array(args, "comments"))]
        if comments:
            payload["comments"] = comments

        response = await self.client.post(f"{target}/reviews", json=payload)
        return self.respond(response, "failed to create pull request review")


def _review_comment(index: int, comment: Dict[str, Any]) -> Dict[str, Any]:
    path = comment.get("path")
    body = comment.get("body")
    if not isinstance(path, str) or not path or not isinstance(body, str) or not body:
        raise TypeMismatchError(f"comments[{index}]", "object with path and body", "object")

    review_comment: Dict[str, Any] = {"path": path, "body": body}
    for key in ("position", "line"):
        value = comment.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatchError(f"comments[{index}].{key}", "number", type(value).__name__)
        review_comment[key] = int(value)
    if "position" not in review_comment and "line" not in review_comment:
        raise TypeMismatchError(f"comments[{index}]", "object with position or line", "object")
    return review_comment


class CreatePullRequestTool(_PullRequestTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_pull_request"

    @property
    def description(self) -> str:
        return self.t("TOOL_CREATE_PULL_REQUEST_DESCRIPTION", "Create a new pull request in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="title", type="string", description="PR title", required=True),
            ToolParameter(name="body", type="string", description="PR description"),
            ToolParameter(name="head", type="string", description="Branch containing changes", required=True),
            ToolParameter(name="base", type="string", description="Branch to merge into", required=True),
            ToolParameter(name="draft", type="boolean", description="Create as draft PR"),
            ToolParameter(name="maintainer_can_modify", type="boolean",
                          description="Allow maintainer edits"),
        ]

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        payload: Dict[str, Any] = {
            "title": required_str(args, "title"),
            "head": required_str(args, "head"),
            "base": required_str(args, "base"),
            "draft": optional_bool(args, "draft"),
            "maintainer_can_modify": optional_bool(args, "maintainer_can_modify"),
        }
        body = optional_str(args, "body")
        if body:
            payload["body"] = body

        response = await self.client.post(f"{repo_path(owner, repo)}/pulls", json=payload)
        return self.respond(response, "failed to create pull request", expected=(201,))


READ_TOOLS = [
    GetPullRequestTool,
    ListPullRequestsTool,
    GetPullRequestFilesTool,
    GetPullRequestStatusTool,
    GetPullRequestCommentsTool,
    GetPullRequestReviewsTool,
]
WRITE_TOOLS = [
    MergePullRequestTool,
    UpdatePullRequestBranchTool,
    CreatePullRequestReviewTool,
    CreatePullRequestTool,
]
