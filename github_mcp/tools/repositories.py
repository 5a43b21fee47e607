"""
Repository Tools

File contents, commits, branches, forks and multi-file pushes.
"""

import base64
from typing import Any, Dict, List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult, TypeMismatchError
from ..params import (
    optional_bool,
    optional_str,
    required_object_array,
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


class SearchRepositoriesTool(GitHubTool):

    @property
    def name(self) -> str:
        return "search_repositories"

    @property
    def description(self) -> str:
        return self.t("TOOL_SEARCH_REPOSITORIES_DESCRIPTION", "Search for GitHub repositories")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="query", type="string", description="Search query", required=True),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        query = required_str(args, "query")
        response = await self.client.get(
            "search/repositories",
            params={"q": query, **pagination(args)},
        )
        return self.respond(response, "failed to search repositories")


class GetFileContentsTool(GitHubTool):

    @property
    def name(self) -> str:
        return "get_file_contents"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_GET_FILE_CONTENTS_DESCRIPTION",
            "Get the contents of a file or directory from a GitHub repository",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="path", type="string", description="Path to file/directory", required=True),
            ToolParameter(name="branch", type="string", description="Branch to get contents from"),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        path = required_str(args, "path")
        branch = optional_str(args, "branch")

        response = await self.client.get(
            repo_path(owner, repo, "contents", path.lstrip("/")),
            params={"ref": branch},
        )
        return self.respond(response, "failed to get file contents")


class ListCommitsTool(GitHubTool):

    @property
    def name(self) -> str:
        return "list_commits"

    @property
    def description(self) -> str:
        return self.t("TOOL_LIST_COMMITS_DESCRIPTION", "Get list of commits of a branch in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="sha", type="string", description="Branch name or commit SHA to start from"),
            *pagination_params(),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        params = {"sha": optional_str(args, "sha"), **pagination(args)}

        response = await self.client.get(f"{repo_path(owner, repo)}/commits", params=params)
        return self.respond(response, "failed to list commits")


class CreateOrUpdateFileTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_or_update_file"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_CREATE_OR_UPDATE_FILE_DESCRIPTION",
            "Create or update a single file in a GitHub repository",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="path", type="string", description="Path where to create/update the file",
                          required=True),
            ToolParameter(name="content", type="string", description="Content of the file", required=True),
            ToolParameter(name="message", type="string", description="Commit message", required=True),
            ToolParameter(name="branch", type="string", description="Branch to create/update the file in",
                          required=True),
            ToolParameter(name="sha", type="string",
                          description="SHA of file being replaced (for updates)"),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        path = required_str(args, "path")
        content = required_str(args, "content")
        message = required_str(args, "message")
        branch = required_str(args, "branch")
        sha = optional_str(args, "sha")

        payload: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha

        response = await self.client.put(
            repo_path(owner, repo, "contents", path.lstrip("/")),
            json=payload,
        )
        return self.respond(response, "failed to create/update file", expected=(200, 201))


class CreateRepositoryTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_repository"

    @property
    def description(self) -> str:
        return self.t("TOOL_CREATE_REPOSITORY_DESCRIPTION", "Create a new GitHub repository in your account")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="name", type="string", description="Repository name", required=True),
            ToolParameter(name="description", type="string", description="Repository description"),
            ToolParameter(name="private", type="boolean", description="Whether repo should be private"),
            ToolParameter(name="autoInit", type="boolean", description="Initialize with README"),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        payload = {
            "name": required_str(args, "name"),
            "description": optional_str(args, "description"),
            "private": optional_bool(args, "private"),
            "auto_init": optional_bool(args, "autoInit"),
        }

        response = await self.client.post("user/repos", json=payload)
        return self.respond(response, "failed to create repository", expected=(201,))


class ForkRepositoryTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "fork_repository"

    @property
    def description(self) -> str:
        return self.t("TOOL_FORK_REPOSITORY_DESCRIPTION", "Fork a GitHub repository to your account or specified organization")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="organization", type="string", description="Organization to fork to"),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        payload: Dict[str, Any] = {}
        organization = optional_str(args, "organization")
        if organization:
            payload["organization"] = organization

        response = await self.client.post(f"{repo_path(owner, repo)}/forks", json=payload)
        if response.is_accepted:
            return ToolResult.text("Fork is in progress")
        return self.respond(response, "failed to fork repository")


class CreateBranchTool(GitHubTool):
    mutating = True

    @property
    def name(self) -> str:
        return "create_branch"

    @property
    def description(self) -> str:
        return self.t("TOOL_CREATE_BRANCH_DESCRIPTION", "Create a new branch in a GitHub repository")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="branch", type="string", description="Name for new branch", required=True),
            ToolParameter(name="from_branch", type="string",
                          description="Source branch (defaults to repo default)"),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        branch = required_str(args, "branch")
        from_branch = optional_str(args, "from_branch")

        if not from_branch:
            repo_response = await self.client.get(repo_path(owner, repo))
            if repo_response.status_code != 200:
                return self.failed(repo_response, "failed to get repository")
            from_branch = json_field(repo_response, "default_branch")
            if not isinstance(from_branch, str) or not from_branch:
                return ToolResult.tool_error("failed to get repository: default branch is missing")

        ref_response = await self.client.get(repo_path(owner, repo, "git", "ref", "heads", from_branch))
        if ref_response.status_code != 200:
            return self.failed(ref_response, "failed to get reference")
        sha = json_field(ref_response, "object", "sha")
        if not sha:
            return ToolResult.tool_error("failed to get reference: commit sha is missing")

        response = await self.client.post(
            repo_path(owner, repo, "git", "refs"),
            json={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        return self.respond(response, "failed to create branch", expected=(201,))


class PushFilesTool(GitHubTool):
    """
    Commit several files in one go through the git data API:
    branch ref -> base commit -> new tree -> new commit -> move ref.
    """

    mutating = True

    @property
    def name(self) -> str:
        return "push_files"

    @property
    def description(self) -> str:
        return self.t("TOOL_PUSH_FILES_DESCRIPTION", "Push multiple files to a GitHub repository in a single commit")

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="branch", type="string", description="Branch to push to", required=True),
            ToolParameter(
                name="files",
                type="array",
                description="Array of file objects to push, each object with path (string) and content (string)",
                required=True,
                items={
                    "type": "object",
                    "properties": {
                        "path": {"type": "string", "description": "path to the file"},
                        "content": {"type": "string", "description": "file content"},
                    },
                    "required": ["path", "content"],
                },
            ),
            ToolParameter(name="message", type="string", description="Commit message", required=True),
        ]

    @property
    def category(self) -> str:
        return "repositories"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        branch = required_str(args, "branch")
        message = required_str(args, "message")
        files = required_object_array(args, "files")

        entries = []
        for index, entry in enumerate(files):
            path = entry.get("path")
            content = entry.get("content")
            if not isinstance(path, str) or not path or not isinstance(content, str):
                raise TypeMismatchError(f"files[{index}]", "object with path and content", "object")
            entries.append({"path": path, "mode": "100644", "type": "blob", "content": content})

        ref_response = await self.client.get(repo_path(owner, repo, "git", "ref", "heads", branch))
        if ref_response.status_code != 200:
            return self.failed(ref_response, "failed to get branch reference")
        head_sha = json_field(ref_response, "object", "sha")
        if not head_sha:
            return ToolResult.tool_error("failed to get branch reference: commit sha is missing")

        commit_response = await self.client.get(repo_path(owner, repo, "git", "commits", head_sha))
        if commit_response.status_code != 200:
            return self.failed(commit_response, "failed to get base commit")
        base_tree = json_field(commit_response, "tree", "sha")
        if not base_tree:
            return ToolResult.tool_error("failed to get base commit: tree sha is missing")

        tree_response = await self.client.post(
            repo_path(owner, repo, "git", "trees"),
            json={"base_tree": base_tree, "tree": entries},
        )
        if tree_response.status_code != 201:
            return self.failed(tree_response, "failed to create tree")
        tree_sha = json_field(tree_response, "sha")
        if not tree_sha:
            return ToolResult.tool_error("failed to create tree: tree sha is missing")

        new_commit_response = await self.client.post(
            repo_path(owner, repo, "git", "commits"),
            json={"message": message, "tree": tree_sha, "parents": [head_sha]},
        )
        if new_commit_response.status_code != 201:
            return self.failed(new_commit_response, "failed to create commit")
        new_commit_sha = json_field(new_commit_response, "sha")
        if not new_commit_sha:
            return ToolResult.tool_error("failed to create commit: commit sha is missing")

        response = await self.client.patch(
            repo_path(owner, repo, "git", "refs", "heads", branch),
            json={"sha": new_commit_sha, "force": False},
        )
        return self.respond(response, "failed to update reference")


READ_TOOLS = [SearchRepositoriesTool, GetFileContentsTool, ListCommitsTool]
WRITE_TOOLS = [
    CreateOrUpdateFileTool,
    CreateRepositoryTool,
    ForkRepositoryTool,
    CreateBranchTool,
    PushFilesTool,
]
