"""
Code Scanning Tools

Read code scanning alerts of a repository.
"""

from typing import List

from ..base import ArgumentBag, ToolContext, ToolParameter, ToolResult
from ..params import optional_str, required_int, required_str
from ._github import GitHubTool, owner_param, repo_param, repo_path


class GetCodeScanningAlertTool(GitHubTool):

    @property
    def name(self) -> str:
        return "get_code_scanning_alert"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_GET_CODE_SCANNING_ALERT_DESCRIPTION",
            "Get details of a specific code scanning alert in a GitHub repository.",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="alertNumber", type="number", description="The number of the alert.",
                          required=True),
        ]

    @property
    def category(self) -> str:
        return "code_scanning"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        alert_number = required_int(args, "alertNumber")

        response = await self.client.get(f"{repo_path(owner, repo)}/code-scanning/alerts/{alert_number}")
        return self.respond(response, "failed to get alert")


class ListCodeScanningAlertsTool(GitHubTool):

    @property
    def name(self) -> str:
        return "list_code_scanning_alerts"

    @property
    def description(self) -> str:
        return self.t(
            "TOOL_LIST_CODE_SCANNING_ALERTS_DESCRIPTION",
            "List code scanning alerts in a GitHub repository.",
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            owner_param(),
            repo_param(),
            ToolParameter(name="ref", type="string",
                          description="The Git reference for the results you want to list."),
            ToolParameter(name="state", type="string", description="State of the code scanning alerts to list.",
                          default="open", enum=["open", "closed", "dismissed", "fixed"]),
            ToolParameter(name="severity", type="string", description="Only code scanning alerts with this severity",
                          enum=["critical", "high", "medium", "low", "warning", "note", "error"]),
        ]

    @property
    def category(self) -> str:
        return "code_scanning"

    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        owner = required_str(args, "owner")
        repo = required_str(args, "repo")
        params = {
            "ref": optional_str(args, "ref"),
            "state": optional_str(args, "state") or "open",
            "severity": optional_str(args, "severity"),
        }

        response = await self.client.get(f"{repo_path(owner, repo)}/code-scanning/alerts", params=params)
        return self.respond(response, "failed to list alerts")


TOOLS = [GetCodeScanningAlertTool, ListCodeScanningAlertsTool]
