"""
GitHub Tools Package

The catalog below is the single, ordered list of every tool the server
knows about. The registry walks it in this order and the capability
filter decides which entries are exposed.
"""

from typing import List, Optional, Type

from ..client import GitHubClient
from ..translations import TranslationHelper
from . import code_scanning, issues, pull_requests, repositories, search, users
from ._github import GitHubTool

CATALOG: List[Type[GitHubTool]] = [
    *issues.READ_TOOLS,
    *issues.WRITE_TOOLS,
    *pull_requests.READ_TOOLS,
    *pull_requests.WRITE_TOOLS,
    *repositories.READ_TOOLS,
    *repositories.WRITE_TOOLS,
    *search.TOOLS,
    *users.TOOLS,
    *code_scanning.TOOLS,
]


def build_catalog(client: GitHubClient, t: Optional[TranslationHelper] = None) -> List[GitHubTool]:
    """Instantiate every tool, in catalog order."""
    return [tool_cls(client, t) for tool_cls in CATALOG]


__all__ = ["CATALOG", "GitHubTool", "build_catalog"]
