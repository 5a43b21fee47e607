"""
Shared fixtures: a scripted fake of the GitHub REST API served through
httpx.MockTransport.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from github_mcp.base import ToolContext
from github_mcp.client import GitHubClient

API_URL = "https://api.github.test/"


class FakeGitHub:
    """Route table keyed by (method, path); unknown routes answer 404."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any, Optional[bytes]]] = {}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[Exception] = None

    def add(self, method: str, path: str, status: int = 200, json: Any = None, content: bytes = None):
        self.routes[(method.upper(), path)] = (status, json, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body, content = route
        if content is not None:
            return httpx.Response(status, content=content)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def client(self) -> GitHubClient:
        return GitHubClient(
            token="test-token",
            base_url=API_URL,
            transport=httpx.MockTransport(self.handler),
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def body_of(self, request: httpx.Request) -> Any:
        return json.loads(request.content)

    def paths(self) -> List[Tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def github_client(fake_github) -> GitHubClient:
    return fake_github.client()


@pytest.fixture
def ctx() -> ToolContext:
    return ToolContext(tool_name="test")
