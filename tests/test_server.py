"""
Tests for the HTTP surface, using FastAPI's TestClient over a scripted
GitHub API.
"""

import base64

import httpx
import pytest
from fastapi.testclient import TestClient

from github_mcp.config import Settings
from github_mcp.server import create_app
from github_mcp.tools.users import GetMeTool


@pytest.fixture
def make_client(fake_github):
    def _make(**settings) -> TestClient:
        app = create_app(Settings(token="test-token", **settings), client=fake_github.client())
        return TestClient(app)
    return _make


@pytest.fixture
def api(make_client):
    with make_client() as client:
        yield client


class TestInfoEndpoints:

    def test_root(self, api):
        body = api.get("/").json()
        assert body["service"] == "GitHub MCP Server"
        assert body["tools_count"] == 29
        assert body["read_only"] is False

    def test_health(self, api):
        assert api.get("/health").json() == {"status": "healthy", "tools_loaded": 29}

    def test_list_tools_in_catalog_order(self, api):
        body = api.get("/tools").json()
        names = [tool["name"] for tool in body["tools"]]
        assert body["total"] == 29
        assert names[:3] == ["get_issue", "search_issues", "list_issues"]
        assert names[-1] == "list_code_scanning_alerts"

    def test_tool_info(self, api):
        body = api.get("/tools/create_issue").json()
        assert body["mutating"] is True
        assert body["inputSchema"]["required"] == ["owner", "repo", "title"]

    def test_unknown_tool_info(self, api):
        assert api.get("/tools/nope").status_code == 404

    def test_schema(self, api):
        tools = api.get("/tools/schema").json()["tools"]
        assert tools[0]["type"] == "function"


class TestFiltering:

    def test_read_only_hides_mutating_tools(self, make_client, fake_github):
        with make_client(read_only=True) as client:
            names = [tool["name"] for tool in client.get("/tools").json()["tools"]]
            assert "create_issue" not in names
            assert len(names) == 17

            response = client.post(
                "/tools/create_issue/execute",
                json={"arguments": {"owner": "o", "repo": "r", "title": "t"}},
            )
            assert response.status_code == 404
        assert fake_github.requests == []

    def test_include_list(self, make_client):
        with make_client(include_tools="get_me, search_code") as client:
            names = [tool["name"] for tool in client.get("/tools").json()["tools"]]
            assert names == ["search_code", "get_me"]

    def test_resource_templates_survive_filtering(self, make_client):
        with make_client(include_tools="get_me") as client:
            templates = client.get("/resources/templates").json()["resourceTemplates"]
            assert len(templates) == 5


class TestExecute:

    def test_success(self, api, fake_github):
        fake_github.add("GET", "/user", json={"login": "octocat"})

        response = api.post("/tools/get_me/execute", json={"arguments": {}})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["tool"] == "get_me"
        assert '"octocat"' in body["result"]

    def test_arguments_default_to_empty(self, api, fake_github):
        fake_github.add("GET", "/user", json={"login": "octocat"})
        assert api.post("/tools/get_me/execute", json={}).status_code == 200

    def test_tool_error_is_a_normal_response(self, api, fake_github):
        response = api.post("/tools/get_issue/execute", json={"arguments": {"owner": "o", "repo": "r"}})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "tool_error"
        assert body["error"] == "missing required parameter: issue_number"
        assert fake_github.requests == []

    def test_github_failure_is_tool_error(self, api, fake_github):
        fake_github.add("GET", "/repos/o/r/issues/1", status=410, json={"message": "Gone"})

        response = api.post(
            "/tools/get_issue/execute",
            json={"arguments": {"owner": "o", "repo": "r", "issue_number": 1}},
        )

        body = response.json()
        assert body["success"] is False
        assert "Gone" in body["error"]

    def test_transport_failure_is_502(self, api, fake_github):
        fake_github.fail_with = httpx.ConnectTimeout("timed out")

        response = api.post("/tools/get_me/execute", json={"arguments": {}})

        assert response.status_code == 502
        assert "timed out" in response.json()["detail"]

    def test_oversized_number_is_a_bad_request(self, api, fake_github):
        response = api.post(
            "/tools/get_issue/execute",
            json={"arguments": {"owner": "o", "repo": "r", "issue_number": 10**400}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "tool_error"
        assert fake_github.requests == []

    def test_unexpected_exception_is_500(self, make_client, monkeypatch):
        async def explode(self, ctx, args):
            raise RuntimeError("handler bug")

        monkeypatch.setattr(GetMeTool, "execute", explode)
        with make_client() as client:
            response = client.post("/tools/get_me/execute", json={"arguments": {}})

        assert response.status_code == 500
        assert response.json()["detail"] == "handler bug"

    def test_unknown_tool(self, api):
        assert api.post("/tools/nope/execute", json={"arguments": {}}).status_code == 404


class TestResources:

    def test_read_file(self, api, fake_github):
        fake_github.add(
            "GET", "/repos/octo/hello/contents/notes.txt",
            json={"type": "file", "content": base64.b64encode(b"hello").decode()},
        )

        response = api.get("/resources/read", params={"uri": "repo://octo/hello/contents/notes.txt"})

        assert response.status_code == 200
        assert response.json()["contents"] == [
            {"uri": "repo://octo/hello/contents/notes.txt", "mimeType": "text/plain", "text": "hello"},
        ]

    def test_unmatched_uri(self, api):
        assert api.get("/resources/read", params={"uri": "file:///etc/passwd"}).status_code == 404

    def test_missing_content(self, api):
        response = api.get("/resources/read", params={"uri": "repo://octo/hello/contents/missing.txt"})
        assert response.status_code == 404

    def test_empty_contents_body(self, api, fake_github):
        fake_github.add("GET", "/repos/octo/hello/contents/notes.txt")
        response = api.get("/resources/read", params={"uri": "repo://octo/hello/contents/notes.txt"})
        assert response.status_code == 404

    def test_bad_pull_number(self, api):
        response = api.get("/resources/read", params={"uri": "repo://octo/hello/refs/pull/x/head/contents/a"})
        assert response.status_code == 400

    def test_transport_failure(self, api, fake_github):
        fake_github.fail_with = httpx.ConnectError("down")
        response = api.get("/resources/read", params={"uri": "repo://octo/hello/contents/a.txt"})
        assert response.status_code == 502
