"""
Repository Content Resources

URI templates that let a client read files and directories straight from
a repository, at the default branch, a branch, a commit, a tag or a pull
request head. They are always registered; the capability filter only
applies to tools.
"""

import base64
import logging
import mimetypes
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import ExecutionError, MCPToolError, ValidationError
from .client import GitHubClient
from .tools._github import json_field, repo_path

logger = logging.getLogger(__name__)

_VARIABLE = re.compile(r"\{(/?)(\w+)(\*?)\}")

# decoded and returned as text even though they are not text/*
_TEXT_MIME_TYPES = {
    "application/json",
    "application/xml",
    "application/javascript",
    "application/x-sh",
    "application/toml",
    "application/yaml",
}


class ResourceError(MCPToolError):
    """GitHub answered, but the resource could not be read."""
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


@dataclass(frozen=True)
class ResourceContents:
    uri: str
    mime_type: str
    text: Optional[str] = None
    blob: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"uri": self.uri, "mimeType": self.mime_type}
        if self.blob is not None:
            payload["blob"] = self.blob
        else:
            payload["text"] = self.text
        return payload


def compile_uri_template(template: str) -> "re.Pattern[str]":
    """
    Turn a level-1 URI template into an anchored regex.

    ``{name}`` matches a single path segment, ``{/name*}`` an optional
    trailing path.
    """
    pattern = []
    pos = 0
    for match in _VARIABLE.finditer(template):
        pattern.append(re.escape(template[pos:match.start()]))
        slash, name, explode = match.groups()
        if slash and explode:
            pattern.append(f"(?:/(?P<{name}>.*))?")
        else:
            pattern.append(f"(?P<{name}>[^/]+)")
        pos = match.end()
    pattern.append(re.escape(template[pos:]))
    return re.compile("^" + "".join(pattern) + "$")


class ResourceTemplate:
    """A repository-content URI template bound to a ref strategy."""

    def __init__(self, uri_template: str, name: str, description: str, ref_kind: str):
        self.uri_template = uri_template
        self.name = name
        self.description = description
        self.ref_kind = ref_kind
        self._pattern = compile_uri_template(uri_template)

    def match(self, uri: str) -> Optional[Dict[str, str]]:
        m = self._pattern.match(uri)
        if m is None:
            return None
        return {k: v for k, v in m.groupdict().items() if v is not None}

    def to_dict(self) -> Dict[str, str]:
        return {
            "uriTemplate": self.uri_template,
            "name": self.name,
            "description": self.description,
        }

    async def read(self, client: GitHubClient, uri: str) -> List[ResourceContents]:
        variables = self.match(uri)
        if variables is None:
            raise ValidationError(f"uri {uri} does not match {self.uri_template}")

        owner = variables["owner"]
        repo = variables["repo"]
        path = variables.get("path", "")
        ref = await self._resolve_ref(client, owner, repo, variables)

        response = await client.get(
            repo_path(owner, repo, "contents", path),
            params={"ref": ref},
        )
        if response.status_code != 200:
            raise ResourceError(
                f"failed to get contents of {uri}: {response.text}",
                status_code=response.status_code,
            )

        data = response.json()
        if isinstance(data, list):
            return [
                ResourceContents(
                    uri=entry.get("html_url") or f"{uri.rstrip('/')}/{entry.get('name', '')}",
                    mime_type="text/directory",
                    text=entry.get("name", ""),
                )
                for entry in data
                if isinstance(entry, dict)
            ]
        if not isinstance(data, dict):
            raise ResourceError(f"unexpected contents response for {uri}", status_code=response.status_code)
        return [_file_contents(uri, path, data)]

    async def _resolve_ref(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        variables: Dict[str, str],
    ) -> Optional[str]:
        if self.ref_kind == "branch":
            return f"refs/heads/{variables['branch']}"
        if self.ref_kind == "sha":
            return variables["sha"]
        if self.ref_kind == "tag":
            return f"refs/tags/{variables['tag']}"
        if self.ref_kind == "pull":
            pr_number = variables["prNumber"]
            if not pr_number.isdigit():
                raise ValidationError(f"invalid pull request number: {pr_number}")
            response = await client.get(f"{repo_path(owner, repo)}/pulls/{pr_number}")
            if response.status_code != 200:
                raise ResourceError(
                    f"failed to get pull request: {response.text}",
                    status_code=response.status_code,
                )
            sha = json_field(response, "head", "sha")
            if not isinstance(sha, str) or not sha:
                raise ExecutionError("pull request response has no head sha")
            return sha
        return None


def _file_contents(uri: str, path: str, data: Dict[str, Any]) -> ResourceContents:
    if data.get("type") != "file":
        raise ResourceError(f"unsupported content type at {uri}: {data.get('type')}")

    try:
        raw = base64.b64decode(data.get("content") or "")
    except ValueError as e:
        raise ResourceError(f"undecodable content at {uri}: {e}")
    mime_type, _ = mimetypes.guess_type(path)

    if mime_type is None:
        try:
            return ResourceContents(uri=uri, mime_type="text/plain", text=raw.decode("utf-8"))
        except UnicodeDecodeError:
            return ResourceContents(
                uri=uri,
                mime_type="application/octet-stream",
                blob=base64.b64encode(raw).decode("ascii"),
            )

    if mime_type.startswith("text/") or mime_type in _TEXT_MIME_TYPES:
        return ResourceContents(uri=uri, mime_type=mime_type, text=raw.decode("utf-8", errors="replace"))
    return ResourceContents(uri=uri, mime_type=mime_type, blob=base64.b64encode(raw).decode("ascii"))


def repository_resource_templates() -> List[ResourceTemplate]:
    return [
        ResourceTemplate(
            "repo://{owner}/{repo}/contents{/path*}",
            "Repository Content",
            "Contents of a file or directory at the default branch",
            ref_kind="default",
        ),
        ResourceTemplate(
            "repo://{owner}/{repo}/refs/heads/{branch}/contents{/path*}",
            "Repository Content for specific branch",
            "Contents of a file or directory at a branch",
            ref_kind="branch",
        ),
        ResourceTemplate(
            "repo://{owner}/{repo}/sha/{sha}/contents{/path*}",
            "Repository Content for specific commit",
            "Contents of a file or directory at a commit",
            ref_kind="sha",
        ),
        ResourceTemplate(
            "repo://{owner}/{repo}/refs/tags/{tag}/contents{/path*}",
            "Repository Content for specific tag",
            "Contents of a file or directory at a tag",
            ref_kind="tag",
        ),
        ResourceTemplate(
            "repo://{owner}/{repo}/refs/pull/{prNumber}/head/contents{/path*}",
            "Repository Content for specific pull request",
            "Contents of a file or directory at a pull request head",
            ref_kind="pull",
        ),
    ]
