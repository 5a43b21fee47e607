"""
GitHub REST client.

Thin async wrapper around httpx. It never interprets status codes: a
completed exchange always comes back as a GitHubResponse and the tool
decides what counts as success. Only failures to complete the exchange
raise (as ExecutionError).
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from . import __version__
from .base import ExecutionError
from .config import DEFAULT_API_URL

logger = logging.getLogger(__name__)


class GitHubResponse:
    def __init__(self, status_code: int, content: bytes, headers: Optional[Mapping[str, str]] = None):
        self.status_code = status_code
        self.content = content
        self.headers = dict(headers or {})

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def is_accepted(self) -> bool:
        """202: GitHub queued the work and will finish it asynchronously."""
        return self.status_code == 202

    def json(self) -> Any:
        if not self.content:
            return None
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise ExecutionError(f"failed to decode GitHub response: {e}") from e

    def __repr__(self) -> str:
        return f"GitHubResponse(status_code={self.status_code})"


class GitHubClient:
    def __init__(
        self,
        token: str = "",
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"github-mcp-server/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> GitHubResponse:
        # GitHub treats empty query values as filters, drop them
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}

        logger.debug(f"GitHub {method} {path} params={params}")
        try:
            response = await self._http.request(method, path.lstrip("/"), params=params, json=json)
        except httpx.HTTPError as e:
            raise ExecutionError(f"GitHub request {method} {path} failed: {e}") from e

        return GitHubResponse(response.status_code, response.content, response.headers)

    async def get(self, path: str, **kwargs) -> GitHubResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> GitHubResponse:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> GitHubResponse:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> GitHubResponse:
        return await self.request("PATCH", path, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
