"""
GitHub REST client used by the tools.

A thin wrapper around httpx.AsyncClient: it sets the auth and API version
headers and turns transport failures and unexpected status codes into
UpstreamError so tools report them uniformly.
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import httpx

from . import config
from .base import MCPTool, ToolParameter
from .errors import UpstreamError

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github+json"
TEXT_MATCH_MEDIA_TYPE = "application/vnd.github.text-match+json"


def segment(value: Any) -> str:
    """Quote a single URL path segment (owner, repo, tag...)."""
    return quote(str(value), safe="")


class GitHubClient:
    """Async GitHub API client. Use as `async with GitHubClient() as gh:`."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        token = config.GITHUB_TOKEN if token is None else token
        headers = {
            "Accept": JSON_MEDIA_TYPE,
            "X-GitHub-Api-Version": config.GITHUB_API_VERSION,
            "User-Agent": "github-mcp-tools",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=base_url or config.GITHUB_API_URL,
            headers=headers,
            timeout=timeout or config.GITHUB_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        expected_status: int = 200,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send a request and return the response.

        `action` names the operation for error messages
        ("failed to <action>: ..."). Any status other than
        `expected_status` raises UpstreamError carrying the response body.
        """
        logger.debug(f"{method} {path} params={params}")
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException:
            raise UpstreamError(f"failed to {action}: request timed out")
        except httpx.RequestError as e:
            raise UpstreamError(f"failed to {action}: {e}")

        if response.status_code != expected_status:
            body = response.text
            raise UpstreamError(
                f"failed to {action}: {body}",
                status_code=response.status_code,
                body=body,
            )
        return response

    async def request_json(self, method: str, path: str, *, action: str, **kwargs) -> Any:
        """Like `request`, but returns the decoded JSON body."""
        response = await self.request(method, path, action=action, **kwargs)
        try:
            return response.json()
        except ValueError:
            raise UpstreamError(
                f"failed to {action}: invalid JSON response",
                status_code=response.status_code,
                body=response.text,
            )

    async def get_json(self, path: str, *, action: str, **kwargs) -> Any:
        return await self.request_json("GET", path, action=action, **kwargs)


def repository_parameters() -> List[ToolParameter]:
    return [
        ToolParameter(name="owner", type="string", description="Repository owner"),
        ToolParameter(name="repo", type="string", description="Repository name"),
    ]


class GitHubTool(MCPTool):
    """
    Base for tools backed by the GitHub API.

    `client_factory` builds a fresh GitHubClient per call; tests pass one
    that wires in an httpx.MockTransport.
    """

    def __init__(self, client_factory: Optional[Callable[[], GitHubClient]] = None):
        self._client_factory = client_factory or GitHubClient

    def client(self) -> GitHubClient:
        return self._client_factory()

    @staticmethod
    def repo_path(owner: str, repo: str) -> str:
        return f"/repos/{segment(owner)}/{segment(repo)}"
