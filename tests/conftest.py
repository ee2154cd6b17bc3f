"""
Shared fixtures: a fake GitHub API served through httpx.MockTransport.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from github_mcp.client import GitHubClient

TEST_API_URL = "https://api.github.test"


class FakeGitHub:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Tuple[int, Any, Optional[str]]] = {}

    def route(self, method: str, path: str, status: int = 200, body: Any = None, text: str = None):
        self.routes[(method, path)] = (status, body, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})

        status, body, text = self.routes[key]
        if text is not None:
            return httpx.Response(status, text=text)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def client(self) -> GitHubClient:
        return GitHubClient(
            token="test-token",
            base_url=TEST_API_URL,
            transport=httpx.MockTransport(self.handler),
        )

    def tool(self, tool_cls):
        return tool_cls(client_factory=self.client)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()
