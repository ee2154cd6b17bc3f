"""
Search Tools

Repository, code and user search. Results are sanitized before they are
returned: API URLs are dropped and users are reduced to identity cards.
"""

from typing import Any, Dict, List, Optional

from ..base import ToolParameter
from ..client import TEXT_MATCH_MEDIA_TYPE, GitHubTool
from ..params import Pagination
from ..sanitize import (
    clean_code_search_result,
    clean_repository_search_result,
    minimal_search_users_result,
)

ORDER_VALUES = ["asc", "desc"]
USER_SORT_VALUES = ["followers", "repositories", "joined"]


def _order_parameter() -> ToolParameter:
    return ToolParameter(
        name="order",
        type="string",
        description="Sort order",
        required=False,
        enum=ORDER_VALUES,
    )


def _search_query(
    q: str,
    pagination: Pagination,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"q": q}
    if sort:
        params["sort"] = sort
    if order:
        params["order"] = order
    params.update(pagination.as_query())
    return params


class SearchRepositoriesTool(GitHubTool):
    """Search for repositories."""

    paginated = True

    @property
    def name(self) -> str:
        return "search_repositories"

    @property
    def description(self) -> str:
        return "Search for GitHub repositories"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(name="query", type="string", description="Search query"),
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(self, query: str, pagination: Pagination) -> Dict[str, Any]:
        async with self.client() as gh:
            result = await gh.get_json(
                "/search/repositories",
                action="search repositories",
                params=_search_query(query, pagination),
            )
        return clean_repository_search_result(result)


class SearchCodeTool(GitHubTool):
    """Search code across repositories, with text-match fragments."""

    paginated = True

    @property
    def name(self) -> str:
        return "search_code"

    @property
    def description(self) -> str:
        return "Search for code across GitHub repositories"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="q",
                type="string",
                description="Search query using GitHub code search syntax",
            ),
            ToolParameter(
                name="sort",
                type="string",
                description="Sort field ('indexed' only)",
                required=False,
            ),
            _order_parameter(),
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(
        self,
        q: str,
        pagination: Pagination,
        sort: str = "",
        order: str = "",
    ) -> Dict[str, Any]:
        async with self.client() as gh:
            result = await gh.get_json(
                "/search/code",
                action="search code",
                params=_search_query(q, pagination, sort, order),
                headers={"Accept": TEXT_MATCH_MEDIA_TYPE},
            )
        return clean_code_search_result(result)


class SearchUsersTool(GitHubTool):
    """Search for user accounts; organizations are excluded."""

    paginated = True

    @property
    def name(self) -> str:
        return "search_users"

    @property
    def description(self) -> str:
        return "Search for GitHub users"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="q",
                type="string",
                description="Search query using GitHub users search syntax",
            ),
            ToolParameter(
                name="sort",
                type="string",
                description="Sort field by category",
                required=False,
                enum=USER_SORT_VALUES,
            ),
            _order_parameter(),
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(
        self,
        q: str,
        pagination: Pagination,
        sort: str = "",
        order: str = "",
    ) -> Dict[str, Any]:
        async with self.client() as gh:
            result = await gh.get_json(
                "/search/users",
                action="search users",
                params=_search_query(f"type:user {q}", pagination, sort, order),
            )
        return minimal_search_users_result(result)
