"""
Repository Contents Tool

Reads a file or lists a directory. File bodies are decoded to text when
possible; binary and oversized files come back in their original encoding.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..base import ToolParameter
from ..client import GitHubTool, repository_parameters
from ..sanitize import clean_repository_content, clean_repository_content_list


class GetFileContentsTool(GitHubTool):
    """Get the contents of a file or directory."""

    @property
    def name(self) -> str:
        return "get_file_contents"

    @property
    def description(self) -> str:
        return "Get the contents of a file or directory from a GitHub repository"

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [
            ToolParameter(
                name="path",
                type="string",
                description="Path to file/directory (directories must end with a slash '/')",
                required=False,
                default="",
            ),
            ToolParameter(
                name="ref",
                type="string",
                description="Git ref (branch, tag or commit SHA); defaults to the repository's default branch",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "contents"

    async def execute(self, owner: str, repo: str, path: str = "", ref: str = "") -> Any:
        url = f"{self.repo_path(owner, repo)}/contents/{quote(path.strip('/'), safe='/')}"
        params: Optional[Dict[str, Any]] = {"ref": ref} if ref else None

        async with self.client() as gh:
            result = await gh.get_json(url, action="get file contents", params=params)

        if isinstance(result, list):
            return clean_repository_content_list(result)
        return clean_repository_content(result)
