"""
Release Tools

List, read, create, update and delete GitHub releases, and generate
release notes.
"""

import logging
from typing import Any, Dict, List

from ..base import ToolParameter
from ..client import GitHubTool, repository_parameters, segment
from ..params import Pagination, build_patch

logger = logging.getLogger(__name__)

MAKE_LATEST_VALUES = ["true", "false", "legacy"]


def _release_id_parameter() -> ToolParameter:
    return ToolParameter(
        name="release_id",
        type="integer",
        description="The unique identifier of the release",
    )


def _release_field_parameters(draft_description: str) -> List[ToolParameter]:
    """Optional release attributes shared by create and update."""
    return [
        ToolParameter(
            name="target_commitish",
            type="string",
            description="Specifies the commitish value that determines where the Git tag is created from",
            required=False,
        ),
        ToolParameter(
            name="name",
            type="string",
            description="The name of the release",
            required=False,
        ),
        ToolParameter(
            name="body",
            type="string",
            description="Text describing the contents of the tag",
            required=False,
        ),
        ToolParameter(
            name="draft",
            type="boolean",
            description=draft_description,
            required=False,
        ),
        ToolParameter(
            name="prerelease",
            type="boolean",
            description="true to identify the release as a prerelease, false to identify the release as a full release",
            required=False,
        ),
        ToolParameter(
            name="discussion_category_name",
            type="string",
            description="If specified, a discussion of the specified category is created and linked to the release",
            required=False,
        ),
        ToolParameter(
            name="make_latest",
            type="string",
            description="Specifies whether this release should be set as the latest release for the repository",
            required=False,
            enum=MAKE_LATEST_VALUES,
        ),
    ]


class _ReleaseWriteTool(GitHubTool):
    """
    Shared validation for tools that send a release body.

    Required parameters are passed to `execute` by name; every optional
    parameter the caller actually supplied is collected into `patch`.
    """

    @property
    def category(self) -> str:
        return "releases"

    @property
    def read_only(self) -> bool:
        return False

    def validate(self, **kwargs) -> Dict[str, Any]:
        validated = super().validate(**kwargs)
        optional = {p.name: p.kind for p in self.parameters if not p.required}
        # an empty enum value was dropped by validation and stays out of the patch
        supplied = {key: value for key, value in kwargs.items() if key in validated}

        result = {p.name: validated[p.name] for p in self.parameters if p.required}
        result["patch"] = build_patch(supplied, optional)
        return result


class ListReleasesTool(GitHubTool):
    """List releases for a repository."""

    paginated = True

    @property
    def name(self) -> str:
        return "list_releases"

    @property
    def description(self) -> str:
        return "List releases for a GitHub repository."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters()

    @property
    def category(self) -> str:
        return "releases"

    async def execute(self, owner: str, repo: str, pagination: Pagination) -> Any:
        async with self.client() as gh:
            return await gh.get_json(
                f"{self.repo_path(owner, repo)}/releases",
                action="list releases",
                params=pagination.as_query(),
            )


class CreateReleaseTool(_ReleaseWriteTool):
    """Create a new release. Only the supplied optional fields are sent."""

    @property
    def name(self) -> str:
        return "create_release"

    @property
    def description(self) -> str:
        return "Create a new release in a GitHub repository."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [
            ToolParameter(
                name="tag_name",
                type="string",
                description="The name of the tag",
            ),
        ] + _release_field_parameters(
            "true to create a draft (unpublished) release, false to create a published one"
        ) + [
            ToolParameter(
                name="generate_release_notes",
                type="boolean",
                description="Whether to automatically generate the name and body for this release",
                required=False,
            ),
        ]

    async def execute(self, owner: str, repo: str, tag_name: str, patch: Dict[str, Any]) -> Any:
        payload = {"tag_name": tag_name}
        payload.update(patch)

        logger.info(f"Creating release {tag_name} in {owner}/{repo}")
        async with self.client() as gh:
            return await gh.request_json(
                "POST",
                f"{self.repo_path(owner, repo)}/releases",
                action="create release",
                expected_status=201,
                json=payload,
            )


class GetLatestReleaseTool(GitHubTool):
    """Get the latest published full release."""

    @property
    def name(self) -> str:
        return "get_latest_release"

    @property
    def description(self) -> str:
        return "Get the latest published full release for the repository."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters()

    @property
    def category(self) -> str:
        return "releases"

    async def execute(self, owner: str, repo: str) -> Any:
        async with self.client() as gh:
            return await gh.get_json(
                f"{self.repo_path(owner, repo)}/releases/latest",
                action="get latest release",
            )


class GetReleaseByTagTool(GitHubTool):
    """Get a published release by its tag name."""

    @property
    def name(self) -> str:
        return "get_release_by_tag"

    @property
    def description(self) -> str:
        return "Get a published release with the specified tag."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [
            ToolParameter(name="tag", type="string", description="Tag name"),
        ]

    @property
    def category(self) -> str:
        return "releases"

    async def execute(self, owner: str, repo: str, tag: str) -> Any:
        async with self.client() as gh:
            return await gh.get_json(
                f"{self.repo_path(owner, repo)}/releases/tags/{segment(tag)}",
                action="get release by tag",
            )


class GetReleaseTool(GitHubTool):
    """Get a release by its numeric ID."""

    @property
    def name(self) -> str:
        return "get_release"

    @property
    def description(self) -> str:
        return "Get a specific release by its ID."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [_release_id_parameter()]

    @property
    def category(self) -> str:
        return "releases"

    async def execute(self, owner: str, repo: str, release_id: int) -> Any:
        async with self.client() as gh:
            return await gh.get_json(
                f"{self.repo_path(owner, repo)}/releases/{release_id}",
                action="get release",
            )


class UpdateReleaseTool(_ReleaseWriteTool):
    """
    Update an existing release.

    Sends a sparse patch: fields the caller leaves out keep their current
    value on GitHub, while explicit `false` / `""` values are applied.
    """

    @property
    def name(self) -> str:
        return "update_release"

    @property
    def description(self) -> str:
        return "Update an existing release in a GitHub repository."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [
            _release_id_parameter(),
            ToolParameter(
                name="tag_name",
                type="string",
                description="The name of the tag",
                required=False,
            ),
        ] + _release_field_parameters(
            "true makes the release a draft, and false publishes the release"
        )

    async def execute(self, owner: str, repo: str, release_id: int, patch: Dict[str, Any]) -> Any:
        logger.info(f"Updating release {release_id} in {owner}/{repo}: {sorted(patch)}")
        async with self.client() as gh:
            return await gh.request_json(
                "PATCH",
                f"{self.repo_path(owner, repo)}/releases/{release_id}",
                action="update release",
                json=patch,
            )


class DeleteReleaseTool(GitHubTool):
    """Delete a release."""

    @property
    def name(self) -> str:
        return "delete_release"

    @property
    def description(self) -> str:
        return "Delete a release from a GitHub repository."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [_release_id_parameter()]

    @property
    def category(self) -> str:
        return "releases"

    @property
    def read_only(self) -> bool:
        return False

    async def execute(self, owner: str, repo: str, release_id: int) -> str:
        logger.info(f"Deleting release {release_id} in {owner}/{repo}")
        async with self.client() as gh:
            await gh.request(
                "DELETE",
                f"{self.repo_path(owner, repo)}/releases/{release_id}",
                action="delete release",
                expected_status=204,
            )
        return "Release deleted successfully"


class GenerateReleaseNotesTool(_ReleaseWriteTool):
    """Generate release notes content without creating a release."""

    @property
    def name(self) -> str:
        return "generate_release_notes"

    @property
    def description(self) -> str:
        return "Generate release notes content for a release."

    @property
    def parameters(self) -> List[ToolParameter]:
        return repository_parameters() + [
            ToolParameter(
                name="tag_name",
                type="string",
                description="The tag name for the release",
            ),
            ToolParameter(
                name="target_commitish",
                type="string",
                description="Specifies the commitish value that will be the target for the release's tag",
                required=False,
            ),
            ToolParameter(
                name="previous_tag_name",
                type="string",
                description="The name of the previous tag to use as the starting point for the release notes",
                required=False,
            ),
        ]

    @property
    def read_only(self) -> bool:
        return True

    async def execute(self, owner: str, repo: str, tag_name: str, patch: Dict[str, Any]) -> Any:
        payload = {"tag_name": tag_name}
        payload.update(patch)

        async with self.client() as gh:
            return await gh.request_json(
                "POST",
                f"{self.repo_path(owner, repo)}/releases/generate-notes",
                action="generate release notes",
                json=payload,
            )
