"""AzureDevOpsClient - Azure Pipelines and Azure Repos REST access."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from deckstatus.clients.exceptions import AvatarNotFoundError, AzureDevOpsError
from deckstatus.clients.models import PullRequest, Reviewer
from deckstatus.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("deckstatus.clients.azure")

API_VERSION = "7.0"
PROJECT_API_VERSION = "7.1"


class AzureDevOpsClient:
    """Async client for one Azure DevOps organization and project.

    Authenticates with a personal access token sent as the Basic auth
    password.
    """

    def __init__(
        self,
        organization: str,
        project: str,
        token: str,
        base_url: str = "https://dev.azure.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            organization: Azure DevOps organization name
            project: Project name or id
            token: Personal access token
            base_url: Azure DevOps base URL (for testing/on-prem)
            timeout: Per-request timeout in seconds
        """
        self.organization = organization
        self.project = project
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            credentials = base64.b64encode(f":{self.token}".encode()).decode()
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/{self.organization}",
                headers={
                    "Authorization": f"Basic {credentials}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = await self.client.get(path, params=params)
        if response.status_code != 200:
            logger.warning(
                "GET %s failed: %s %s",
                path,
                response.status_code,
                sanitize_for_log(truncate_output(response.text)),
            )
            raise AzureDevOpsError(f"GET {path} failed: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise AzureDevOpsError(f"GET {path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise AzureDevOpsError(f"GET {path} returned an unexpected payload")
        return data

    async def get_pipeline_status(self, pipeline_id: str, branch: str = "") -> str:
        """Get the raw status of a pipeline's latest build.

        Completed builds report their result (succeeded, failed, canceled,
        partiallySucceeded); others report their status (inProgress,
        notStarted).

        Args:
            pipeline_id: Build definition id
            branch: Optional branch name (without refs/heads/)

        Returns:
            Raw status string, "none" when the pipeline has no builds

        Raises:
            AzureDevOpsError: If the request fails
        """
        params: dict[str, Any] = {
            "definitions": pipeline_id,
            "$top": 1,
            "api-version": API_VERSION,
        }
        if branch:
            params["branchName"] = f"refs/heads/{branch}"

        data = await self._get_json(f"/{self.project}/_apis/build/builds", params)
        builds = data.get("value") or []
        if not builds:
            return "none"

        latest = builds[0]
        if latest.get("status") == "completed":
            return latest.get("result") or "unknown"
        return latest.get("status") or "unknown"

    async def list_active_pull_requests(self) -> list[PullRequest]:
        """List active pull requests across the project's repositories.

        Raises:
            AzureDevOpsError: If the request fails
        """
        data = await self._get_json(
            f"/{self.project}/_apis/git/pullrequests",
            {"searchCriteria.status": "active", "api-version": API_VERSION},
        )
        try:
            pull_requests = [PullRequest.from_api(item) for item in data.get("value") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise AzureDevOpsError(f"Malformed pull request list: {e!r}") from e
        logger.debug("Found %d active PR(s) in %s", len(pull_requests), self.project)
        return pull_requests

    async def list_reviewers(self, pull_request: PullRequest) -> list[Reviewer]:
        """List reviewers of a pull request.

        Raises:
            AzureDevOpsError: If the request fails
        """
        data = await self._get_json(
            f"/_apis/git/repositories/{pull_request.repository_id}"
            f"/pullRequests/{pull_request.id}/reviewers",
            {"api-version": API_VERSION},
        )
        try:
            return [Reviewer.from_api(item) for item in data.get("value") or []]
        except (TypeError, ValueError, AttributeError) as e:
            raise AzureDevOpsError(f"Malformed reviewer list: {e!r}") from e

    async def get_project_avatar(self) -> bytes:
        """Download the avatar of the project's default team.

        Raises:
            AvatarNotFoundError: If the project has no default team or avatar
        """
        try:
            project = await self._get_json(
                f"/_apis/projects/{self.project}", {"api-version": PROJECT_API_VERSION}
            )
        except AzureDevOpsError as e:
            raise AvatarNotFoundError(f"Project {self.project} not readable") from e

        default_team = project.get("defaultTeam")
        team_id = default_team.get("id") if isinstance(default_team, dict) else None
        if not team_id:
            raise AvatarNotFoundError(f"Project {self.project} has no default team")

        response = await self.client.get(f"/_apis/GraphProfile/MemberAvatars/{team_id}")
        if response.status_code != 200:
            raise AvatarNotFoundError(
                f"Avatar for team {team_id} unavailable: {response.status_code}"
            )
        return response.content

    def pipeline_url(self, pipeline_id: str | None = None) -> str:
        """Browser URL of the builds page, optionally for one pipeline."""
        url = f"{self.base_url}/{self.organization}/{self.project}/_build"
        if pipeline_id:
            url += f"?definitionId={pipeline_id}"
        return url

    def pull_requests_url(self, repository_name: str) -> str:
        """Browser URL of a repository's active pull requests."""
        return (
            f"{self.base_url}/{self.organization}/{self.project}"
            f"/_git/{repository_name}/pullrequests?_a=active"
        )
