"""GitHubClient - GitHub Actions REST access."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from deckstatus.clients.exceptions import AvatarNotFoundError, GitHubError
from deckstatus.clients.models import WorkflowRun
from deckstatus.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("deckstatus.clients.github")


class GitHubClient:
    """Async client for the GitHub REST API, scoped to one owner.

    The token is optional; public repositories are readable without one.
    """

    def __init__(
        self,
        owner: str,
        token: str = "",
        base_url: str = "https://api.github.com",
        web_url: str = "https://github.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            owner: User or organization owning the repositories
            token: GitHub personal access token (optional)
            base_url: GitHub API base URL (for testing/enterprise)
            web_url: GitHub web URL used for browser links
            timeout: Per-request timeout in seconds
        """
        self.owner = owner
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.web_url = web_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
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
            raise GitHubError(f"GET {path} failed: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise GitHubError(f"GET {path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise GitHubError(f"GET {path} returned an unexpected payload")
        return data

    async def get_latest_run(self, repo: str, workflow: str, branch: str = "") -> WorkflowRun | None:
        """Get the most recent run of a workflow.

        Args:
            repo: Repository name (without owner)
            workflow: Workflow file name (e.g. "ci.yml") or numeric id
            branch: Optional branch filter

        Returns:
            The latest run, or None when the workflow has never run

        Raises:
            GitHubError: If the request fails
        """
        params: dict[str, Any] = {"per_page": 1}
        if branch:
            params["branch"] = branch

        data = await self._get_json(
            f"/repos/{self.owner}/{repo}/actions/workflows/{workflow}/runs", params
        )
        runs = data.get("workflow_runs") or []
        if not runs:
            return None

        run = runs[0]
        return WorkflowRun(
            id=int(run.get("id", 0)),
            status=run.get("status") or "",
            conclusion=run.get("conclusion"),
            html_url=run.get("html_url") or "",
        )

    async def get_workflow_status(self, repo: str, workflow: str, branch: str = "") -> str:
        """Get the raw status of a workflow's latest run.

        Completed runs report their conclusion (success, failure,
        cancelled, skipped); others report their status (in_progress,
        queued, waiting).

        Returns:
            Raw status string, "none" when the workflow has no runs

        Raises:
            GitHubError: If the request fails
        """
        run = await self.get_latest_run(repo, workflow, branch)
        if run is None:
            return "none"
        if run.status == "completed":
            return run.conclusion or "unknown"
        return run.status or "unknown"

    async def get_owner_avatar(self) -> bytes:
        """Download the owner's avatar image.

        Raises:
            AvatarNotFoundError: If the owner or the image is unavailable
        """
        try:
            user = await self._get_json(f"/users/{self.owner}")
        except GitHubError as e:
            raise AvatarNotFoundError(f"Owner {self.owner} not found") from e

        avatar_url = user.get("avatar_url")
        if not avatar_url or not isinstance(avatar_url, str):
            raise AvatarNotFoundError(f"Owner {self.owner} has no avatar")

        # Avatars are served from a CDN host; don't forward the token there.
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as cdn:
            response = await cdn.get(avatar_url)
        if response.status_code != 200:
            raise AvatarNotFoundError(f"Avatar download failed: {response.status_code}")
        return response.content

    def repo_url(self, repo: str) -> str:
        """Browser URL of a repository."""
        return f"{self.web_url}/{self.owner}/{repo}"

    def workflow_url(self, repo: str, workflow: str, branch: str = "") -> str:
        """Browser URL of a workflow's run list, optionally filtered by branch."""
        url = f"{self.web_url}/{self.owner}/{repo}/actions/workflows/{workflow}"
        if branch:
            url += f"?query={quote(f'branch:{branch}')}"
        return url
