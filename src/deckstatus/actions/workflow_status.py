"""GitHub Actions status action."""

from __future__ import annotations

from deckstatus.actions.base import StatusAction
from deckstatus.actions.models import WorkflowStatusSettings
from deckstatus.clients import GitHubClient
from deckstatus.status import SourceKind, Target


class WorkflowStatusAction(StatusAction):
    """Shows the latest run of up to three GitHub workflows."""

    kind = "github.actionstatus"
    settings_type = WorkflowStatusSettings
    source_kind = SourceKind.GITHUB_WORKFLOW
    unconfigured_title = "Actions\n--"
    error_title = "Actions\nErr"

    def create_client(self, settings: WorkflowStatusSettings) -> GitHubClient:
        timeout = self.fetch_timeout if self.fetch_timeout is not None else 30.0
        return GitHubClient(owner=settings.owner, token=settings.token, timeout=timeout)

    async def fetch_status(self, client: GitHubClient, target: Target) -> str:
        return await client.get_workflow_status(target.repo, target.workflow, target.branch)

    async def fetch_avatar(self, client: GitHubClient) -> bytes:
        return await client.get_owner_avatar()

    def target_url(self, settings: WorkflowStatusSettings, target: Target) -> str:
        client = self.create_client(settings)
        return client.workflow_url(target.repo, target.workflow, target.branch)
