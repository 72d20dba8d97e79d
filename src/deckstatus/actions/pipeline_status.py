"""Azure Pipelines status action."""

from __future__ import annotations

from deckstatus.actions.base import StatusAction
from deckstatus.actions.models import PipelineStatusSettings
from deckstatus.clients import AzureDevOpsClient
from deckstatus.status import SourceKind, Target


class PipelineStatusAction(StatusAction):
    """Shows the latest build of up to three Azure pipelines.

    A key release opens the pipeline with the most urgent status.
    """

    kind = "azure.pipelinestatus"
    settings_type = PipelineStatusSettings
    source_kind = SourceKind.AZURE_PIPELINE
    unconfigured_title = "Build\n--"
    error_title = "Build\nErr"

    def create_client(self, settings: PipelineStatusSettings) -> AzureDevOpsClient:
        timeout = self.fetch_timeout if self.fetch_timeout is not None else 30.0
        return AzureDevOpsClient(
            organization=settings.organization,
            project=settings.project,
            token=settings.token,
            timeout=timeout,
        )

    async def fetch_status(self, client: AzureDevOpsClient, target: Target) -> str:
        return await client.get_pipeline_status(target.id, target.branch)

    async def fetch_avatar(self, client: AzureDevOpsClient) -> bytes:
        return await client.get_project_avatar()

    def target_url(self, settings: PipelineStatusSettings, target: Target) -> str:
        return self.create_client(settings).pipeline_url(target.id)
