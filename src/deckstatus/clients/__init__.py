"""REST API clients for Azure DevOps and GitHub."""

from deckstatus.clients.azure import AzureDevOpsClient
from deckstatus.clients.exceptions import (
    AvatarNotFoundError,
    AzureDevOpsError,
    ClientError,
    GitHubError,
)
from deckstatus.clients.github import GitHubClient
from deckstatus.clients.models import PullRequest, Reviewer, WorkflowRun

__all__ = [
    "AvatarNotFoundError",
    "AzureDevOpsClient",
    "AzureDevOpsError",
    "ClientError",
    "GitHubClient",
    "GitHubError",
    "PullRequest",
    "Reviewer",
    "WorkflowRun",
]
