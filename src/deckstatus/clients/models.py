"""Data models for the REST API clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class PullRequest:
    """An active Azure DevOps pull request."""

    id: int
    repository_id: str
    repository_name: str
    author_unique_name: str = ""
    author_display_name: str = ""
    is_draft: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequest:
        """Build from a `_apis/git/pullrequests` list entry."""
        repository = data.get("repository") or {}
        created_by = data.get("createdBy") or {}
        return cls(
            id=int(data["pullRequestId"]),
            repository_id=str(repository.get("id", "")),
            repository_name=str(repository.get("name", "")),
            author_unique_name=created_by.get("uniqueName") or "",
            author_display_name=created_by.get("displayName") or "",
            is_draft=bool(data.get("isDraft", False)),
        )


@dataclass
class Reviewer:
    """A reviewer on an Azure DevOps pull request.

    Attributes:
        vote: 0 means no vote yet; any other value means the user reviewed.
    """

    unique_name: str = ""
    display_name: str = ""
    vote: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Reviewer:
        """Build from a `reviewers` list entry."""
        return cls(
            unique_name=data.get("uniqueName") or "",
            display_name=data.get("displayName") or "",
            vote=int(data.get("vote") or 0),
        )


@dataclass
class WorkflowRun:
    """Latest GitHub Actions run of a workflow."""

    id: int
    status: str
    conclusion: str | None = None
    html_url: str = ""
