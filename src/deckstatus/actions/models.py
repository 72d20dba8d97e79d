"""Settings models for button actions.

Settings arrive from the device bridge as loose key/value mappings (either
snake_case or the camelCase names the property inspectors use). Each action
declares a dataclass with defaults; `from_settings` merges the mapping over
those defaults.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, TypeVar

from deckstatus.status.models import Target

DEFAULT_REFRESH_MINUTES = 5
MIN_REFRESH_MINUTES = 1
MAX_REFRESH_MINUTES = 60

S = TypeVar("S", bound="ActionSettings")


def parse_refresh_interval(value: Any) -> int:
    """Parse a refresh interval in minutes, clamped to [1, 60].

    Missing or unparsable values fall back to 5 minutes.
    """
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = 0
    if minutes == 0:
        minutes = DEFAULT_REFRESH_MINUTES
    return min(MAX_REFRESH_MINUTES, max(MIN_REFRESH_MINUTES, minutes))


def _alias(name: str) -> dict[str, str]:
    return {"alias": name}


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, str):
        return str(value).strip()
    return value


@dataclass
class ActionSettings:
    """Base class for per-action settings."""

    refresh_interval: int = field(
        default=DEFAULT_REFRESH_MINUTES, metadata=_alias("refreshInterval")
    )

    @classmethod
    def from_settings(cls: type[S], raw: dict[str, Any] | None) -> S:
        """Merge a raw settings mapping over this class's defaults.

        Unknown keys are ignored; None values keep the default.
        """
        raw = raw or {}
        values: dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            alias = f.metadata.get("alias")
            if f.name in raw and raw[f.name] is not None:
                value = raw[f.name]
            elif alias and raw.get(alias) is not None:
                value = raw[alias]
            else:
                continue
            default = f.default if f.default is not dataclasses.MISSING else None
            values[f.name] = _coerce(value, default)
        settings = cls(**values)
        settings.refresh_interval = parse_refresh_interval(settings.refresh_interval)
        return settings

    @property
    def refresh_seconds(self) -> float:
        """Refresh interval in seconds."""
        return float(self.refresh_interval) * 60

    def to_dict(self) -> dict[str, Any]:
        """Settings as a plain mapping, token omitted."""
        data = dataclasses.asdict(self)
        if data.get("token"):
            data["token"] = "***"
        return data


@dataclass
class PipelineStatusSettings(ActionSettings):
    """Azure Pipelines status: up to three pipelines in one project."""

    organization: str = ""
    project: str = ""
    token: str = ""
    pipeline1: str = ""
    branch1: str = ""
    pipeline2: str = ""
    branch2: str = ""
    pipeline3: str = ""
    branch3: str = ""

    def targets(self) -> list[Target]:
        """Configured pipelines in slot order, empty slots skipped."""
        slots = [
            (self.pipeline1, self.branch1),
            (self.pipeline2, self.branch2),
            (self.pipeline3, self.branch3),
        ]
        targets: list[Target] = []
        for pipeline_id, branch in slots:
            if pipeline_id:
                targets.append(Target(id=pipeline_id, position=len(targets), branch=branch))
        return targets

    @property
    def is_configured(self) -> bool:
        return bool(self.organization and self.project and self.token and self.targets())


@dataclass
class WorkflowStatusSettings(ActionSettings):
    """GitHub Actions status: up to three workflows under one owner.

    The legacy single-workflow keys (repo, workflow, branch) fill slot 1
    when its numbered keys are empty.
    """

    owner: str = ""
    token: str = ""
    repo1: str = ""
    workflow1: str = ""
    branch1: str = ""
    repo2: str = ""
    workflow2: str = ""
    branch2: str = ""
    repo3: str = ""
    workflow3: str = ""
    branch3: str = ""
    repo: str = ""
    workflow: str = ""
    branch: str = ""

    def targets(self) -> list[Target]:
        """Configured workflows in slot order; a slot needs repo and workflow."""
        slots = [
            (self.repo1 or self.repo, self.workflow1 or self.workflow, self.branch1 or self.branch),
            (self.repo2, self.workflow2, self.branch2),
            (self.repo3, self.workflow3, self.branch3),
        ]
        targets: list[Target] = []
        for repo, workflow, branch in slots:
            if repo and workflow:
                targets.append(
                    Target(
                        id=f"{self.owner}/{repo}/{workflow}",
                        position=len(targets),
                        branch=branch,
                        repo=repo,
                        workflow=workflow,
                    )
                )
        return targets

    @property
    def is_configured(self) -> bool:
        return bool(self.owner and self.targets())


@dataclass
class PullRequestCountSettings(ActionSettings):
    """Azure Repos active pull request counter."""

    organization: str = ""
    project: str = ""
    token: str = ""
    exclude_users: str = field(default="", metadata=_alias("excludeUsers"))
    include_drafts: bool = field(default=False, metadata=_alias("includeDrafts"))

    def excluded_users(self) -> list[str]:
        """Comma-separated exclusions, trimmed and lowercased."""
        return [u.strip().lower() for u in self.exclude_users.split(",") if u.strip()]

    @property
    def is_configured(self) -> bool:
        return bool(self.organization and self.project and self.token)


@dataclass
class OpenRepoSettings(ActionSettings):
    """Open a GitHub repository in the browser."""

    owner: str = ""
    repo: str = ""