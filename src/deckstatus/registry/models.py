"""Data models for the button registry."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from deckstatus.clients.models import PullRequest
from deckstatus.status.models import NormalizedStatus, RenderPlan


@dataclass
class Button:
    """Everything remembered about one attached button.

    Attributes:
        context: Device-assigned handle identifying the key.
        action: Action kind (e.g. "azure.pipelinestatus").
        settings: Parsed settings dataclass for the action.
        statuses: Normalized statuses from the latest refresh.
        last_plan: RenderPlan from the latest refresh.
        pull_requests: Filtered PRs from the latest PR count refresh.
        refreshed_at: When the latest status refresh completed.
        timer: Periodic refresh task.
        refresh_task: Refresh currently in flight, if any.
    """

    context: str
    action: str
    settings: Any
    statuses: list[NormalizedStatus] = field(default_factory=list)
    last_plan: RenderPlan | None = None
    pull_requests: list[PullRequest] = field(default_factory=list)
    refreshed_at: datetime | None = None
    timer: asyncio.Task[None] | None = field(default=None, repr=False)
    refresh_task: asyncio.Task[None] | None = field(default=None, repr=False)

    @property
    def refreshing(self) -> bool:
        return self.refresh_task is not None and not self.refresh_task.done()
