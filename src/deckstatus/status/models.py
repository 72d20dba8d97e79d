"""Data models for status aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SourceKind(str, Enum):
    """Platform a status string was fetched from."""

    AZURE_PIPELINE = "azure_pipeline"
    GITHUB_WORKFLOW = "github_workflow"


class StatusTier(str, Enum):
    """Normalized status tiers shared by both platforms."""

    FAILED = "failed"
    DEGRADED = "degraded"
    INACTIVE = "inactive"  # canceled, skipped or unset
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    UNKNOWN = "unknown"


class SlotPosition(str, Enum):
    """Indicator slot along the bottom edge of a key image."""

    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


@dataclass(frozen=True)
class Target:
    """One monitored pipeline or workflow configured on a button.

    Attributes:
        id: Azure pipeline definition id, or "owner/repo/workflow" for GitHub.
        position: Index in configuration order (0, 1 or 2).
        branch: Optional branch filter.
        repo: GitHub repository name (GitHub targets only).
        workflow: GitHub workflow file name or id (GitHub targets only).
    """

    id: str
    position: int
    branch: str = ""
    repo: str = ""
    workflow: str = ""


@dataclass(frozen=True)
class NormalizedStatus:
    """A raw platform status reduced to a tier, rank, color and symbol.

    Lower priority means more urgent.
    """

    raw: str
    tier: StatusTier
    priority: int
    color: str
    symbol: str


@dataclass(frozen=True)
class RenderSlot:
    """One indicator on the key image."""

    position: SlotPosition
    color: str
    x: float
    y: float
    size: int


@dataclass
class RenderPlan:
    """Everything the display glue needs after a refresh cycle.

    Attributes:
        slots: Indicators in configuration order.
        statuses: Normalized statuses in configuration order.
        priority_target: Target opened when the button is activated.
        symbol_line: Fallback title, one symbol per status.
    """

    slots: list[RenderSlot] = field(default_factory=list)
    statuses: list[NormalizedStatus] = field(default_factory=list)
    priority_target: Target | None = None
    symbol_line: str = ""
