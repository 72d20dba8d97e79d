"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from deckstatus.registry import Button
from deckstatus.status import NormalizedStatus, RenderPlan, RenderSlot, Target

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Request models


class ButtonAttach(BaseModel):
    """Request model for attaching a button."""

    action: str = Field(..., min_length=1, max_length=255)
    settings: dict[str, Any] = Field(default_factory=dict)


class SettingsUpdate(BaseModel):
    """Request model for replacing a button's settings."""

    settings: dict[str, Any] = Field(default_factory=dict)


# Render plan models


class StatusResponse(BaseModel):
    """Response model for a normalized status."""

    raw: str
    tier: str
    priority: int
    color: str
    symbol: str


class SlotResponse(BaseModel):
    """Response model for one indicator slot."""

    position: str
    color: str
    x: float
    y: float
    size: int


class TargetResponse(BaseModel):
    """Response model for a monitored target."""

    id: str
    position: int
    branch: str
    repo: str
    workflow: str


class RenderPlanResponse(BaseModel):
    """Response model for the latest render plan."""

    slots: list[SlotResponse]
    statuses: list[StatusResponse]
    priority_target: TargetResponse | None
    symbol_line: str


def status_to_response(status: NormalizedStatus) -> StatusResponse:
    """Convert a NormalizedStatus to StatusResponse."""
    return StatusResponse(
        raw=status.raw,
        tier=status.tier.value,
        priority=status.priority,
        color=status.color,
        symbol=status.symbol,
    )


def slot_to_response(slot: RenderSlot) -> SlotResponse:
    """Convert a RenderSlot to SlotResponse."""
    return SlotResponse(
        position=slot.position.value,
        color=slot.color,
        x=slot.x,
        y=slot.y,
        size=slot.size,
    )


def target_to_response(target: Target) -> TargetResponse:
    """Convert a Target to TargetResponse."""
    return TargetResponse(
        id=target.id,
        position=target.position,
        branch=target.branch,
        repo=target.repo,
        workflow=target.workflow,
    )


def plan_to_response(plan: RenderPlan) -> RenderPlanResponse:
    """Convert a RenderPlan to RenderPlanResponse."""
    return RenderPlanResponse(
        slots=[slot_to_response(s) for s in plan.slots],
        statuses=[status_to_response(s) for s in plan.statuses],
        priority_target=(
            target_to_response(plan.priority_target) if plan.priority_target else None
        ),
        symbol_line=plan.symbol_line,
    )


# Button models


class ButtonResponse(BaseModel):
    """Response model for an attached button."""

    context: str
    action: str
    settings: dict[str, Any]
    refreshing: bool
    refreshed_at: datetime | None
    plan: RenderPlanResponse | None
    pull_request_count: int


def button_to_response(button: Button) -> ButtonResponse:
    """Convert a Button to ButtonResponse. The token is masked."""
    return ButtonResponse(
        context=button.context,
        action=button.action,
        settings=button.settings.to_dict(),
        refreshing=button.refreshing,
        refreshed_at=button.refreshed_at,
        plan=plan_to_response(button.last_plan) if button.last_plan else None,
        pull_request_count=len(button.pull_requests),
    )


class KeyUpResponse(BaseModel):
    """Response model for a key release."""

    url: str | None
