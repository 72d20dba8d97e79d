"""Status aggregation - normalizes, prioritizes and lays out target statuses."""

from deckstatus.status.aggregator import (
    aggregate,
    build_render_plan,
    gather_statuses,
    select_priority_target,
    symbol_line,
)
from deckstatus.status.models import (
    NormalizedStatus,
    RenderPlan,
    RenderSlot,
    SlotPosition,
    SourceKind,
    StatusTier,
    Target,
)
from deckstatus.status.normalizer import normalize

__all__ = [
    "NormalizedStatus",
    "RenderPlan",
    "RenderSlot",
    "SlotPosition",
    "SourceKind",
    "StatusTier",
    "Target",
    "aggregate",
    "build_render_plan",
    "gather_statuses",
    "normalize",
    "select_priority_target",
    "symbol_line",
]
