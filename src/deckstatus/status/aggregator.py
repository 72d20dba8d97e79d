"""Status aggregator - merges per-target statuses into one render plan."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from deckstatus.status.models import (
    NormalizedStatus,
    RenderPlan,
    RenderSlot,
    SlotPosition,
    SourceKind,
    Target,
)
from deckstatus.status.normalizer import normalize

logger = logging.getLogger("deckstatus.status")

# Key image geometry
IMAGE_SIZE = 144
INDICATOR_SIZE = 32
INDICATOR_PADDING = 6

MAX_TARGETS = 3

# Raw status recorded for a fetch that raised or timed out
FAILED_FETCH_STATUS = "unknown"

_LAYOUTS: dict[int, tuple[SlotPosition, ...]] = {
    1: (SlotPosition.BOTTOM_RIGHT,),
    2: (SlotPosition.BOTTOM_LEFT, SlotPosition.BOTTOM_RIGHT),
    3: (SlotPosition.BOTTOM_LEFT, SlotPosition.BOTTOM_CENTER, SlotPosition.BOTTOM_RIGHT),
}

FetchStatus = Callable[[Target], Awaitable[str]]


def slot_coordinates(position: SlotPosition) -> tuple[float, float]:
    """Get the top-left pixel of an indicator slot."""
    y = IMAGE_SIZE - INDICATOR_SIZE - INDICATOR_PADDING
    if position is SlotPosition.BOTTOM_LEFT:
        return float(INDICATOR_PADDING), float(y)
    if position is SlotPosition.BOTTOM_CENTER:
        return (IMAGE_SIZE - INDICATOR_SIZE) / 2, float(y)
    return float(IMAGE_SIZE - INDICATOR_SIZE - INDICATOR_PADDING), float(y)


def select_priority_target(
    targets: Sequence[Target], statuses: Sequence[NormalizedStatus]
) -> Target:
    """Pick the target to open when the button is activated.

    The most urgent status wins; ties keep the earliest configured target.
    With no statuses yet (cold start) the first target is returned.

    Args:
        targets: Configured targets in configuration order.
        statuses: Normalized statuses in the same order.

    Returns:
        The selected target.

    Raises:
        ValueError: If no targets are configured.
    """
    if not targets:
        raise ValueError("Cannot select a priority target without targets")
    if not statuses:
        return targets[0]

    best_index = 0
    best_priority = statuses[0].priority
    for i in range(1, min(len(targets), len(statuses))):
        if statuses[i].priority < best_priority:
            best_priority = statuses[i].priority
            best_index = i
    return targets[best_index]


def build_render_plan(statuses: Sequence[NormalizedStatus], count: int) -> list[RenderSlot]:
    """Lay out one indicator per status in configuration order.

    Args:
        statuses: Normalized statuses in configuration order.
        count: Number of configured targets (1-3).

    Returns:
        Exactly `count` slots; slot i shows statuses[i].

    Raises:
        ValueError: If count is out of range or does not match statuses.
    """
    layout = _LAYOUTS.get(count)
    if layout is None:
        raise ValueError(f"Unsupported indicator count: {count}")
    if len(statuses) != count:
        raise ValueError(f"Expected {count} statuses, got {len(statuses)}")

    slots = []
    for position, status in zip(layout, statuses):
        x, y = slot_coordinates(position)
        slots.append(
            RenderSlot(position=position, color=status.color, x=x, y=y, size=INDICATOR_SIZE)
        )
    return slots


def symbol_line(statuses: Sequence[NormalizedStatus]) -> str:
    """Build the text-only fallback title."""
    return " ".join(status.symbol for status in statuses)


def aggregate(
    targets: Sequence[Target], raw_statuses: Sequence[str], source_kind: SourceKind
) -> RenderPlan:
    """Normalize one refresh cycle's raw statuses into a RenderPlan."""
    statuses = [normalize(raw, source_kind) for raw in raw_statuses]
    return RenderPlan(
        slots=build_render_plan(statuses, len(statuses)) if statuses else [],
        statuses=statuses,
        priority_target=select_priority_target(targets, statuses) if targets else None,
        symbol_line=symbol_line(statuses),
    )


async def _settle(fetch: FetchStatus, target: Target, timeout: float | None) -> str:
    try:
        if timeout is None:
            return await fetch(target)
        return await asyncio.wait_for(fetch(target), timeout=timeout)
    except TimeoutError:
        logger.warning("Status fetch for target %s timed out after %ss", target.id, timeout)
        return FAILED_FETCH_STATUS
    except Exception:
        logger.exception("Status fetch for target %s failed", target.id)
        return FAILED_FETCH_STATUS


async def gather_statuses(
    targets: Sequence[Target], fetch: FetchStatus, timeout: float | None = None
) -> list[str]:
    """Fetch every target's raw status concurrently.

    Waits for all fetches to settle. A fetch that raises or exceeds
    `timeout` yields "unknown" for its own slot only, so the result always
    has one entry per target.
    """
    return list(await asyncio.gather(*(_settle(fetch, t, timeout) for t in targets)))
