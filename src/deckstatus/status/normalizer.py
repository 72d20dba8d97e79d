"""Status normalizer - maps raw platform vocabularies onto status tiers."""

from __future__ import annotations

from deckstatus.status.models import NormalizedStatus, SourceKind, StatusTier

# Indicator colors
GREEN = "#28a745"
RED = "#dc3545"
ORANGE = "#fd7e14"
GRAY = "#6c757d"
AZURE_BLUE = "#0078d4"
YELLOW = "#ffc107"

# Each platform keeps its own rank scale: GitHub has no degraded tier,
# so its ranks below FAILED are shifted up by one.
_AZURE_TABLE: dict[str, tuple[StatusTier, int, str]] = {
    "failed": (StatusTier.FAILED, 1, RED),
    "partiallySucceeded": (StatusTier.DEGRADED, 2, ORANGE),
    "canceled": (StatusTier.INACTIVE, 3, GRAY),
    "inProgress": (StatusTier.RUNNING, 4, AZURE_BLUE),
    "notStarted": (StatusTier.RUNNING, 4, AZURE_BLUE),
    "succeeded": (StatusTier.SUCCEEDED, 5, GREEN),
}
_AZURE_FLOOR = 6

_GITHUB_TABLE: dict[str, tuple[StatusTier, int, str]] = {
    "failure": (StatusTier.FAILED, 1, RED),
    "cancelled": (StatusTier.INACTIVE, 2, GRAY),
    "skipped": (StatusTier.INACTIVE, 2, GRAY),
    "none": (StatusTier.INACTIVE, 2, GRAY),
    "unknown": (StatusTier.INACTIVE, 2, GRAY),
    "in_progress": (StatusTier.RUNNING, 3, YELLOW),
    "queued": (StatusTier.RUNNING, 3, YELLOW),
    "waiting": (StatusTier.RUNNING, 3, YELLOW),
    "success": (StatusTier.SUCCEEDED, 4, GREEN),
}
_GITHUB_FLOOR = 5

_TABLES = {
    SourceKind.AZURE_PIPELINE: (_AZURE_TABLE, _AZURE_FLOOR),
    SourceKind.GITHUB_WORKFLOW: (_GITHUB_TABLE, _GITHUB_FLOOR),
}

# Fallback title symbols, keyed by raw value across both vocabularies
_SYMBOLS = {
    "succeeded": "✓",
    "success": "✓",
    "failed": "✗",
    "failure": "✗",
    "partiallySucceeded": "⚠",
    "canceled": "⊘",
    "cancelled": "⊘",
    "skipped": "⊘",
    "inProgress": "⟳",
    "notStarted": "⟳",
    "in_progress": "⟳",
    "queued": "⟳",
    "waiting": "⟳",
    "none": "-",
}
UNKNOWN_SYMBOL = "?"


def status_symbol(raw_status: str) -> str:
    """Get the fallback title symbol for a raw status."""
    return _SYMBOLS.get(raw_status, UNKNOWN_SYMBOL)


def floor_priority(source_kind: SourceKind) -> int:
    """Get the rank given to statuses outside a platform's vocabulary."""
    return _TABLES[source_kind][1]


def normalize(raw_status: str | None, source_kind: SourceKind) -> NormalizedStatus:
    """Reduce a raw platform status to a NormalizedStatus.

    Never raises: any value outside the platform's vocabulary (including
    None) becomes UNKNOWN with the platform's floor priority.

    Args:
        raw_status: Status string as returned by the platform.
        source_kind: Which platform vocabulary to apply.

    Returns:
        The normalized status.
    """
    raw = raw_status if isinstance(raw_status, str) else "unknown"
    table, floor = _TABLES[source_kind]
    tier, priority, color = table.get(raw, (StatusTier.UNKNOWN, floor, GRAY))
    return NormalizedStatus(
        raw=raw,
        tier=tier,
        priority=priority,
        color=color,
        symbol=status_symbol(raw),
    )
