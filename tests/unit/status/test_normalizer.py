"""Unit tests for the status normalizer."""

import pytest

from deckstatus.status import SourceKind, StatusTier, normalize
from deckstatus.status.normalizer import (
    AZURE_BLUE,
    GRAY,
    GREEN,
    ORANGE,
    RED,
    YELLOW,
    floor_priority,
    status_symbol,
)


@pytest.mark.unit
class TestAzureVocabulary:
    """Tests for Azure Pipelines statuses."""

    @pytest.mark.parametrize(
        ("raw", "tier", "priority", "color"),
        [
            ("failed", StatusTier.FAILED, 1, RED),
            ("partiallySucceeded", StatusTier.DEGRADED, 2, ORANGE),
            ("canceled", StatusTier.INACTIVE, 3, GRAY),
            ("inProgress", StatusTier.RUNNING, 4, AZURE_BLUE),
            ("notStarted", StatusTier.RUNNING, 4, AZURE_BLUE),
            ("succeeded", StatusTier.SUCCEEDED, 5, GREEN),
        ],
    )
    def test_known_statuses(self, raw: str, tier: StatusTier, priority: int, color: str) -> None:
        """Each Azure status maps to its tier, rank and color."""
        status = normalize(raw, SourceKind.AZURE_PIPELINE)

        assert status.raw == raw
        assert status.tier == tier
        assert status.priority == priority
        assert status.color == color

    def test_unmapped_status_gets_floor(self) -> None:
        """An unrecognized Azure status is UNKNOWN at rank 6."""
        status = normalize("postponed", SourceKind.AZURE_PIPELINE)

        assert status.tier == StatusTier.UNKNOWN
        assert status.priority == 6
        assert status.color == GRAY
        assert status.symbol == "?"

    def test_failed_fetch_status_is_unknown(self) -> None:
        """A failed fetch ("unknown") ranks below every Azure status."""
        status = normalize("unknown", SourceKind.AZURE_PIPELINE)

        assert status.tier == StatusTier.UNKNOWN
        assert status.priority == floor_priority(SourceKind.AZURE_PIPELINE)

    def test_github_vocabulary_is_not_shared(self) -> None:
        """GitHub spellings are unmapped on Azure."""
        status = normalize("success", SourceKind.AZURE_PIPELINE)

        assert status.tier == StatusTier.UNKNOWN
        assert status.priority == 6


@pytest.mark.unit
class TestGitHubVocabulary:
    """Tests for GitHub Actions statuses."""

    @pytest.mark.parametrize(
        ("raw", "tier", "priority", "color"),
        [
            ("failure", StatusTier.FAILED, 1, RED),
            ("cancelled", StatusTier.INACTIVE, 2, GRAY),
            ("skipped", StatusTier.INACTIVE, 2, GRAY),
            ("none", StatusTier.INACTIVE, 2, GRAY),
            ("in_progress", StatusTier.RUNNING, 3, YELLOW),
            ("queued", StatusTier.RUNNING, 3, YELLOW),
            ("waiting", StatusTier.RUNNING, 3, YELLOW),
            ("success", StatusTier.SUCCEEDED, 4, GREEN),
        ],
    )
    def test_known_statuses(self, raw: str, tier: StatusTier, priority: int, color: str) -> None:
        """Each GitHub status maps to its tier, rank and color."""
        status = normalize(raw, SourceKind.GITHUB_WORKFLOW)

        assert status.tier == tier
        assert status.priority == priority
        assert status.color == color

    def test_unmapped_status_gets_floor(self) -> None:
        """An unrecognized GitHub status is UNKNOWN at rank 5."""
        status = normalize("neutral", SourceKind.GITHUB_WORKFLOW)

        assert status.tier == StatusTier.UNKNOWN
        assert status.priority == 5
        assert status.color == GRAY

    def test_unknown_is_listed_as_inactive(self) -> None:
        """GitHub lists "unknown" explicitly, ranked with cancelled."""
        status = normalize("unknown", SourceKind.GITHUB_WORKFLOW)

        assert status.tier == StatusTier.INACTIVE
        assert status.priority == 2
        assert status.symbol == "?"


@pytest.mark.unit
class TestNormalizeEdgeCases:
    """Tests for inputs outside any vocabulary."""

    @pytest.mark.parametrize("source_kind", list(SourceKind))
    def test_none_does_not_raise(self, source_kind: SourceKind) -> None:
        """None is treated as "unknown"."""
        status = normalize(None, source_kind)

        assert status.raw == "unknown"

    @pytest.mark.parametrize("source_kind", list(SourceKind))
    def test_empty_string(self, source_kind: SourceKind) -> None:
        """An empty string gets the floor rank."""
        status = normalize("", source_kind)

        assert status.tier == StatusTier.UNKNOWN
        assert status.priority == floor_priority(source_kind)

    def test_status_is_case_sensitive(self) -> None:
        """Platform values are matched exactly."""
        status = normalize("Succeeded", SourceKind.AZURE_PIPELINE)

        assert status.tier == StatusTier.UNKNOWN


@pytest.mark.unit
class TestStatusSymbol:
    """Tests for fallback title symbols."""

    @pytest.mark.parametrize(
        ("raw", "symbol"),
        [
            ("succeeded", "✓"),
            ("success", "✓"),
            ("failed", "✗"),
            ("failure", "✗"),
            ("partiallySucceeded", "⚠"),
            ("canceled", "⊘"),
            ("cancelled", "⊘"),
            ("skipped", "⊘"),
            ("inProgress", "⟳"),
            ("queued", "⟳"),
            ("none", "-"),
            ("whatever", "?"),
        ],
    )
    def test_symbols(self, raw: str, symbol: str) -> None:
        assert status_symbol(raw) == symbol
