"""Unit tests for action settings models."""

import pytest

from deckstatus.actions import (
    OpenRepoSettings,
    PipelineStatusSettings,
    PullRequestCountSettings,
    WorkflowStatusSettings,
    parse_refresh_interval,
)


@pytest.mark.unit
class TestParseRefreshInterval:
    """Tests for parse_refresh_interval."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 5),
            ("", 5),
            ("abc", 5),
            (0, 5),
            ("10", 10),
            (1, 1),
            (-3, 1),
            (60, 60),
            (90, 60),
        ],
    )
    def test_values(self, value: object, expected: int) -> None:
        assert parse_refresh_interval(value) == expected


@pytest.mark.unit
class TestFromSettings:
    """Tests for merging raw settings over defaults."""

    def test_empty_uses_defaults(self) -> None:
        settings = PipelineStatusSettings.from_settings(None)

        assert settings.refresh_interval == 5
        assert settings.refresh_seconds == 300.0
        assert settings.organization == ""

    def test_camel_case_alias(self) -> None:
        settings = PullRequestCountSettings.from_settings(
            {"refreshInterval": "2", "excludeUsers": "Bot, ann ", "includeDrafts": "true"}
        )

        assert settings.refresh_interval == 2
        assert settings.include_drafts is True
        assert settings.excluded_users() == ["bot", "ann"]

    def test_snake_case_wins_over_alias(self) -> None:
        settings = PullRequestCountSettings.from_settings(
            {"include_drafts": False, "includeDrafts": True}
        )

        assert settings.include_drafts is False

    def test_none_keeps_default_and_unknown_keys_ignored(self) -> None:
        settings = OpenRepoSettings.from_settings({"owner": None, "color": "red"})

        assert settings.owner == ""

    def test_strings_are_trimmed(self) -> None:
        settings = PipelineStatusSettings.from_settings({"organization": " contoso "})

        assert settings.organization == "contoso"

    def test_to_dict_masks_token(self) -> None:
        settings = WorkflowStatusSettings.from_settings({"owner": "octo", "token": "secret"})

        data = settings.to_dict()

        assert data["token"] == "***"
        assert data["owner"] == "octo"

    def test_to_dict_without_token(self) -> None:
        assert PipelineStatusSettings().to_dict()["token"] == ""


@pytest.mark.unit
class TestPipelineTargets:
    """Tests for PipelineStatusSettings.targets."""

    def test_empty_slots_skipped(self) -> None:
        settings = PipelineStatusSettings.from_settings(
            {"pipeline1": "11", "branch1": "main", "pipeline3": "13"}
        )

        targets = settings.targets()

        assert [(t.id, t.position, t.branch) for t in targets] == [
            ("11", 0, "main"),
            ("13", 1, ""),
        ]

    def test_is_configured(self) -> None:
        base = {"organization": "contoso", "project": "web", "token": "pat"}

        assert not PipelineStatusSettings.from_settings(base).is_configured
        assert PipelineStatusSettings.from_settings({**base, "pipeline2": "5"}).is_configured
        assert not PipelineStatusSettings.from_settings(
            {"organization": "contoso", "pipeline1": "5"}
        ).is_configured


@pytest.mark.unit
class TestWorkflowTargets:
    """Tests for WorkflowStatusSettings.targets."""

    def test_numbered_slots(self) -> None:
        settings = WorkflowStatusSettings.from_settings(
            {
                "owner": "octo",
                "repo1": "app",
                "workflow1": "ci.yml",
                "repo2": "lib",
                "workflow2": "",
                "repo3": "docs",
                "workflow3": "pages.yml",
                "branch3": "gh-pages",
            }
        )

        targets = settings.targets()

        assert [t.id for t in targets] == ["octo/app/ci.yml", "octo/docs/pages.yml"]
        assert targets[1].position == 1
        assert targets[1].branch == "gh-pages"

    def test_legacy_keys_fill_first_slot(self) -> None:
        settings = WorkflowStatusSettings.from_settings(
            {"owner": "octo", "repo": "app", "workflow": "ci.yml", "branch": "main"}
        )

        [target] = settings.targets()

        assert (target.repo, target.workflow, target.branch) == ("app", "ci.yml", "main")

    def test_token_optional(self) -> None:
        settings = WorkflowStatusSettings.from_settings(
            {"owner": "octo", "repo1": "app", "workflow1": "ci.yml"}
        )

        assert settings.is_configured

    def test_needs_owner(self) -> None:
        settings = WorkflowStatusSettings.from_settings({"repo1": "app", "workflow1": "ci.yml"})

        assert not settings.is_configured
