"""Button actions - what each kind of key shows and does."""

from deckstatus.actions.base import DEFAULT_FETCH_TIMEOUT, Action, StatusAction
from deckstatus.actions.models import (
    ActionSettings,
    OpenRepoSettings,
    PipelineStatusSettings,
    PullRequestCountSettings,
    WorkflowStatusSettings,
    parse_refresh_interval,
)
from deckstatus.actions.open_repo import OpenRepoAction
from deckstatus.actions.pipeline_status import PipelineStatusAction
from deckstatus.actions.pr_count import PullRequestCountAction, matches_excluded_user
from deckstatus.actions.surface import ButtonSurface, MemorySurface
from deckstatus.actions.workflow_status import WorkflowStatusAction

ACTION_TYPES: tuple[type[Action], ...] = (
    PipelineStatusAction,
    WorkflowStatusAction,
    PullRequestCountAction,
    OpenRepoAction,
)


def default_actions(fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT) -> dict[str, Action]:
    """Instantiate every built-in action, keyed by action kind."""
    return {action_type.kind: action_type(fetch_timeout) for action_type in ACTION_TYPES}


__all__ = [
    "ACTION_TYPES",
    "Action",
    "ActionSettings",
    "ButtonSurface",
    "MemorySurface",
    "OpenRepoAction",
    "OpenRepoSettings",
    "PipelineStatusAction",
    "PipelineStatusSettings",
    "PullRequestCountAction",
    "PullRequestCountSettings",
    "StatusAction",
    "WorkflowStatusAction",
    "WorkflowStatusSettings",
    "default_actions",
    "matches_excluded_user",
    "parse_refresh_interval",
]
