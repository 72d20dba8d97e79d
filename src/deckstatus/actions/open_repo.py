"""Open GitHub repository action."""

from __future__ import annotations

from typing import TYPE_CHECKING

from deckstatus.actions.base import Action
from deckstatus.actions.models import OpenRepoSettings
from deckstatus.clients import GitHubClient

if TYPE_CHECKING:
    from deckstatus.actions.surface import ButtonSurface
    from deckstatus.registry.models import Button

DEFAULT_URL = "https://github.com"


class OpenRepoAction(Action):
    """Labels a button with a repository name and opens it on release."""

    kind = "github.action"
    settings_type = OpenRepoSettings
    polls = False

    async def refresh(self, button: Button, surface: ButtonSurface) -> bool:
        settings: OpenRepoSettings = button.settings
        await surface.set_title(button.context, settings.repo or "GitHub")
        return True

    async def activate(self, button: Button, surface: ButtonSurface) -> str | None:
        settings: OpenRepoSettings = button.settings
        if settings.owner and settings.repo:
            url = GitHubClient(owner=settings.owner).repo_url(settings.repo)
        else:
            url = DEFAULT_URL
        await surface.open_url(button.context, url)
        return url
