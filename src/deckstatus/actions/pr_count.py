"""Azure Repos pull request count action."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from deckstatus.actions.base import Action
from deckstatus.actions.models import PullRequestCountSettings
from deckstatus.clients import AzureDevOpsClient, ClientError, PullRequest
from deckstatus.render import IconError, compose_badge_icon

if TYPE_CHECKING:
    from deckstatus.actions.surface import ButtonSurface
    from deckstatus.registry.models import Button

logger = logging.getLogger("deckstatus.actions.pr_count")

BADGE_BACKGROUND = "#0078d4"


def matches_excluded_user(unique_name: str, display_name: str, excluded: list[str]) -> bool:
    """Check a user against an exclusion list.

    An entry matches when it appears inside the user's (lowercased) name, or
    equals the local part or the whole of their unique name (email).
    """
    name = (unique_name or display_name).lower()
    email = unique_name.lower()
    username = email.split("@")[0] if "@" in email else email
    return any(entry in name or username == entry or email == entry for entry in excluded)


class PullRequestCountAction(Action):
    """Counts active pull requests in an Azure DevOps project."""

    kind = "azure.prcount"
    settings_type = PullRequestCountSettings

    def create_client(self, settings: PullRequestCountSettings) -> AzureDevOpsClient:
        timeout = self.fetch_timeout if self.fetch_timeout is not None else 30.0
        return AzureDevOpsClient(
            organization=settings.organization,
            project=settings.project,
            token=settings.token,
            timeout=timeout,
        )

    async def filter_excluded(
        self,
        client: AzureDevOpsClient,
        pull_requests: list[PullRequest],
        excluded: list[str],
    ) -> list[PullRequest]:
        """Drop PRs authored or reviewed by excluded users.

        A reviewer counts only once they have voted. When the reviewer list
        cannot be fetched the PR is kept.
        """
        kept = []
        for pr in pull_requests:
            if matches_excluded_user(pr.author_unique_name, pr.author_display_name, excluded):
                continue
            try:
                reviewers = await client.list_reviewers(pr)
            except (ClientError, httpx.HTTPError):
                logger.warning("Could not fetch reviewers for PR %d", pr.id, exc_info=True)
                kept.append(pr)
                continue
            if any(
                r.vote != 0 and matches_excluded_user(r.unique_name, r.display_name, excluded)
                for r in reviewers
            ):
                continue
            kept.append(pr)
        return kept

    async def refresh(self, button: Button, surface: ButtonSurface) -> bool:
        settings: PullRequestCountSettings = button.settings
        if not settings.is_configured:
            await surface.set_title(button.context, "PR\n--")
            return True

        client = self.create_client(settings)
        try:
            pull_requests = await client.list_active_pull_requests()
            if not settings.include_drafts:
                pull_requests = [pr for pr in pull_requests if not pr.is_draft]
            excluded = settings.excluded_users()
            if excluded:
                pull_requests = await self.filter_excluded(client, pull_requests, excluded)
            if button.settings is not settings:
                logger.debug("Discarding stale refresh for button %s", button.context)
                return False

            button.pull_requests = pull_requests
            logger.info("Button %s: %d active PR(s)", button.context, len(pull_requests))
            await surface.set_title(button.context, f"PR\n{len(pull_requests)}")
            await self.render_avatar(button, client, surface)
        except (ClientError, httpx.HTTPError):
            logger.exception("PR count refresh failed for button %s", button.context)
            await surface.set_title(button.context, "PR\nErr")
        finally:
            await client.close()
        return True

    async def render_avatar(
        self, button: Button, client: AzureDevOpsClient, surface: ButtonSurface
    ) -> None:
        """Draw the project avatar; the count title stays either way."""
        try:
            avatar = await client.get_project_avatar()
            image = await asyncio.to_thread(compose_badge_icon, avatar, BADGE_BACKGROUND)
        except (ClientError, IconError, httpx.HTTPError) as e:
            logger.debug("No avatar for button %s: %s", button.context, e)
            return
        await surface.set_image(button.context, image)

    async def activate(self, button: Button, surface: ButtonSurface) -> str | None:
        settings: PullRequestCountSettings = button.settings
        if not (settings.organization and settings.project and button.pull_requests):
            return None

        repository = button.pull_requests[0].repository_name
        if not repository:
            return None
        url = self.create_client(settings).pull_requests_url(repository)
        await surface.open_url(button.context, url)
        return url
