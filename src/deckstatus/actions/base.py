"""Base classes for button actions."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from deckstatus.actions.models import ActionSettings
from deckstatus.clients import ClientError
from deckstatus.render import IconError, compose_status_icon
from deckstatus.status import (
    SourceKind,
    Target,
    aggregate,
    gather_statuses,
    select_priority_target,
)

if TYPE_CHECKING:
    from deckstatus.actions.surface import ButtonSurface
    from deckstatus.registry.models import Button
    from deckstatus.status import RenderPlan

logger = logging.getLogger("deckstatus.actions")

DEFAULT_FETCH_TIMEOUT = 30.0


class Action(ABC):
    """A kind of button: how it refreshes and what a key press does.

    Actions hold no per-button state; everything a button remembers between
    events lives on its `Button` record in the registry.
    """

    kind: ClassVar[str]
    settings_type: ClassVar[type[ActionSettings]]
    polls: ClassVar[bool] = True

    def __init__(self, fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT) -> None:
        """Initialize the action.

        Args:
            fetch_timeout: Upper bound in seconds on each remote fetch.
                None waits indefinitely.
        """
        self.fetch_timeout = fetch_timeout

    def parse_settings(self, raw: dict[str, Any] | None) -> ActionSettings:
        """Merge raw settings over this action's defaults."""
        return self.settings_type.from_settings(raw)

    @abstractmethod
    async def refresh(self, button: Button, surface: ButtonSurface) -> bool:
        """Fetch remote state and update the button's display.

        Returns:
            False when the settings changed mid-cycle and the results were
            discarded, True otherwise.
        """

    @abstractmethod
    async def activate(self, button: Button, surface: ButtonSurface) -> str | None:
        """Handle a key release.

        Returns:
            The URL opened, or None when nothing was opened.
        """

    async def key_down(self, button: Button, surface: ButtonSurface) -> bool:
        """Handle a key press.

        Returns:
            True when the press should trigger a refresh.
        """
        return self.polls


class StatusAction(Action):
    """Shared refresh/activate flow of the multi-target status actions.

    Fetches every configured target concurrently, aggregates the results
    into a RenderPlan and draws it over the platform avatar, falling back to
    a symbol title when no avatar is available.
    """

    source_kind: ClassVar[SourceKind]
    unconfigured_title: ClassVar[str]
    error_title: ClassVar[str]

    @abstractmethod
    def create_client(self, settings: Any) -> Any:
        """Create the platform API client for these settings."""

    @abstractmethod
    async def fetch_status(self, client: Any, target: Target) -> str:
        """Fetch one target's raw status."""

    @abstractmethod
    async def fetch_avatar(self, client: Any) -> bytes:
        """Download the avatar drawn behind the indicators."""

    @abstractmethod
    def target_url(self, settings: Any, target: Target) -> str:
        """Browser URL for a target."""

    def priority_target(self, button: Button) -> Target | None:
        """The target a key release opens, given the latest statuses.

        Current targets are paired positionally with the cached statuses;
        before the first refresh the first target is chosen.
        """
        targets = button.settings.targets()
        if not targets:
            return None
        return select_priority_target(targets, button.statuses)

    async def refresh(self, button: Button, surface: ButtonSurface) -> bool:
        settings = button.settings
        if not settings.is_configured:
            await surface.set_title(button.context, self.unconfigured_title)
            return True

        targets = settings.targets()
        client = self.create_client(settings)
        try:
            raw_statuses = await gather_statuses(
                targets,
                lambda target: self.fetch_status(client, target),
                timeout=self.fetch_timeout,
            )
            if button.settings is not settings:
                logger.debug("Discarding stale refresh for button %s", button.context)
                return False
            plan = aggregate(targets, raw_statuses, self.source_kind)
            button.statuses = plan.statuses
            button.last_plan = plan
            button.refreshed_at = datetime.now(timezone.utc)
            logger.info(
                "Button %s refreshed: %s (priority target %s)",
                button.context,
                plan.symbol_line,
                plan.priority_target.id if plan.priority_target else None,
            )
            await self.render(button, client, plan, surface)
        except (ClientError, httpx.HTTPError):
            logger.exception("Refresh failed for button %s", button.context)
            await surface.set_title(button.context, self.error_title)
        finally:
            await client.close()
        return True

    async def render(
        self, button: Button, client: Any, plan: RenderPlan, surface: ButtonSurface
    ) -> None:
        """Draw the plan over the avatar, or show the symbol line instead."""
        try:
            avatar = await self.fetch_avatar(client)
            image = await asyncio.to_thread(compose_status_icon, avatar, plan.slots)
        except (ClientError, IconError, httpx.HTTPError) as e:
            logger.debug("No icon for button %s (%s), using symbols", button.context, e)
            await surface.set_title(button.context, plan.symbol_line)
            return
        await surface.set_image(button.context, image)

    async def activate(self, button: Button, surface: ButtonSurface) -> str | None:
        settings = button.settings
        if not settings.is_configured:
            return None

        target = self.priority_target(button)
        if target is None:
            return None
        url = self.target_url(settings, target)
        logger.info("Button %s opening %s", button.context, url)
        await surface.open_url(button.context, url)
        return url
