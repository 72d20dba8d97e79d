"""ButtonRegistry - per-button lifecycle, timers and refresh coordination."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from deckstatus.actions import DEFAULT_FETCH_TIMEOUT, default_actions
from deckstatus.registry.exceptions import (
    ButtonExistsError,
    ButtonNotFoundError,
    UnknownActionError,
)
from deckstatus.registry.models import Button

if TYPE_CHECKING:
    from deckstatus.actions import Action, ButtonSurface

logger = logging.getLogger("deckstatus.registry")


class ButtonRegistry:
    """Tracks attached buttons and drives their refresh cycles.

    Each button owns an independent periodic timer. Buttons share no
    mutable state, so refreshes of different buttons run concurrently
    without coordination. A refresh requested while the same button is
    already refreshing joins the in-flight cycle instead of starting a
    second set of fetches.
    """

    def __init__(
        self,
        surface: ButtonSurface,
        actions: dict[str, Action] | None = None,
        fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT,
        on_refresh_complete: Callable[[Button], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            surface: Display/navigation glue receiving titles, images and URLs.
            actions: Action instances keyed by kind. Defaults to all built-ins.
            fetch_timeout: Per-fetch timeout passed to the built-in actions.
            on_refresh_complete: Awaited with the button after each refresh
                cycle whose results were kept.
        """
        self.surface = surface
        self.actions = actions if actions is not None else default_actions(fetch_timeout)
        self._buttons: dict[str, Button] = {}
        self.on_refresh_complete = on_refresh_complete

    def __contains__(self, context: str) -> bool:
        return context in self._buttons

    def __len__(self) -> int:
        return len(self._buttons)

    def get(self, context: str) -> Button:
        """Get an attached button.

        Raises:
            ButtonNotFoundError: If no button is attached under context
        """
        button = self._buttons.get(context)
        if button is None:
            raise ButtonNotFoundError(f"Button {context} not attached")
        return button

    def list_buttons(self) -> list[Button]:
        """All attached buttons, in attach order."""
        return list(self._buttons.values())

    def _action_for(self, button: Button) -> Action:
        return self.actions[button.action]

    # Lifecycle

    async def attach(
        self, context: str, action: str, settings: dict[str, Any] | None = None
    ) -> Button:
        """Attach a button, start its timer and schedule a first refresh.

        Args:
            context: Device-assigned button handle.
            action: Action kind.
            settings: Raw settings, merged over the action's defaults.

        Raises:
            ButtonExistsError: If context is already attached
            UnknownActionError: If action is not registered
        """
        if context in self._buttons:
            raise ButtonExistsError(f"Button {context} already attached")
        handler = self.actions.get(action)
        if handler is None:
            raise UnknownActionError(f"Unknown action '{action}'")

        button = Button(context=context, action=action, settings=handler.parse_settings(settings))
        self._buttons[context] = button
        logger.info("Attached button %s (%s)", context, action)

        self._start_timer(button)
        self.schedule_refresh(context)
        return button

    async def detach(self, context: str) -> None:
        """Detach a button and stop its timer.

        A refresh already in flight is left to finish.

        Raises:
            ButtonNotFoundError: If no button is attached under context
        """
        button = self.get(context)
        del self._buttons[context]
        await self._stop_timer(button)
        logger.info("Detached button %s", context)

    async def update_settings(self, context: str, settings: dict[str, Any] | None) -> Button:
        """Replace a button's settings, restart its timer and refresh.

        Raises:
            ButtonNotFoundError: If no button is attached under context
        """
        button = self.get(context)
        button.settings = self._action_for(button).parse_settings(settings)
        logger.info("Updated settings for button %s", context)

        await self._stop_timer(button)
        self._start_timer(button)
        # Settings changed: a cycle in flight is stale, start a new one.
        self._ensure_refresh(button, restart=True)
        return button

    async def close(self) -> None:
        """Stop every timer and cancel in-flight refreshes."""
        buttons = list(self._buttons.values())
        self._buttons.clear()
        for button in buttons:
            await self._stop_timer(button)
            if button.refreshing and button.refresh_task is not None:
                button.refresh_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await button.refresh_task
        logger.info("Registry closed (%d button(s))", len(buttons))

    # Key events

    async def key_down(self, context: str) -> None:
        """Handle a key press; polling actions refresh immediately."""
        button = self.get(context)
        if await self._action_for(button).key_down(button, self.surface):
            self.schedule_refresh(context)

    async def key_up(self, context: str) -> str | None:
        """Handle a key release.

        Returns:
            The URL opened, if any.
        """
        button = self.get(context)
        return await self._action_for(button).activate(button, self.surface)

    # Refresh

    def schedule_refresh(self, context: str) -> asyncio.Task[None]:
        """Start a refresh without waiting for it.

        Returns the in-flight refresh task when one is already running.
        """
        return self._ensure_refresh(self.get(context))

    async def refresh(self, context: str) -> Button:
        """Refresh a button and wait for the cycle to finish."""
        button = self.get(context)
        await asyncio.shield(self._ensure_refresh(button))
        return button

    def _ensure_refresh(self, button: Button, restart: bool = False) -> asyncio.Task[None]:
        task = button.refresh_task
        if restart or task is None or task.done():
            task = asyncio.create_task(
                self._run_refresh(button), name=f"deckstatus-refresh-{button.context}"
            )
            button.refresh_task = task
        return task

    async def _run_refresh(self, button: Button) -> None:
        try:
            committed = await self._action_for(button).refresh(button, self.surface)
        except Exception:
            logger.exception("Unexpected error refreshing button %s", button.context)
            return
        if committed and self.on_refresh_complete is not None:
            await self.on_refresh_complete(button)

    # Timers

    def _start_timer(self, button: Button) -> None:
        if not self._action_for(button).polls:
            return
        button.timer = asyncio.create_task(
            self._poll(button), name=f"deckstatus-timer-{button.context}"
        )
        logger.debug(
            "Timer started for button %s every %.0fs",
            button.context,
            button.settings.refresh_seconds,
        )

    async def _stop_timer(self, button: Button) -> None:
        timer, button.timer = button.timer, None
        if timer is None:
            return
        timer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await timer

    async def _poll(self, button: Button) -> None:
        while True:
            await asyncio.sleep(button.settings.refresh_seconds)
            await asyncio.shield(self._ensure_refresh(button))
