"""Display surface - where actions send titles, images and URLs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class ButtonSurface(Protocol):
    """Interface for the display/navigation glue of the keypad device."""

    async def set_title(self, context: str, title: str) -> None:
        """Show text on a button."""
        ...

    async def set_image(self, context: str, image: str) -> None:
        """Show a PNG data URL on a button."""
        ...

    async def open_url(self, context: str, url: str) -> None:
        """Open a URL in the user's browser."""
        ...


@dataclass
class MemorySurface:
    """Surface that records the latest output per button.

    Used by the `check` command and by tests.
    """

    titles: dict[str, str] = field(default_factory=dict)
    images: dict[str, str] = field(default_factory=dict)
    opened: list[tuple[str, str]] = field(default_factory=list)

    async def set_title(self, context: str, title: str) -> None:
        self.titles[context] = title

    async def set_image(self, context: str, image: str) -> None:
        self.images[context] = image

    async def open_url(self, context: str, url: str) -> None:
        self.opened.append((context, url))
