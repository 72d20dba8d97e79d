"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from deckstatus.api.events import EventManager
from deckstatus.registry import ButtonRegistry

# Global ButtonRegistry instance (initialized on app startup)
_registry: ButtonRegistry | None = None


def init_registry(registry: ButtonRegistry) -> ButtonRegistry:
    """Initialize the global ButtonRegistry instance."""
    global _registry  # noqa: PLW0603
    _registry = registry
    return _registry


async def close_registry() -> None:
    """Stop every button and drop the global ButtonRegistry instance."""
    global _registry  # noqa: PLW0603
    if _registry is not None:
        await _registry.close()
        _registry = None


def get_registry() -> Generator[ButtonRegistry, None, None]:
    """Dependency that provides the ButtonRegistry instance."""
    if _registry is None:
        raise RuntimeError("ButtonRegistry not initialized. Call init_registry() first.")
    yield _registry


# Type alias for dependency injection
RegistryDep = Annotated[ButtonRegistry, Depends(get_registry)]

# Global EventManager instance
_event_manager: EventManager | None = None


def init_event_manager() -> EventManager:
    """Initialize the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = EventManager()
    return _event_manager


def close_event_manager() -> None:
    """Drop the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = None


def get_event_manager() -> Generator[EventManager, None, None]:
    """Dependency that provides the EventManager instance."""
    if _event_manager is None:
        raise RuntimeError("EventManager not initialized. Call init_event_manager() first.")
    yield _event_manager


# Type alias for dependency injection
EventManagerDep = Annotated[EventManager, Depends(get_event_manager)]
