"""HTTP bridge - REST and SSE surface for the device plugin host."""

from deckstatus.api.app import create_app
from deckstatus.api.events import Event, EventManager, EventSurface, EventType

__all__ = ["Event", "EventManager", "EventSurface", "EventType", "create_app"]
