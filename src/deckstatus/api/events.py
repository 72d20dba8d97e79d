"""Event manager for Server-Sent Events (SSE).

Display commands for the device bridge (titles, images, URLs to open) and
refresh notifications are pushed to subscribers as SSE events.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from deckstatus.registry import Button


class EventType(str, Enum):
    """Types of events that can be emitted."""

    SET_TITLE = "set_title"
    SET_IMAGE = "set_image"
    OPEN_URL = "open_url"
    BUTTON_ATTACHED = "button_attached"
    BUTTON_DETACHED = "button_detached"
    REFRESH_COMPLETE = "refresh_complete"
    HEARTBEAT = "heartbeat"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Event:
    """An event to be sent via SSE."""

    event_type: EventType
    data: dict[str, Any]
    context: str | None = None

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.event_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the event stream."""

    id: str
    queue: asyncio.Queue[Event]
    context: str | None = None  # None means subscribe to all buttons

    @classmethod
    def create(cls, context: str | None = None) -> Subscriber:
        """Create a new subscriber."""
        return cls(id=str(uuid4()), queue=asyncio.Queue(), context=context)


@dataclass
class EventManager:
    """Manager for SSE events."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    def subscribe(self, context: str | None = None) -> Subscriber:
        """Subscribe a client to events.

        Args:
            context: Optional button context to filter events. None means all.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(context)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a client from events."""
        self._subscribers.pop(subscriber_id, None)

    async def emit(self, event: Event) -> None:
        """Emit an event to all matching subscribers."""
        for subscriber in list(self._subscribers.values()):
            if subscriber.context is None or subscriber.context == event.context:
                await subscriber.queue.put(event)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    async def emit_button_attached(self, context: str, action: str) -> None:
        """Emit a button_attached event."""
        await self.emit(
            Event(
                event_type=EventType.BUTTON_ATTACHED,
                context=context,
                data={"context": context, "action": action},
            )
        )

    async def emit_button_detached(self, context: str) -> None:
        """Emit a button_detached event."""
        await self.emit(
            Event(
                event_type=EventType.BUTTON_DETACHED,
                context=context,
                data={"context": context},
            )
        )

    async def emit_refresh_complete(self, button: Button) -> None:
        """Emit a refresh_complete event carrying the latest render plan."""
        plan = button.last_plan
        data: dict[str, Any] = {"context": button.context, "timestamp": _now()}
        if plan is not None:
            data["symbol_line"] = plan.symbol_line
            data["colors"] = [slot.color for slot in plan.slots]
            data["priority_target"] = plan.priority_target.id if plan.priority_target else None
        await self.emit(
            Event(event_type=EventType.REFRESH_COMPLETE, context=button.context, data=data)
        )

    def create_heartbeat_event(self) -> Event:
        """Create a heartbeat event."""
        return Event(
            event_type=EventType.HEARTBEAT,
            context=None,  # Heartbeat goes to all subscribers
            data={"timestamp": _now()},
        )


class EventSurface:
    """ButtonSurface that forwards display commands as SSE events."""

    def __init__(self, event_manager: EventManager) -> None:
        self.event_manager = event_manager

    async def set_title(self, context: str, title: str) -> None:
        await self.event_manager.emit(
            Event(
                event_type=EventType.SET_TITLE,
                context=context,
                data={"context": context, "title": title},
            )
        )

    async def set_image(self, context: str, image: str) -> None:
        await self.event_manager.emit(
            Event(
                event_type=EventType.SET_IMAGE,
                context=context,
                data={"context": context, "image": image},
            )
        )

    async def open_url(self, context: str, url: str) -> None:
        await self.event_manager.emit(
            Event(
                event_type=EventType.OPEN_URL,
                context=context,
                data={"context": context, "url": url},
            )
        )
