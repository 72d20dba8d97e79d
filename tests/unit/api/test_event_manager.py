"""Unit tests for EventManager and EventSurface."""

import asyncio
import json

import pytest

from deckstatus.api.events import Event, EventManager, EventSurface, EventType
from deckstatus.registry import Button
from deckstatus.status import SourceKind, Target, aggregate


@pytest.fixture
def event_manager():
    """Create an EventManager instance."""
    return EventManager()


@pytest.mark.unit
class TestEventManagerSubscribe:
    """Tests for subscribe and unsubscribe."""

    def test_subscribe(self, event_manager: EventManager) -> None:
        subscriber = event_manager.subscribe()

        assert subscriber.id is not None
        assert subscriber.context is None
        assert event_manager.subscriber_count == 1

    def test_subscribe_with_context_filter(self, event_manager: EventManager) -> None:
        subscriber = event_manager.subscribe(context="ctx-1")

        assert subscriber.context == "ctx-1"

    def test_unsubscribe(self, event_manager: EventManager) -> None:
        subscriber = event_manager.subscribe()

        event_manager.unsubscribe(subscriber.id)
        event_manager.unsubscribe("nonexistent-id")

        assert event_manager.subscriber_count == 0


@pytest.mark.unit
class TestEventManagerEmit:
    """Tests for EventManager.emit."""

    @pytest.mark.asyncio
    async def test_filter_by_context(self, event_manager: EventManager) -> None:
        """Filtered subscribers only receive their button's events."""
        sub_all = event_manager.subscribe()
        sub_filtered = event_manager.subscribe(context="ctx-1")

        await event_manager.emit_button_attached("ctx-1", "github.action")
        await event_manager.emit_button_detached("ctx-2")

        received1 = await asyncio.wait_for(sub_all.queue.get(), timeout=1.0)
        received2 = await asyncio.wait_for(sub_all.queue.get(), timeout=1.0)
        assert received1.event_type == EventType.BUTTON_ATTACHED
        assert received2.event_type == EventType.BUTTON_DETACHED

        received = await asyncio.wait_for(sub_filtered.queue.get(), timeout=1.0)
        assert received.data == {"context": "ctx-1", "action": "github.action"}
        assert sub_filtered.queue.empty()

    @pytest.mark.asyncio
    async def test_no_subscribers(self, event_manager: EventManager) -> None:
        await event_manager.emit_button_detached("ctx-1")

    @pytest.mark.asyncio
    async def test_refresh_complete_carries_plan(self, event_manager: EventManager) -> None:
        sub = event_manager.subscribe()
        targets = [Target(id="11", position=0), Target(id="12", position=1)]
        button = Button(context="ctx-1", action="azure.pipelinestatus", settings=None)
        button.last_plan = aggregate(targets, ["succeeded", "failed"], SourceKind.AZURE_PIPELINE)

        await event_manager.emit_refresh_complete(button)

        event = sub.queue.get_nowait()
        assert event.event_type == EventType.REFRESH_COMPLETE
        assert event.data["symbol_line"] == "✓ ✗"
        assert event.data["colors"] == ["#28a745", "#dc3545"]
        assert event.data["priority_target"] == "12"

    @pytest.mark.asyncio
    async def test_refresh_complete_without_plan(self, event_manager: EventManager) -> None:
        sub = event_manager.subscribe()
        button = Button(context="ctx-1", action="azure.prcount", settings=None)

        await event_manager.emit_refresh_complete(button)

        event = sub.queue.get_nowait()
        assert "symbol_line" not in event.data
        assert event.data["timestamp"].endswith("Z")


@pytest.mark.unit
class TestEventFormat:
    """Tests for SSE formatting."""

    def test_to_sse(self) -> None:
        event = Event(event_type=EventType.SET_TITLE, context="c", data={"title": "PR\n3"})

        sse = event.to_sse()

        lines = sse.split("\n")
        assert lines[0] == "event: set_title"
        assert json.loads(lines[1].removeprefix("data: ")) == {"title": "PR\n3"}
        assert sse.endswith("\n\n")

    def test_heartbeat(self, event_manager: EventManager) -> None:
        event = event_manager.create_heartbeat_event()

        assert event.event_type == EventType.HEARTBEAT
        assert event.context is None


@pytest.mark.unit
class TestEventSurface:
    """Tests for EventSurface."""

    @pytest.mark.asyncio
    async def test_forwards_display_commands(self, event_manager: EventManager) -> None:
        sub = event_manager.subscribe(context="ctx-1")
        surface = EventSurface(event_manager)

        await surface.set_title("ctx-1", "Build\n--")
        await surface.set_image("ctx-1", "data:image/png;base64,AAAA")
        await surface.open_url("ctx-1", "https://github.com")

        events = [sub.queue.get_nowait() for _ in range(3)]
        assert [e.event_type for e in events] == [
            EventType.SET_TITLE,
            EventType.SET_IMAGE,
            EventType.OPEN_URL,
        ]
        assert events[0].data["title"] == "Build\n--"
        assert events[2].data["url"] == "https://github.com"
