"""Server-Sent Events (SSE) endpoint."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

from deckstatus.api.dependencies import EventManagerDep

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/stream")
async def event_stream(
    event_manager: EventManagerDep,
    context: str | None = Query(default=None, description="Filter by button context"),
) -> StreamingResponse:
    """Subscribe to Server-Sent Events stream.

    The device bridge applies set_title, set_image and open_url events to
    its keys. Events are filtered by context if provided. A heartbeat is
    sent every 30 seconds to keep the connection alive.
    """
    subscriber = event_manager.subscribe(context)

    async def generate() -> AsyncGenerator[str, None]:
        try:
            while True:
                try:
                    # Wait for event with timeout for heartbeat
                    event = await asyncio.wait_for(
                        subscriber.queue.get(),
                        timeout=event_manager._heartbeat_interval,
                    )
                    yield event.to_sse()
                except TimeoutError:
                    yield event_manager.create_heartbeat_event().to_sse()
        finally:
            event_manager.unsubscribe(subscriber.id)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
