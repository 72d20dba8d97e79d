"""Integration tests for the SSE stream served by uvicorn."""

import threading
import time

import httpx
import pytest
import uvicorn

from deckstatus.api.app import create_app
from deckstatus.api.dependencies import get_event_manager
from deckstatus.config import ButtonConfig, DeckStatusConfig

PORT = 8766


@pytest.fixture
def server():
    """Start the app in a background thread."""
    app = create_app(
        DeckStatusConfig(
            buttons=[
                ButtonConfig(
                    context="repo-key",
                    action="github.action",
                    settings={"owner": "octo", "repo": "app"},
                )
            ]
        )
    )
    config = uvicorn.Config(app, host="127.0.0.1", port=PORT, log_level="error")
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run)
    thread.daemon = True
    thread.start()

    # Wait for server to start
    time.sleep(0.5)
    yield f"http://127.0.0.1:{PORT}"

    server.should_exit = True
    thread.join(timeout=2)


@pytest.mark.integration
class TestSSEStream:
    """Tests for /events/stream."""

    def test_connection_opens(self, server: str) -> None:
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", f"{server}/api/v1/events/stream") as response,
        ):
            assert response.status_code == 200
            assert response.headers["content-type"] == "text/event-stream; charset=utf-8"

    def test_receives_heartbeat(self, server: str) -> None:
        next(get_event_manager())._heartbeat_interval = 1

        received_heartbeat = False
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", f"{server}/api/v1/events/stream") as response,
        ):
            for line in response.iter_lines():
                if "event: heartbeat" in line:
                    received_heartbeat = True
                    break

        assert received_heartbeat

    def test_key_up_streams_open_url(self, server: str) -> None:
        """The bridge learns which URL to open from the stream."""

        def release_key_after_delay():
            time.sleep(0.3)
            httpx.post(f"{server}/api/v1/buttons/repo-key/key-up")

        releaser = threading.Thread(target=release_key_after_delay)
        releaser.start()

        lines = []
        url = f"{server}/api/v1/events/stream?context=repo-key"
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", url) as response,
        ):
            for line in response.iter_lines():
                lines.append(line)
                if len(lines) > 1 and lines[-2] == "event: open_url":
                    break

        releaser.join()
        assert "event: open_url" in lines
        assert "https://github.com/octo/app" in lines[-1]
