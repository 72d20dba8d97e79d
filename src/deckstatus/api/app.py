"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckstatus import __version__
from deckstatus.api.dependencies import (
    close_event_manager,
    close_registry,
    init_event_manager,
    init_registry,
)
from deckstatus.api.events import EventSurface
from deckstatus.api.models import APIResponse
from deckstatus.api.routes import buttons, events
from deckstatus.config import DeckStatusConfig
from deckstatus.registry import (
    ButtonExistsError,
    ButtonNotFoundError,
    ButtonRegistry,
    RegistryError,
    UnknownActionError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("deckstatus.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    config: DeckStatusConfig = app.state.config

    # Startup
    event_manager = init_event_manager()
    registry = init_registry(
        ButtonRegistry(
            EventSurface(event_manager),
            fetch_timeout=config.http.timeout,
            on_refresh_complete=event_manager.emit_refresh_complete,
        )
    )
    for entry in config.buttons:
        await registry.attach(entry.context, entry.action, entry.settings)
    logger.info("HTTP bridge started with %d configured button(s)", len(config.buttons))

    yield
    # Shutdown
    await close_registry()
    close_event_manager()


def create_app(config: DeckStatusConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="deckstatus API",
        description="HTTP bridge between a keypad plugin host and deckstatus buttons",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.config = config if config is not None else DeckStatusConfig()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(ButtonNotFoundError)
    async def button_not_found_handler(
        _request: Request, _exc: ButtonNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Button not found").model_dump(),
        )

    @app.exception_handler(UnknownActionError)
    async def unknown_action_handler(_request: Request, exc: UnknownActionError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(ButtonExistsError)
    async def button_exists_handler(_request: Request, _exc: ButtonExistsError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=APIResponse[None](
                data=None, error="Button with this context already attached"
            ).model_dump(),
        )

    @app.exception_handler(RegistryError)
    async def registry_error_handler(_request: Request, _exc: RegistryError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(buttons.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
