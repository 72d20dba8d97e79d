"""CLI entry point for deckstatus.

- serve: run the HTTP bridge for the keypad plugin host
- check: refresh every configured button once and print the result
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
import uvicorn

from deckstatus import __version__
from deckstatus.actions import MemorySurface
from deckstatus.config import ConfigError, DeckStatusConfig, load_config, resolve_config_path
from deckstatus.logging import setup_logging
from deckstatus.registry import ButtonRegistry, RegistryError


def _load(config_path: Path | None) -> DeckStatusConfig:
    path = resolve_config_path(config_path)
    if path is None:
        return DeckStatusConfig()
    return load_config(path)


def _setup_logging(config: DeckStatusConfig, verbose: bool) -> None:
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(log_dir=config.logging.dir, level=level, console=config.logging.console)


@click.group()
@click.version_option(__version__)
def main() -> None:
    """deckstatus - CI/CD status buttons for a programmable keypad."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to deckstatus.yaml (auto-detected if not specified)",
)
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Bind port (default: from config)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(config_path: Path | None, host: str | None, port: int | None, verbose: bool) -> None:
    """Run the HTTP bridge."""
    try:
        config = _load(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    _setup_logging(config, verbose)

    from deckstatus.api.app import create_app  # noqa: PLC0415

    app = create_app(config)
    uvicorn.run(
        app,
        host=host or config.server.host,
        port=port or config.server.port,
        log_level="debug" if verbose else "info",
    )


async def _check(config: DeckStatusConfig) -> list[tuple[str, str, str]]:
    surface = MemorySurface()
    registry = ButtonRegistry(surface, fetch_timeout=config.http.timeout)
    results = []
    try:
        for entry in config.buttons:
            await registry.attach(entry.context, entry.action, entry.settings)
        for entry in config.buttons:
            button = await registry.refresh(entry.context)
            if button.last_plan is not None:
                shown = button.last_plan.symbol_line
            else:
                shown = surface.titles.get(entry.context, "")
            results.append((entry.context, entry.action, shown.replace("\n", " ")))
    finally:
        await registry.close()
    return results


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to deckstatus.yaml (auto-detected if not specified)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def check(config_path: Path | None, verbose: bool) -> None:
    """Refresh every configured button once and print its status."""
    try:
        config = _load(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    _setup_logging(config, verbose)

    if not config.buttons:
        click.echo("No buttons configured.")
        return

    try:
        results = asyncio.run(_check(config))
    except RegistryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for context, action, shown in results:
        click.echo(f"{context} ({action}): {shown}")


if __name__ == "__main__":
    main()
