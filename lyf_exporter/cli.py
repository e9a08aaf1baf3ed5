"""CLI entrypoint for the Lyf exporter."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from prometheus_client import CollectorRegistry

from .config import ConfigError, Settings, resolve_settings
from .logging_utils import configure_logging
from .main import run_service
from .monitoring.metrics import RegistrationError, register_metrics
from .upstream.client import FetchError, fetch_kitty

logger = logging.getLogger(__name__)

app = typer.Typer(help="Export Lyf kitty counters as Prometheus gauges")


def _load_settings(**overrides) -> Settings:
    try:
        return resolve_settings(**{key: value for key, value in overrides.items() if value is not None})
    except ConfigError as exc:
        logger.error("unable to parse environment variables: %s", exc)
        raise typer.Exit(code=1) from exc


@app.command()
def run(
    log_level: Optional[str] = typer.Option(None, help="Logging level, overrides LYF_LOG_LEVEL"),
    log_file: Optional[Path] = typer.Option(None, help="Log file path, overrides LYF_LOG_FILE"),
) -> None:
    """Serve /metrics and poll the kitty API until interrupted."""

    configure_logging()
    settings = _load_settings(log_level=log_level, log_file=log_file)
    configure_logging(settings)

    try:
        metrics = register_metrics(CollectorRegistry())
    except RegistrationError as exc:
        logger.error("unable to register metrics: %s", exc)
        raise typer.Exit(code=1) from exc

    asyncio.run(run_service(settings, metrics))


@app.command()
def show_config() -> None:
    """Print the active configuration."""

    settings = _load_settings()
    typer.echo(settings.model_dump_json(indent=2))
    typer.echo(f"url: {settings.url}")


@app.command()
def probe() -> None:
    """Fetch the configured kitty once and print the decoded record."""

    settings = _load_settings()

    async def _fetch():
        async with httpx.AsyncClient() as client:
            return await fetch_kitty(client, settings.url)

    try:
        response = asyncio.run(_fetch())
    except FetchError as exc:
        typer.echo(f"failed to get data: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(response.model_dump_json(indent=2, by_alias=True))


if __name__ == "__main__":
    app()
