"""HTTP surface and process supervision for the exporter."""

from __future__ import annotations

import asyncio
import logging
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from . import __version__
from .config import Settings
from .monitoring.debug import debug_router
from .monitoring.metrics import KittyMetrics, metrics_router
from .worker.poller import run_poller

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime


def create_app(metrics: KittyMetrics) -> FastAPI:
    app = FastAPI(title="Lyf Exporter", version=__version__, docs_url=None, redoc_url=None)
    app.include_router(metrics_router(metrics.registry))
    app.include_router(debug_router)

    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def health_check() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(timezone.utc))

    return app


async def run_service(
    settings: Settings,
    metrics: KittyMetrics,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """Serve ``/metrics`` and poll the API until one of the two stops.

    Whichever task ends first, on purpose or by crashing, stops the other.
    """

    stop = asyncio.Event()
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(metrics),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            access_log=False,
            log_config=None,
        )
    )

    async with (httpx.AsyncClient() if client is None else nullcontext(client)) as http:
        logger.info("starting server on %s:%d", settings.host, settings.port)
        logger.info("starting data grabber every %ss for %s", settings.delay.total_seconds(), settings.url)
        serve_task = asyncio.create_task(server.serve(), name="serve")
        poll_task = asyncio.create_task(
            run_poller(http, settings.url, settings.delay, metrics, stop), name="poll"
        )
        tasks = {serve_task, poll_task}

        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop.set()
            server.should_exit = True

        # The poller returns at its next wait; anything still busy after the
        # grace period is cancelled.
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=5)
            for task in still_pending:
                task.cancel()
            await asyncio.gather(*still_pending, return_exceptions=True)

        for task in tasks:
            if task.cancelled():
                continue
            exc = task.exception()
            if exc is not None:
                logger.error("%s task failed", task.get_name(), exc_info=exc)
                raise exc

    logger.info("Lyf exporter stopped")


__all__ = ["HealthResponse", "create_app", "run_service"]
