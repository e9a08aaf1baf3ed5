"""Periodic fetch-and-publish loop."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Optional, Union

import httpx

from ..monitoring.metrics import KittyMetrics
from ..upstream.client import FETCH_TIMEOUT_SECONDS, FetchError, fetch_kitty

logger = logging.getLogger(__name__)


async def _wait(stop: asyncio.Event, seconds: float) -> bool:
    """Sleep up to ``seconds``; return True if ``stop`` was set meanwhile."""

    try:
        await asyncio.wait_for(stop.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return False
    return True


async def run_poller(
    client: httpx.AsyncClient,
    url: str,
    delay: Union[timedelta, float],
    metrics: KittyMetrics,
    stop: asyncio.Event,
    timeout: Optional[float] = FETCH_TIMEOUT_SECONDS,
) -> int:
    """Poll ``url`` until ``stop`` is set and return the number of polls made.

    The first poll happens right away. A failed poll is logged and nothing is
    published for it; the next poll still waits the full delay.
    """

    seconds = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)
    polls = 0

    while not stop.is_set():
        polls += 1
        try:
            response = await fetch_kitty(client, url, timeout=timeout)
        except FetchError as exc:
            logger.error("failed to get data from %s: %s", url, exc)
        except Exception:
            logger.exception("unexpected error while polling %s", url)
        else:
            metrics.publish(response)
            logger.debug(
                "Published kitty %s: %d contributions, %d collected",
                response.kitty.id,
                response.kitty.contributions_counter,
                response.kitty.total_collected_amount,
            )

        if await _wait(stop, seconds):
            break

    logger.info("Data grabber stopped after %d polls", polls)
    return polls


__all__ = ["run_poller"]
