"""HTTP access to the Lyf public API."""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .models import KittyResponse

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 10.0


class FetchError(Exception):
    """A poll could not produce a kitty record."""


class UnexpectedStatusError(FetchError):
    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        message = f"unexpected HTTP response {status_code}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PayloadError(FetchError):
    """The API answered 200 but the body could not be decoded."""


async def fetch_kitty(
    client: httpx.AsyncClient,
    url: str,
    timeout: Optional[float] = FETCH_TIMEOUT_SECONDS,
) -> KittyResponse:
    """Fetch and decode one kitty record.

    A single attempt is made. Anything other than a 200 with a decodable body
    raises :class:`FetchError`.
    """

    try:
        response = await client.get(url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise FetchError(f"failed to make HTTP request: {exc!r}") from exc

    if response.status_code != httpx.codes.OK:
        raise UnexpectedStatusError(response.status_code, response.reason_phrase)

    try:
        payload = json.loads(response.content)
    except (ValueError, RecursionError) as exc:
        raise PayloadError(f"failed to parse JSON response: {exc}") from exc

    try:
        result = KittyResponse.model_validate(payload)
    except ValidationError as exc:
        raise PayloadError(f"unexpected JSON response: {exc}") from exc

    logger.debug("Fetched kitty %s from %s", result.kitty.id, url)
    return result


__all__ = ["FETCH_TIMEOUT_SECONDS", "FetchError", "PayloadError", "UnexpectedStatusError", "fetch_kitty"]
