"""Client and schemas for the Lyf public API."""

from .client import FETCH_TIMEOUT_SECONDS, FetchError, PayloadError, UnexpectedStatusError, fetch_kitty
from .models import Kitty, KittyResponse

__all__ = [
    "FETCH_TIMEOUT_SECONDS",
    "FetchError",
    "Kitty",
    "KittyResponse",
    "PayloadError",
    "UnexpectedStatusError",
    "fetch_kitty",
]
