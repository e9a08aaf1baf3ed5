"""Background workers for the Lyf exporter."""

from .poller import run_poller

__all__ = ["run_poller"]
