"""Prometheus exporter for Lyf kitty counters."""

__all__ = [
    "cli",
    "config",
    "logging_utils",
    "main",
    "monitoring",
    "upstream",
    "worker",
]

__version__ = "0.1.0"
