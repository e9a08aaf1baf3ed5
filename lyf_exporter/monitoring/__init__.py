"""Monitoring helpers."""

from .debug import debug_router
from .metrics import KITTY_LABELS, KittyMetrics, RegistrationError, metrics_router, register_metrics

__all__ = [
    "KITTY_LABELS",
    "KittyMetrics",
    "RegistrationError",
    "debug_router",
    "metrics_router",
    "register_metrics",
]
