"""Prometheus gauges republishing the kitty counters."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Gauge,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from ..upstream.models import KittyResponse

KITTY_LABELS = ("OwnerFirstName", "OwnerLastName", "OwnerID", "ID")


class RegistrationError(RuntimeError):
    """A gauge could not be added to the registry."""


@dataclass
class KittyMetrics:
    registry: CollectorRegistry
    contributions_counter: Gauge
    total_collected_amount: Gauge

    def publish(self, response: KittyResponse) -> None:
        """Overwrite both gauges at the label tuple of ``response``."""

        kitty = response.kitty
        labels = kitty.label_values
        self.contributions_counter.labels(*labels).set(float(kitty.contributions_counter))
        self.total_collected_amount.labels(*labels).set(float(kitty.total_collected_amount))


def _register(registry: CollectorRegistry, name: str, documentation: str) -> Gauge:
    try:
        return Gauge(name, documentation, KITTY_LABELS, registry=registry)
    except ValueError as exc:
        raise RegistrationError(f"{name} not registered: {exc}") from exc


def register_metrics(registry: CollectorRegistry, runtime_metrics: bool = True) -> KittyMetrics:
    """Create the kitty gauges inside ``registry``.

    With ``runtime_metrics`` the process and platform collectors are added to
    the same registry, so /metrics keeps the usual ``process_*`` and
    ``python_info`` series without relying on the default registry.
    """

    registered = []
    try:
        contributions = _register(registry, "lyf_contributions_counter", "Number of contributions on the kitty")
        registered.append(contributions)
        collected = _register(registry, "lyf_total_collected_amount", "Total collected amount (cents)")
        registered.append(collected)
        if runtime_metrics:
            for collector_class in (ProcessCollector, PlatformCollector):
                try:
                    registered.append(collector_class(registry=registry))
                except ValueError as exc:
                    raise RegistrationError(f"{collector_class.__name__} not registered: {exc}") from exc
    except RegistrationError:
        for collector in registered:
            registry.unregister(collector)
        raise

    return KittyMetrics(
        registry=registry,
        contributions_counter=contributions,
        total_collected_amount=collected,
    )


def metrics_router(registry: CollectorRegistry) -> APIRouter:
    router = APIRouter()

    @router.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return router


__all__ = [
    "KITTY_LABELS",
    "KittyMetrics",
    "RegistrationError",
    "metrics_router",
    "register_metrics",
]
