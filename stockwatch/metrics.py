# stockwatch/metrics.py
from __future__ import annotations
from prometheus_client import Counter, Histogram, generate_latest, REGISTRY

from .events import DispatchResult

DISPATCHES_TOTAL = Counter(
    "stockwatch_dispatches_total",
    "Price dispatches performed",
    ["symbol"]
)

NOTIFICATIONS_TOTAL = Counter(
    "stockwatch_notifications_total",
    "Per-subscriber notification outcomes",
    ["outcome"]  # delivered|failed|skipped
)

DISPATCH_LATENCY_SECONDS = Histogram(
    "stockwatch_dispatch_latency_seconds",
    "Time spent fanning out one price to all subscribers",
    ["symbol"]
)


def record_dispatch(symbol: str, result: DispatchResult, duration: float) -> None:
    DISPATCHES_TOTAL.labels(symbol=symbol).inc()
    DISPATCH_LATENCY_SECONDS.labels(symbol=symbol).observe(duration)
    NOTIFICATIONS_TOTAL.labels(outcome="delivered").inc(len(result.delivered))
    NOTIFICATIONS_TOTAL.labels(outcome="failed").inc(len(result.failed))
    NOTIFICATIONS_TOTAL.labels(outcome="skipped").inc(len(result.skipped))


def render_prometheus() -> bytes:
    """Text exposition of the default registry (printed by the demo at DEBUG)."""
    return generate_latest(REGISTRY)
