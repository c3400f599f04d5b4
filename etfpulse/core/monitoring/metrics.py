"""Prometheus metrics helpers for etfpulse."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


_ALLOWED_OVERLAY_OUTCOMES = {"applied", "unavailable"}
_ALLOWED_PREMIUM_SOURCES = {"parsed", "computed", "overlay", "missing"}


class MetricsCollector:
    """Collects upstream fetch and reconciliation metrics."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.fetch_latency_seconds = Histogram(
            "etfpulse_fetch_latency_seconds",
            "Latency distribution for upstream source fetches.",
            ("source",),
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
            registry=self.registry,
        )
        self.fetch_requests_total = Counter(
            "etfpulse_fetch_requests_total",
            "Total count of upstream source fetches.",
            ("source",),
            registry=self.registry,
        )
        self.fetch_failures_total = Counter(
            "etfpulse_fetch_failures_total",
            "Total count of failed upstream source fetches.",
            ("source",),
            registry=self.registry,
        )
        self.overlay_total = Counter(
            "etfpulse_overlay_total",
            "Realtime overlay attempts grouped by outcome.",
            ("outcome",),
            registry=self.registry,
        )
        self.premium_source_total = Counter(
            "etfpulse_premium_source_total",
            "Final premium provenance per record.",
            ("source",),
            registry=self.registry,
        )

    def observe_fetch(self, source: str, latency_seconds: float, *, success: bool = True) -> None:
        """Record one upstream fetch."""

        self.fetch_latency_seconds.labels(source=source).observe(latency_seconds)
        self.fetch_requests_total.labels(source=source).inc()
        if not success:
            self.fetch_failures_total.labels(source=source).inc()

    def record_overlay(self, outcome: str) -> None:
        label = outcome if outcome in _ALLOWED_OVERLAY_OUTCOMES else "__other__"
        self.overlay_total.labels(outcome=label).inc()

    def record_premium_source(self, source: str) -> None:
        label = source if source in _ALLOWED_PREMIUM_SOURCES else "__other__"
        self.premium_source_total.labels(source=label).inc()

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector
