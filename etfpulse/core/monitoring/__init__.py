"""Monitoring module - metrics."""

from etfpulse.core.monitoring.metrics import (
    MetricsCollector,
    configure_metrics_collector,
    get_metrics_collector,
)

__all__ = [
    "MetricsCollector",
    "get_metrics_collector",
    "configure_metrics_collector",
]
