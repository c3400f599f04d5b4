"""
Prometheus metrics route.
"""

from fastapi import APIRouter, Depends, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST

from etfpulse.core.monitoring import MetricsCollector

router = APIRouter()


def get_service_metrics(request: Request) -> MetricsCollector:
    """Dependency returning the collector the valuation service records into."""
    return request.app.state.valuation_service.metrics


@router.get("/metrics", include_in_schema=False)
def metrics_endpoint(collector: MetricsCollector = Depends(get_service_metrics)) -> Response:
    """Fetch, overlay and premium-source counters in Prometheus text format."""
    return Response(
        content=collector.render(),
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-store"},
    )
