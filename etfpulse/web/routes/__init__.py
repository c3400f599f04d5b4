"""
Web API routes.
"""

from etfpulse.web.routes.etf_routes import router as etf_router
from etfpulse.web.routes.health_routes import router as health_router
from etfpulse.web.routes.metrics_routes import router as metrics_router

__all__ = ["etf_router", "health_router", "metrics_router"]
