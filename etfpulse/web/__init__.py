"""
Web API module - FastAPI service.
"""

from etfpulse.web.app import create_app
from etfpulse.web.models import ErrorResponse, ValuationResponse
from etfpulse.web.routes import etf_router, health_router, metrics_router

__all__ = ["create_app", "etf_router", "health_router", "metrics_router", "ErrorResponse", "ValuationResponse"]
