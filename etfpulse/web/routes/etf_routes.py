"""
ETF valuation routes.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from etfpulse.core.config import EtfPulseConfig
from etfpulse.core.logging import log_context, logger
from etfpulse.core.services.valuation import EtfValuationService
from etfpulse.web.models import ErrorResponse, ValuationResponse
from etfpulse.web.utils import get_request_id

router = APIRouter()


def get_valuation_service(request: Request) -> EtfValuationService:
    """Dependency returning the service created at startup."""
    return request.app.state.valuation_service


def get_config(request: Request) -> EtfPulseConfig:
    return request.app.state.config


@router.get(
    "/etf",
    response_model=ValuationResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_etf_valuations(
    request: Request,
    codes: str | None = Query(None, description="Comma separated fund codes, e.g. 0050,00878"),
    service: EtfValuationService = Depends(get_valuation_service),
    config: EtfPulseConfig = Depends(get_config),
) -> JSONResponse:
    """
    NAV, price and premium/discount for the requested fund codes

    - **codes**: comma separated, case-insensitive
    """
    request_id = get_request_id(request)
    with log_context(trace_id=request_id, endpoint="/api/etf"):
        logger.info("Valuation requested", codes=codes)
        result = await service.get_valuations(codes)

    return JSONResponse(
        content=result.to_payload(),
        headers={
            "Cache-Control": config.cache_control.header_value(),
            "X-Request-ID": request_id,
        },
    )
