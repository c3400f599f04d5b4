"""
FastAPI application factory and wiring.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from etfpulse import __version__
from etfpulse.core.config import ConfigManager, EtfPulseConfig
from etfpulse.core.exceptions import (
    EtfPulseError,
    ErrorCode,
    InvalidRequestError,
    ProviderError,
    format_error_response,
)
from etfpulse.core.http_adapter import HttpConfig, create_async_client
from etfpulse.core.logging import configure_logging, logger
from etfpulse.core.services.valuation import EtfValuationService
from etfpulse.web.routes import etf_router, health_router, metrics_router
from etfpulse.web.utils import get_request_id


def create_app(
    config: EtfPulseConfig | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: configuration, loaded from file and environment when omitted
        http_client: shared upstream client; created (and closed) by the app
            when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        resolved = config or ConfigManager().get_config()
        configure_logging(resolved.logging.level, file_path=resolved.logging.file)

        owns_client = http_client is None
        client = http_client or create_async_client(HttpConfig.from_settings(resolved.transport, resolved.sources))

        app.state.config = resolved
        app.state.start_time = time.time()
        app.state.valuation_service = EtfValuationService.from_config(client, resolved)
        logger.info("etfpulse web service started", version=__version__)

        yield

        if owns_client:
            await client.aclose()

    app = FastAPI(
        title="etfpulse",
        description="Near-real-time ETF NAV, market price and premium/discount",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)


def _setup_routes(app: FastAPI) -> None:
    app.include_router(etf_router, prefix="/api", tags=["etf"])
    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(metrics_router)


def _status_for(exc: EtfPulseError) -> int:
    if isinstance(exc, InvalidRequestError):
        return 400
    if isinstance(exc, ProviderError):
        return 502
    return 500


def _setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(EtfPulseError)
    async def etfpulse_exception_handler(request: Request, exc: EtfPulseError) -> JSONResponse:
        status_code = _status_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log("Request failed: {detail}", detail=exc.message, error_code=exc.error_code, status=status_code)
        try:
            code = ErrorCode(exc.error_code)
        except ValueError:
            code = ErrorCode.GENERAL_ERROR
        content = format_error_response(code, message=exc.message)
        content["requestId"] = get_request_id(request)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error")
        content = format_error_response(ErrorCode.INTERNAL_ERROR, message="server error")
        content["requestId"] = get_request_id(request)
        return JSONResponse(status_code=500, content=content)


app = create_app()
