"""
HTTP adapter for upstream sources.

Provides the shared ``httpx.AsyncClient`` factory and a small base class that
times every fetch and records it in the metrics collector. No retries are
performed: a request degrades once and moves on.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from etfpulse.core.config import SourceConfig, TransportConfig
from etfpulse.core.logging import get_logger
from etfpulse.core.monitoring import MetricsCollector, get_metrics_collector

logger = get_logger(__name__)


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    timeout: float = 15.0
    verify_ssl: bool = True
    max_connections: int = 20
    user_agent: str = "etfpulse/0.1.0"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_connections <= 0:
            raise ValueError("max_connections must be positive")

    @classmethod
    def from_settings(cls, transport: TransportConfig, sources: SourceConfig) -> "HttpConfig":
        return cls(
            timeout=transport.timeout,
            verify_ssl=transport.verify_ssl,
            max_connections=transport.max_connections,
            user_agent=sources.user_agent,
        )


def create_async_client(
    config: HttpConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the ``httpx.AsyncClient`` shared by all upstream sources."""

    config = config or HttpConfig()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout),
        follow_redirects=True,
        verify=config.verify_ssl,
        limits=httpx.Limits(max_connections=config.max_connections),
        headers={"User-Agent": config.user_agent, **config.headers},
        transport=transport,
    )


class HttpSource:
    """Base class for an upstream source reached over HTTP."""

    def __init__(
        self,
        name: str,
        client: httpx.AsyncClient,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.name = name
        self._client = client
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET ``url``; transport errors propagate as ``httpx.HTTPError``."""

        start = time.perf_counter()
        try:
            response = await self._client.get(url, **kwargs)
        except httpx.HTTPError:
            self.metrics.observe_fetch(self.name, time.perf_counter() - start, success=False)
            raise
        elapsed = time.perf_counter() - start
        self.metrics.observe_fetch(self.name, elapsed, success=response.is_success)
        logger.debug(
            "Fetched {url} -> {status} in {elapsed_ms}ms",
            url=str(response.request.url),
            status=response.status_code,
            elapsed_ms=round(elapsed * 1000, 2),
            source=self.name,
        )
        return response


__all__ = ["HttpConfig", "HttpSource", "create_async_client"]
