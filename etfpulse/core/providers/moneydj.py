"""MoneyDJ fundamentals page source (primary)."""

from __future__ import annotations

import httpx

from etfpulse.core.config import SourceConfig
from etfpulse.core.exceptions import PrimaryFetchError
from etfpulse.core.http_adapter import HttpSource
from etfpulse.core.models import FundRecord, ProvenanceLabels
from etfpulse.core.monitoring import MetricsCollector
from etfpulse.core.services.extraction import build_record
from etfpulse.core.services.text_normalizer import normalize_text


class MoneyDJSource(HttpSource):
    """Fetches one fund page per code and extracts its base record."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: SourceConfig | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.config = config or SourceConfig()
        super().__init__(self.config.primary_name, client, metrics=metrics)

    def build_url(self, code: str) -> str:
        return self.config.primary_url_template.format(symbol=f"{code}{self.config.market_suffix}")

    async def fetch_page(self, code: str) -> str:
        """Return the raw page body for ``code``.

        Raises:
            PrimaryFetchError: on transport failure or a non-success status.
        """
        url = self.build_url(code)
        try:
            response = await self._get(url, headers={"Accept": "text/html,application/xhtml+xml"})
        except httpx.HTTPError as exc:
            raise PrimaryFetchError(
                f"{self.name} request for {code} failed: {exc}",
                provider_name=self.name,
                code=code,
                details={"error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            raise PrimaryFetchError(
                f"upstream error {response.status_code} {response.reason_phrase}".strip(),
                provider_name=self.name,
                code=code,
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )
        return response.text

    async def fetch_record(self, code: str, labels: ProvenanceLabels) -> FundRecord:
        """Fetch, normalize and extract the provisional record for ``code``."""
        page = await self.fetch_page(code)
        return build_record(code, normalize_text(page), labels)


__all__ = ["MoneyDJSource"]
