"""ETF valuation service: fan out per-code extraction, then overlay once."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from typing import Protocol

import httpx

from etfpulse.core.config import EtfPulseConfig
from etfpulse.core.exceptions import InvalidRequestError
from etfpulse.core.logging import get_logger
from etfpulse.core.models import FundRecord, ProvenanceLabels, ValuationResult
from etfpulse.core.monitoring import MetricsCollector, get_metrics_collector
from etfpulse.core.providers import MoneyDJSource, TwseRealtimeSource
from etfpulse.core.services.overlay import QuoteSource, apply_overlay, fetch_overlay
from etfpulse.core.services.premium import DEFAULT_DIVERGENCE_THRESHOLD, compute_diff, reconcile_premium

logger = get_logger(__name__)


class RecordSource(Protocol):
    """Anything able to produce the provisional record for one code."""

    name: str

    async def fetch_record(self, code: str, labels: ProvenanceLabels) -> FundRecord: ...


def parse_codes(raw: str | Iterable[str] | None) -> list[str]:
    """Split, trim, uppercase and de-duplicate fund codes, keeping order."""
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else [piece for item in raw for piece in item.split(",")]
    cleaned = (part.strip().upper() for part in parts)
    return list(dict.fromkeys(code for code in cleaned if code))


class EtfValuationService:
    """Reconciles primary page data and realtime quotes into one record per code."""

    def __init__(
        self,
        primary: RecordSource,
        secondary: QuoteSource,
        *,
        divergence_threshold: float = DEFAULT_DIVERGENCE_THRESHOLD,
        metrics: MetricsCollector | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._threshold = divergence_threshold
        self._metrics = metrics
        self._clock = clock or (lambda: datetime.now(UTC))
        self.labels = ProvenanceLabels(primary=primary.name, secondary=secondary.name)

    @classmethod
    def from_config(
        cls,
        client: httpx.AsyncClient,
        config: EtfPulseConfig | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ) -> "EtfValuationService":
        """Wire the MoneyDJ and TWSE sources on a shared HTTP client."""
        config = config or EtfPulseConfig()
        return cls(
            MoneyDJSource(client, config.sources, metrics=metrics),
            TwseRealtimeSource(client, config.sources, metrics=metrics),
            divergence_threshold=config.reconcile.divergence_threshold,
            metrics=metrics,
        )

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    @property
    def source_description(self) -> str:
        return f"{self._primary.name} ETF page (NAV/price/premium) + {self._secondary.name} (price overlay)"

    async def get_valuations(self, codes: str | Sequence[str] | None) -> ValuationResult:
        """Return one reconciled record per requested code.

        Raises:
            InvalidRequestError: no usable code was supplied.
            PrimaryFetchError: any code's primary page could not be fetched.
        """
        requested = parse_codes(codes)
        if not requested:
            raise InvalidRequestError("missing codes, e.g. ?codes=0050,00878")

        records = await self._extract_all(requested)

        outcome = await fetch_overlay(self._secondary, requested)
        overridden = apply_overlay(records, outcome, self.labels)
        self.metrics.record_overlay("applied" if outcome.ok else "unavailable")
        for record in records:
            record.diff = compute_diff(record.price, record.nav)
            self.metrics.record_premium_source(self._premium_category(record))

        logger.info(
            "Valuation completed for {count} codes",
            count=len(records),
            overlay_ok=outcome.ok,
            overridden=overridden,
        )
        return ValuationResult(
            items=records,
            updated_at=self._clock(),
            source=self.source_description,
            overlay_applied=outcome.ok,
        )

    async def _extract_all(self, codes: Sequence[str]) -> list[FundRecord]:
        results = await asyncio.gather(*(self._extract(code) for code in codes), return_exceptions=True)
        for code, result in zip(codes, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Primary fetch failed for {code}: {error}",
                    code=code,
                    error=str(result),
                    source=self._primary.name,
                    error_code=getattr(result, "error_code", None),
                )
                raise result
        return list(results)

    async def _extract(self, code: str) -> FundRecord:
        record = await self._primary.fetch_record(code, self.labels)
        return reconcile_premium(record, self.labels, threshold=self._threshold)

    def _premium_category(self, record: FundRecord) -> str:
        return {
            self.labels.premium_parsed: "parsed",
            self.labels.premium_computed: "computed",
            self.labels.premium_overlay: "overlay",
        }.get(record.premium_from or "", "missing")


__all__ = ["EtfValuationService", "RecordSource", "parse_codes"]
