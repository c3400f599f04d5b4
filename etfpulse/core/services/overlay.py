"""Best-effort realtime price overlay.

The realtime batch either succeeds as a whole or is ignored as a whole: a
failed fetch never touches prices, it only annotates every record.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from etfpulse.core.exceptions import SecondaryFetchError
from etfpulse.core.logging import get_logger
from etfpulse.core.models import FundRecord, ProvenanceLabels, RealtimeQuote
from etfpulse.core.services.premium import compute_change, compute_premium

logger = get_logger(__name__)


class QuoteSource(Protocol):
    """Anything able to fetch a batch of realtime quotes."""

    name: str

    async def fetch_quotes(self, codes: Sequence[str]) -> dict[str, RealtimeQuote]: ...


@dataclass(frozen=True)
class OverlayOutcome:
    """Result of the single realtime batch call."""

    quotes: dict[str, RealtimeQuote] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def fetch_overlay(source: QuoteSource, codes: Sequence[str]) -> OverlayOutcome:
    """Fetch the realtime batch, converting a source failure into an outcome."""
    try:
        quotes = await source.fetch_quotes(codes)
    except SecondaryFetchError as exc:
        logger.warning(
            "Realtime overlay unavailable: {error}",
            error=exc.message,
            source=source.name,
            error_code=exc.error_code,
        )
        return OverlayOutcome(error=exc.message)
    return OverlayOutcome(quotes=quotes)


def apply_overlay(
    records: Sequence[FundRecord],
    outcome: OverlayOutcome,
    labels: ProvenanceLabels,
) -> int:
    """Apply ``outcome`` to ``records`` in place.

    Returns:
        Number of records whose price was taken from the realtime source.
    """
    if not outcome.ok:
        for record in records:
            record.price_from = labels.primary_price
            record.add_note(f"{labels.secondary} unavailable, price from {labels.primary}")
        return 0

    overridden = 0
    for record in records:
        quote = outcome.quotes.get(record.code)
        if quote is None:
            continue
        if quote.name and not record.name:
            record.name = quote.name
        if quote.volume is not None:
            record.volume = quote.volume
        if quote.price is None:
            continue

        record.price = quote.price
        record.price_from = labels.secondary_price
        overridden += 1
        record.price_chg_pct = compute_change(quote.price, quote.prev_close)
        # Realtime price always wins over the reconciled premium
        premium = compute_premium(quote.price, record.nav)
        if premium is not None:
            record.premium_pct = premium
            record.premium_from = labels.premium_overlay
    return overridden


__all__ = ["OverlayOutcome", "QuoteSource", "apply_overlay", "fetch_overlay"]
