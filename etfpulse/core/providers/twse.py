"""TWSE MIS realtime quote source (secondary)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from etfpulse.core.config import SourceConfig
from etfpulse.core.exceptions import SecondaryFetchError
from etfpulse.core.http_adapter import HttpSource
from etfpulse.core.models import RealtimeQuote
from etfpulse.core.monitoring import MetricsCollector
from etfpulse.core.services.extraction import parse_number


def _usable_price(raw: Any) -> float | None:
    if not isinstance(raw, str):
        return None
    value = parse_number(raw.strip())
    # "-" means no trade yet; zero is never a traded price
    if value is None or value <= 0:
        return None
    return value


def _volume(raw: Any) -> int | None:
    if not isinstance(raw, str):
        return None
    value = parse_number(raw.strip())
    if value is None or value < 0:
        return None
    return int(value)


def parse_quote(entry: Any) -> RealtimeQuote | None:
    """Parse one ``msgArray`` entry; ``None`` when it carries no code."""
    if not isinstance(entry, dict):
        return None
    code = entry.get("c")
    if not isinstance(code, str) or not code.strip():
        return None
    price = _usable_price(entry.get("z"))
    if price is None:
        price = _usable_price(entry.get("pz"))
    name = entry.get("n")
    return RealtimeQuote(
        code=code.strip().upper(),
        price=price,
        name=name.strip() if isinstance(name, str) and name.strip() else None,
        prev_close=_usable_price(entry.get("y")),
        volume=_volume(entry.get("v")),
    )


class TwseRealtimeSource(HttpSource):
    """Fetches realtime quotes for a whole batch of codes in one call."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: SourceConfig | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.config = config or SourceConfig()
        super().__init__(self.config.secondary_name, client, metrics=metrics)

    def build_channel(self, codes: Sequence[str]) -> str:
        """Vendor multi-symbol encoding, e.g. ``tse_0050.tw|tse_00878.tw``."""
        exchange = self.config.secondary_exchange
        return "|".join(f"{exchange}_{code}.tw" for code in codes)

    async def fetch_quotes(self, codes: Sequence[str]) -> dict[str, RealtimeQuote]:
        """Return quotes keyed by code for every symbol present in the reply.

        Raises:
            SecondaryFetchError: on transport failure, non-success status or a
                malformed payload.
        """
        params = {"ex_ch": self.build_channel(codes), "json": "1", "delay": "0"}
        try:
            response = await self._get(self.config.secondary_url, params=params)
        except httpx.HTTPError as exc:
            raise SecondaryFetchError(
                f"{self.name} request failed: {exc}",
                provider_name=self.name,
                details={"error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            raise SecondaryFetchError(
                f"{self.name} returned {response.status_code} {response.reason_phrase}".strip(),
                provider_name=self.name,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SecondaryFetchError(
                f"{self.name} returned malformed JSON",
                provider_name=self.name,
            ) from exc

        entries = payload.get("msgArray") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            raise SecondaryFetchError(
                f"{self.name} payload has no msgArray",
                provider_name=self.name,
            )

        quotes: dict[str, RealtimeQuote] = {}
        for entry in entries:
            quote = parse_quote(entry)
            if quote is not None:
                quotes[quote.code] = quote
        return quotes


__all__ = ["TwseRealtimeSource", "parse_quote"]
