"""etfpulse - near-real-time ETF NAV, price and premium/discount.

Scrapes the MoneyDJ fund page for NAV and price, freshens the price from the
TWSE realtime feed and reconciles the premium/discount percentage.
"""

import asyncio
from collections.abc import Sequence

from etfpulse.core.config import ConfigManager, EtfPulseConfig
from etfpulse.core.http_adapter import HttpConfig, create_async_client
from etfpulse.core.models import FundRecord, ValuationResult
from etfpulse.core.services.valuation import EtfValuationService, parse_codes

__version__ = "0.1.0"


async def get_valuations_async(
    codes: str | Sequence[str],
    config: EtfPulseConfig | None = None,
) -> ValuationResult:
    """Fetch reconciled valuations for ``codes``.

    Args:
        codes: comma separated string or list of fund codes
        config: configuration (defaults to file + environment)

    Returns:
        ValuationResult with one record per requested code.

    Examples:
        >>> import etfpulse
        >>> result = etfpulse.get_valuations(["0050", "00878"])
        >>> result.by_code["0050"].premium_pct
    """
    config = config or ConfigManager().get_config()
    http_config = HttpConfig.from_settings(config.transport, config.sources)
    async with create_async_client(http_config) as client:
        service = EtfValuationService.from_config(client, config)
        return await service.get_valuations(codes)


def get_valuations(
    codes: str | Sequence[str],
    config: EtfPulseConfig | None = None,
) -> ValuationResult:
    """Synchronous wrapper around :func:`get_valuations_async`."""
    return asyncio.run(get_valuations_async(codes, config))


__all__ = [
    "EtfPulseConfig",
    "EtfValuationService",
    "FundRecord",
    "ValuationResult",
    "get_valuations",
    "get_valuations_async",
    "parse_codes",
]
