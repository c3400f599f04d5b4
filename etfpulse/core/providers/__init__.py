"""Upstream data sources."""

from etfpulse.core.providers.moneydj import MoneyDJSource
from etfpulse.core.providers.twse import TwseRealtimeSource, parse_quote

__all__ = ["MoneyDJSource", "TwseRealtimeSource", "parse_quote"]
