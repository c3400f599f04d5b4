"""Core data models."""

from etfpulse.core.models.fund import FundRecord, ProvenanceLabels, RealtimeQuote, ValuationResult

__all__ = ["FundRecord", "ProvenanceLabels", "RealtimeQuote", "ValuationResult"]
