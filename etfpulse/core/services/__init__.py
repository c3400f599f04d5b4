"""Reconciliation pipeline services."""

from etfpulse.core.services.extraction import build_record, extract_fields, parse_number
from etfpulse.core.services.overlay import OverlayOutcome, apply_overlay, fetch_overlay
from etfpulse.core.services.premium import compute_premium, reconcile_premium, round2
from etfpulse.core.services.text_normalizer import normalize_text

__all__ = [
    "OverlayOutcome",
    "apply_overlay",
    "build_record",
    "compute_premium",
    "extract_fields",
    "fetch_overlay",
    "normalize_text",
    "parse_number",
    "reconcile_premium",
    "round2",
]
