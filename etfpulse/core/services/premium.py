"""Premium/discount computation and reconciliation against the source value."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from etfpulse.core.logging import get_logger
from etfpulse.core.models import FundRecord, ProvenanceLabels

logger = get_logger(__name__)

DEFAULT_DIVERGENCE_THRESHOLD = 1.0

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    try:
        return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return value


def compute_premium(price: float | None, nav: float | None) -> float | None:
    """Premium (+) or discount (-) of ``price`` over ``nav`` in percent.

    ``None`` unless both inputs are present and ``nav`` is non-zero.
    """
    if price is None or nav is None or nav == 0:
        return None
    return round2((price - nav) / nav * 100)


def compute_diff(price: float | None, nav: float | None) -> float | None:
    """Price minus NAV; ``None`` unless both are present."""
    if price is None or nav is None:
        return None
    return round2(price - nav)


def compute_change(price: float | None, prev_close: float | None) -> float | None:
    """Change of ``price`` over the previous close in percent."""
    if price is None or prev_close is None or prev_close == 0:
        return None
    return round2((price - prev_close) / prev_close * 100)


def reconcile_premium(
    record: FundRecord,
    labels: ProvenanceLabels,
    *,
    threshold: float = DEFAULT_DIVERGENCE_THRESHOLD,
) -> FundRecord:
    """Finalize ``record.premium_pct`` in place and return the record.

    The parsed premium is kept unless it is missing or differs from the
    locally computed value by more than ``threshold`` percentage points.
    """
    parsed = record.premium_pct
    computed = compute_premium(record.price, record.nav)

    if computed is not None and (parsed is None or abs(parsed - computed) > threshold):
        if parsed is not None:
            logger.info(
                "Source premium diverges from computed value, overriding",
                code=record.code,
                parsed=parsed,
                computed=computed,
            )
        record.premium_pct = computed
        record.premium_from = labels.premium_computed
    elif parsed is not None:
        record.premium_from = labels.premium_parsed
    else:
        record.premium_pct = None
        record.premium_from = None
    return record


__all__ = [
    "DEFAULT_DIVERGENCE_THRESHOLD",
    "compute_change",
    "compute_diff",
    "compute_premium",
    "reconcile_premium",
    "round2",
]
