from __future__ import annotations

import pytest

from etfpulse.core.models import FundRecord
from etfpulse.core.services.premium import (
    compute_change,
    compute_diff,
    compute_premium,
    reconcile_premium,
    round2,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (3.0612244897959182, 3.06),
        (0.125, 0.13),
        (-0.125, -0.13),
        (1.005, 1.01),
        (-2.675, -2.68),
        (0.0, 0.0),
    ],
)
def test_round2_rounds_half_away_from_zero(value: float, expected: float) -> None:
    assert round2(value) == expected


def test_compute_premium() -> None:
    assert compute_premium(103.0, 100.0) == 3.0
    assert compute_premium(97.5, 100.0) == -2.5
    assert compute_premium(101.0, 98.0) == 3.06


@pytest.mark.parametrize(("price", "nav"), [(None, 100.0), (100.0, None), (100.0, 0.0), (None, None)])
def test_compute_premium_requires_price_and_nonzero_nav(price: float | None, nav: float | None) -> None:
    assert compute_premium(price, nav) is None


def test_compute_diff() -> None:
    assert compute_diff(101.0, 98.0) == 3.0
    assert compute_diff(20.95, 21.1) == -0.15
    assert compute_diff(100.0, 0.0) == 100.0
    assert compute_diff(None, 98.0) is None
    assert compute_diff(101.0, None) is None


def test_compute_change_against_previous_close() -> None:
    assert compute_change(101.35, 101.0) == 0.35
    assert compute_change(99.0, 100.0) == -1.0
    assert compute_change(101.0, None) is None
    assert compute_change(101.0, 0.0) is None


def test_divergent_parsed_premium_is_overridden(labels) -> None:
    record = FundRecord(code="0050", price=103.0, nav=100.0, premium_pct=5.0)

    reconcile_premium(record, labels)

    assert record.premium_pct == 3.0
    assert record.premium_from == "Computed from MoneyDJ price & NAV"


def test_close_parsed_premium_is_kept(labels) -> None:
    record = FundRecord(code="0050", price=103.0, nav=100.0, premium_pct=3.4)

    reconcile_premium(record, labels)

    assert record.premium_pct == 3.4
    assert record.premium_from == "MoneyDJ (parsed)"


def test_divergence_exactly_at_threshold_keeps_parsed(labels) -> None:
    record = FundRecord(code="0050", price=103.0, nav=100.0, premium_pct=2.0)

    reconcile_premium(record, labels)

    assert record.premium_pct == 2.0
    assert record.premium_from == "MoneyDJ (parsed)"


def test_missing_parsed_premium_is_computed(labels) -> None:
    record = FundRecord(code="0050", price=97.5, nav=100.0)

    reconcile_premium(record, labels)

    assert record.premium_pct == -2.5
    assert record.premium_from == "Computed from MoneyDJ price & NAV"


def test_parsed_premium_kept_when_nothing_to_compare(labels) -> None:
    record = FundRecord(code="0050", price=None, nav=100.0, premium_pct=0.8)

    reconcile_premium(record, labels)

    assert record.premium_pct == 0.8
    assert record.premium_from == "MoneyDJ (parsed)"


def test_no_premium_at_all(labels) -> None:
    record = FundRecord(code="0050", price=31.2, nav=None)

    reconcile_premium(record, labels)

    assert record.premium_pct is None
    assert record.premium_from is None


def test_custom_threshold(labels) -> None:
    record = FundRecord(code="0050", price=103.0, nav=100.0, premium_pct=3.4)

    reconcile_premium(record, labels, threshold=0.1)

    assert record.premium_pct == 3.0
    assert record.premium_from == "Computed from MoneyDJ price & NAV"
