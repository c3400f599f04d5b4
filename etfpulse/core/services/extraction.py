"""Tolerant field extraction from normalized fundamentals-page text."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import cached_property

from etfpulse.core.logging import get_logger
from etfpulse.core.models import FundRecord, ProvenanceLabels

logger = get_logger(__name__)

# Optional "(元)", "(%)", "（％）" style annotation after a label
_ANNOTATION = r"(?:\s*[(（][^)）]{0,12}[)）])?"
_SEPARATOR = r"\s*[:：]?\s*"
_NUMBER = r"([-+]?\d[\d,]*(?:\.\d+)?)(?![\d/\-])"
_DATE = r"(\d{4}\s*[/\-.]\s*\d{1,2}\s*[/\-.]\s*\d{1,2})"


def spaced_label(label: str) -> str:
    """Regex for ``label`` that allows whitespace between its characters."""
    return r"\s*".join(re.escape(char) for char in label)


@dataclass(frozen=True)
class FieldRule:
    """Named extraction rule: any of ``labels`` followed by a ``value`` group."""

    name: str
    labels: tuple[str, ...]
    value: str

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        alternatives = "|".join(spaced_label(label) for label in self.labels)
        return re.compile(f"(?:{alternatives}){_ANNOTATION}{_SEPARATOR}{self.value}")

    def search(self, text: str) -> str | None:
        """Return the first matched value, or ``None``."""
        match = self.pattern.search(text)
        return match.group(1) if match else None


# Longer labels first so "折溢價率" is not consumed as "折溢價"
PRICE_RULE = FieldRule("price", ("市價",), _NUMBER)
NAV_RULE = FieldRule("nav", ("淨值",), _NUMBER)
NAV_DATE_RULE = FieldRule("nav_date", ("淨值日期",), _DATE)
PREMIUM_RULE = FieldRule("premium", ("折溢價率", "折溢價", "溢折價率", "溢折價"), _NUMBER + r"\s*[%％]?")


@dataclass(frozen=True)
class ExtractedFields:
    """Raw typed values found in one page; ``None`` means not found."""

    price: float | None = None
    nav: float | None = None
    nav_date: str | None = None
    premium_pct: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.price is None and self.nav is None and self.nav_date is None and self.premium_pct is None


def parse_number(raw: str | None) -> float | None:
    """Parse a matched numeric token; thousands separators are ignored.

    Non-finite or unparseable values yield ``None``.
    """
    if raw is None:
        return None
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def extract_fields(text: str) -> ExtractedFields:
    """Apply the four field rules independently to normalized ``text``."""
    nav_date = NAV_DATE_RULE.search(text)
    return ExtractedFields(
        price=parse_number(PRICE_RULE.search(text)),
        nav=parse_number(NAV_RULE.search(text)),
        nav_date=re.sub(r"\s+", "", nav_date) if nav_date else None,
        premium_pct=parse_number(PREMIUM_RULE.search(text)),
    )


def build_record(code: str, text: str, labels: ProvenanceLabels) -> FundRecord:
    """Build the provisional record for ``code`` from normalized page text.

    The premium is left as parsed; :func:`reconcile_premium` finalizes it.
    """
    fields = extract_fields(text)
    record = FundRecord(
        code=code,
        nav=fields.nav,
        nav_date=fields.nav_date,
        price=fields.price,
        price_from=labels.primary_price if fields.price is not None else None,
        premium_pct=fields.premium_pct,
        premium_from=labels.premium_parsed if fields.premium_pct is not None else None,
    )
    if fields.is_empty:
        logger.warning("No fields found on primary page", code=record.code)
        record.add_note(f"not found on {labels.primary}")
    return record


__all__ = [
    "ExtractedFields",
    "FieldRule",
    "NAV_DATE_RULE",
    "NAV_RULE",
    "PREMIUM_RULE",
    "PRICE_RULE",
    "build_record",
    "extract_fields",
    "parse_number",
    "spaced_label",
]
