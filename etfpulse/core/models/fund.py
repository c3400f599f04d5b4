"""Fund valuation models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FundRecord(BaseModel):
    """Best-effort valuation of one fund code.

    Created by the field extractor, adjusted by the premium reconciler and
    optionally by the realtime overlay before being serialized.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: str
    name: str | None = None
    nav: float | None = None
    nav_date: str | None = None
    price: float | None = None
    price_from: str | None = None
    premium_pct: float | None = None
    premium_from: str | None = None
    diff: float | None = None
    price_chg_pct: float | None = None
    volume: int | None = None
    note: str | None = None

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not normalized:
            raise ValueError("code cannot be empty")
        return normalized

    def add_note(self, note: str) -> None:
        """Append ``note`` to any existing note."""
        self.note = f"{self.note}; {note}" if self.note else note

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class RealtimeQuote:
    """One entry of the realtime quote batch."""

    code: str
    price: float | None
    name: str | None = None
    prev_close: float | None = None
    volume: int | None = None


@dataclass(frozen=True)
class ProvenanceLabels:
    """Provenance strings recorded in ``priceFrom`` / ``premiumFrom``."""

    primary: str
    secondary: str

    @property
    def primary_price(self) -> str:
        return self.primary

    @property
    def secondary_price(self) -> str:
        return self.secondary

    @property
    def premium_computed(self) -> str:
        return f"Computed from {self.primary} price & NAV"

    @property
    def premium_parsed(self) -> str:
        return f"{self.primary} (parsed)"

    @property
    def premium_overlay(self) -> str:
        return f"{self.secondary} price vs {self.primary} NAV"


@dataclass
class ValuationResult:
    """Outcome of one valuation request."""

    items: list[FundRecord]
    updated_at: datetime
    source: str
    overlay_applied: bool

    @property
    def by_code(self) -> dict[str, FundRecord]:
        return {record.code: record for record in self.items}

    def to_payload(self) -> dict[str, Any]:
        """Render the ``ok`` response document."""
        items = [record.to_payload() for record in self.items]
        return {
            "ok": True,
            "updatedAt": self.updated_at.isoformat(),
            "items": items,
            "byCode": {item["code"]: item for item in items},
            "source": self.source,
        }
