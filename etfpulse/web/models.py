"""
Web API response models.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from etfpulse.core.models import FundRecord


class ValuationResponse(BaseModel):
    """Successful /api/etf response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = Field(True, description="Request succeeded")
    updated_at: datetime = Field(..., description="Time the records were assembled")
    items: list[FundRecord] = Field(..., description="Records in request order")
    by_code: dict[str, FundRecord] = Field(..., description="Records keyed by fund code")
    source: str = Field(..., description="Description of the upstream sources")


class ErrorResponse(BaseModel):
    """Error response document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = Field(False, description="Request failed")
    error: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable message")
    request_id: str | None = Field(None, description="Request id for tracing")


class HealthResponse(BaseModel):
    """Liveness payload."""

    ok: bool = True
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    uptime_seconds: float = Field(..., description="Seconds since startup")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
