from __future__ import annotations

import httpx
import pytest

from etfpulse.core.config import SourceConfig
from etfpulse.core.exceptions import ErrorCode, PrimaryFetchError
from etfpulse.core.providers import MoneyDJSource


def test_build_url_appends_market_suffix(mock_client_factory) -> None:
    source = MoneyDJSource(mock_client_factory(lambda request: httpx.Response(200)))

    assert source.build_url("0050") == "https://www.moneydj.com/ETF/X/Basic/Basic0003.xdjhtm?etfid=0050.TW"


def test_url_template_must_carry_symbol_placeholder() -> None:
    with pytest.raises(ValueError):
        SourceConfig(primary_url_template="https://example.test/etf")


@pytest.mark.asyncio
async def test_fetch_record_extracts_page(page_factory, mock_client_factory, labels) -> None:
    requested: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url)
        return httpx.Response(200, text=page_factory(price="31.20", nav="30.95", premium="0.81"))

    async with mock_client_factory(handler) as client:
        record = await MoneyDJSource(client).fetch_record("0050", labels)

    assert requested[0].params["etfid"] == "0050.TW"
    assert record.code == "0050"
    assert record.price == 31.2
    assert record.nav == 30.95
    assert record.nav_date == "2024/05/17"
    assert record.premium_pct == 0.81
    assert record.price_from == "MoneyDJ"


@pytest.mark.asyncio
async def test_non_success_status_raises_primary_error(mock_client_factory, labels, isolated_metrics) -> None:
    async with mock_client_factory(lambda request: httpx.Response(503)) as client:
        with pytest.raises(PrimaryFetchError) as exc_info:
            await MoneyDJSource(client).fetch_record("00878", labels)

    error = exc_info.value
    assert error.message == "upstream error 503 Service Unavailable"
    assert error.status_code == 503
    assert error.status_text == "Service Unavailable"
    assert error.code == "00878"
    assert error.error_code == ErrorCode.UPSTREAM_ERROR.value
    assert isolated_metrics.registry.get_sample_value("etfpulse_fetch_failures_total", {"source": "MoneyDJ"}) == 1.0


@pytest.mark.asyncio
async def test_transport_error_raises_primary_error(mock_client_factory, labels) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client_factory(handler) as client:
        with pytest.raises(PrimaryFetchError) as exc_info:
            await MoneyDJSource(client).fetch_page("0050")

    assert exc_info.value.status_code is None
    assert exc_info.value.details["error_type"] == "ConnectError"


@pytest.mark.asyncio
async def test_successful_fetch_is_counted(page_factory, mock_client_factory, isolated_metrics) -> None:
    async with mock_client_factory(lambda request: httpx.Response(200, text=page_factory())) as client:
        await MoneyDJSource(client).fetch_page("0050")

    registry = isolated_metrics.registry
    assert registry.get_sample_value("etfpulse_fetch_requests_total", {"source": "MoneyDJ"}) == 1.0
    assert registry.get_sample_value("etfpulse_fetch_failures_total", {"source": "MoneyDJ"}) is None
