"""Tests for the /api/etf and /api/health endpoints."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from etfpulse.core.config import CacheControlConfig, EtfPulseConfig
from etfpulse.web.app import create_app

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client(mock_client_factory) -> Iterator[Callable[..., TestClient]]:
    clients: list[TestClient] = []

    def _build(handler: Handler, config: EtfPulseConfig | None = None) -> TestClient:
        app = create_app(config or EtfPulseConfig(), http_client=mock_client_factory(handler))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _build
    for client in clients:
        client.__exit__(None, None, None)


def _upstream(page_factory, *, quotes: httpx.Response | None = None, page_status: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "www.moneydj.com":
            if page_status != 200:
                return httpx.Response(page_status)
            return httpx.Response(200, text=page_factory(price="100.00", nav="98.00", premium="2.04"))
        if quotes is not None:
            return quotes
        return httpx.Response(200, json={"msgArray": [{"c": "0050", "n": "元大台灣50", "z": "101.00"}]})

    return handler


def test_valuations_with_cache_headers(make_client, page_factory) -> None:
    client = make_client(_upstream(page_factory))

    response = client.get("/api/etf", params={"codes": "0050,00878"}, headers={"X-Request-ID": "req-1"})

    assert response.status_code == 200
    assert response.headers["cache-control"] == "s-maxage=120, stale-while-revalidate=300"
    assert response.headers["x-request-id"] == "req-1"
    body = response.json()
    assert body["ok"] is True
    assert [item["code"] for item in body["items"]] == ["0050", "00878"]
    assert set(body["byCode"]) == {"0050", "00878"}
    assert body["byCode"]["0050"]["price"] == 101.0
    assert body["byCode"]["0050"]["priceFrom"] == "TWSE realtime"
    assert body["byCode"]["0050"]["premiumPct"] == 3.06
    assert body["byCode"]["00878"]["priceFrom"] == "MoneyDJ"
    assert body["byCode"]["00878"]["premiumFrom"] == "MoneyDJ (parsed)"
    assert "updatedAt" in body
    assert body["source"].startswith("MoneyDJ")


def test_cache_directives_follow_configuration(make_client, page_factory) -> None:
    config = EtfPulseConfig(cache_control=CacheControlConfig(s_maxage=30, stale_while_revalidate=60))
    client = make_client(_upstream(page_factory), config)

    response = client.get("/api/etf?codes=0050")

    assert response.headers["cache-control"] == "s-maxage=30, stale-while-revalidate=60"


@pytest.mark.parametrize("query", ["", "?codes=", "?codes=%20,%20"])
def test_missing_codes_is_a_bad_request(make_client, query) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    client = make_client(handler)

    response = client.get(f"/api/etf{query}")

    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert body["error"] == "INVALID_REQUEST"
    assert body["message"] == "missing codes, e.g. ?codes=0050,00878"
    assert body["requestId"]
    assert calls == []


def test_primary_failure_is_a_bad_gateway(make_client, page_factory) -> None:
    client = make_client(_upstream(page_factory, page_status=500))

    response = client.get("/api/etf?codes=0050")

    assert response.status_code == 502
    body = response.json()
    assert body["ok"] is False
    assert body["error"] == "UPSTREAM_ERROR"
    assert body["message"] == "upstream error 500 Internal Server Error"
    assert "cache-control" not in response.headers


def test_realtime_failure_still_succeeds(make_client, page_factory) -> None:
    client = make_client(_upstream(page_factory, quotes=httpx.Response(503)))

    response = client.get("/api/etf?codes=0050,00878")

    assert response.status_code == 200
    for item in response.json()["items"]:
        assert item["price"] == 100.0
        assert item["priceFrom"] == "MoneyDJ"
        assert item["note"] == "TWSE realtime unavailable, price from MoneyDJ"


def test_health_endpoint(make_client) -> None:
    client = make_client(lambda request: httpx.Response(500))

    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"
