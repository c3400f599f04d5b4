"""Pytest configuration for the etfpulse test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from prometheus_client import CollectorRegistry

from etfpulse.core.models import ProvenanceLabels
from etfpulse.core.monitoring import MetricsCollector, configure_metrics_collector

PageFactory = Callable[..., str]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--etfpulse-run-integration",
        action="store_true",
        default=False,
        help="Run etfpulse integration tests that hit live upstream sources.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks etfpulse tests requiring network access to live sources",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--etfpulse-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --etfpulse-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def isolated_metrics() -> Iterator[MetricsCollector]:
    """Give every test its own registry so counters never leak between tests."""

    collector = MetricsCollector(registry=CollectorRegistry())
    configure_metrics_collector(collector)
    yield collector
    configure_metrics_collector(None)


@pytest.fixture
def labels() -> ProvenanceLabels:
    return ProvenanceLabels(primary="MoneyDJ", secondary="TWSE realtime")


@pytest.fixture
def page_factory() -> PageFactory:
    """Build a MoneyDJ-like fund page; a field passed as ``None`` is left out."""

    def _build(
        price: str | None = "103.00",
        nav: str | None = "100.00",
        nav_date: str | None = "2024/05/17",
        premium: str | None = "5.00",
    ) -> str:
        rows = []
        if price is not None:
            rows.append(f"<tr><th>市&nbsp;價</th><td>{price}</td></tr>")
        if nav is not None:
            rows.append(f"<tr><th>淨值(元)</th><td>{nav}</td></tr>")
        if nav_date is not None:
            rows.append(f"<tr><th>淨值日期</th><td>{nav_date}</td></tr>")
        if premium is not None:
            rows.append(f"<tr><th>折溢價(%)</th><td>{premium}%</td></tr>")
        return (
            "<html><head>"
            '<script type="text/javascript">var banner = "市價 999.99";</script>'
            "<style>td { color: red; }</style>"
            "</head><body><table>"
            + "".join(rows)
            + "</table></body></html>"
        )

    return _build


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Create an ``httpx.AsyncClient`` answering through ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build
