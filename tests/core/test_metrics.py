import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from app.core.metrics import normalize_path, record_report_served


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/analytics/charts/usage-bar", "/api/analytics/charts/{chart_type}"),
        ("/api/analytics/charts/anything", "/api/analytics/charts/{chart_type}"),
        ("/api/donations/category/cat-1", "/api/donations/category/{category_id}"),
        ("/api/analytics/overview", "/api/analytics/overview"),
    ],
)
def test_normalize_path(path, expected):
    assert normalize_path(path) == expected


def test_record_report_served():
    before = REGISTRY.get_sample_value("reports_served_total", {"report": "unit-test"}) or 0
    record_report_served("unit-test")
    assert REGISTRY.get_sample_value("reports_served_total", {"report": "unit-test"}) == before + 1


@pytest.mark.asyncio
async def test_metrics_endpoint(client: AsyncClient) -> None:
    await client.get("/api/analytics/charts/gender-pie")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert 'endpoint="/api/analytics/charts/{chart_type}"' in response.text
    assert 'report="chart:gender-pie"' in response.text
