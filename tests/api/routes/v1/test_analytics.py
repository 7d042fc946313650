"""
Tests for the analytics endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_overview(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/overview")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "timestamp" in body
    data = body["data"]
    assert data["totalDonations"] == 7
    assert data["totalCategories"] == 5
    assert data["overallUsage"] == {"totalInitial": 785, "totalCurrent": 270, "totalUsed": 515, "usagePercentage": 66}
    assert data["categoryStats"][0]["measureUnity"] == "peças"


@pytest.mark.parametrize(
    "chart_type, first_key",
    [
        ("category-pie", "label"),
        ("usage-bar", "used"),
        ("monthly-line", "month"),
        ("gender-pie", "gender"),
    ],
)
async def test_chart_data_lists(client: AsyncClient, chart_type: str, first_key: str) -> None:
    response = await client.get(f"/api/analytics/charts/{chart_type}")

    assert response.status_code == 200
    body = response.json()
    assert body["chartType"] == chart_type
    assert isinstance(body["data"], list)
    assert first_key in body["data"][0]


async def test_chart_data_usage_bar_keys(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/charts/usage-bar")
    assert response.json()["data"][0] == {"category": "Roupas", "used": 160, "available": 70, "usagePercentage": 70}


async def test_chart_data_overview(client: AsyncClient) -> None:
    chart = await client.get("/api/analytics/charts/overview")
    overview = await client.get("/api/analytics/overview")

    assert chart.status_code == 200
    assert chart.json()["data"] == overview.json()["data"]


async def test_chart_data_rejects_unknown_type(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/charts/not-a-real-type")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid chart type"
    assert body["provided"] == "not-a-real-type"
    assert "overview" in body["validChartTypes"]


async def test_trends(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/trends")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["data"][1]["growth"] == 325
    assert body["data"][1]["growthPercentage"] == 141
    assert body["data"][0]["categories"] == {"Roupas": 230}


async def test_category_performance(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/category-performance")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 5
    assert [entry["status"] for entry in body["data"]] == [
        "Medium Usage",
        "Medium Usage",
        "High Usage",
        "Medium Usage",
        "High Usage",
    ]
    assert body["data"][0]["donationCount"] == 2
    assert body["data"][0]["averageUsagePerDonation"] == 80


async def test_summary(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/summary")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["topDonator"] == "Padaria Central"
    assert data["topCategory"] == "Alimentos"
    assert data["runningLowCount"] == 0
    assert "lastUpdated" in data


async def test_export(client: AsyncClient) -> None:
    response = await client.get("/api/analytics/export")

    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data) == {
        "overview",
        "trends",
        "runningLow",
        "topDonators",
        "genderDistribution",
        "categories",
        "donations",
        "exportedAt",
    }
    assert len(data["donations"]) == 7
    assert data["donations"][0]["category"]["id"] == "cat-1"
    assert len(data["topDonators"]) == 5


async def test_route_failure_is_reported_without_detail(client: AsyncClient, monkeypatch) -> None:
    def explode(self):
        raise RuntimeError("secret internals")

    monkeypatch.setattr("app.services.analytics.AnalyticsService.analytics_overview", explode)

    response = await client.get("/api/analytics/overview")

    assert response.status_code == 500
    body = response.json()
    assert body == {"success": False, "error": "Failed to fetch analytics overview", "message": "Something went wrong"}
    assert "secret" not in response.text
