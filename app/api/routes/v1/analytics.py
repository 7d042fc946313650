"""
Analytics API endpoints.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, Path

from app.api.dependencies import get_analytics_service, get_report_service
from app.api.errors import InvalidChartTypeError, failure_reported_as
from app.api.responses import (
    ChartEnvelopeModel,
    CountedEnvelopeModel,
    EnvelopeModel,
    chart_error_responses,
    default_error_responses,
)
from app.api.utils import counted_envelope, envelope
from app.core.metrics import record_report_served
from app.core.tracing import create_span
from app.schemas.analytics import (
    AnalyticsExport,
    AnalyticsOverview,
    AnalyticsSummary,
    CategoryPerformance,
    ChartData,
    ChartType,
    MonthlyTrend,
)
from app.services.analytics import AnalyticsService
from app.services.reports import ReportService

router = APIRouter()


@router.get(
    "/overview",
    response_model=EnvelopeModel[AnalyticsOverview],
    summary="Analytics overview",
    description="Per-category usage stats with dataset-wide totals.",
    responses=default_error_responses,
)
async def get_overview(analytics: AnalyticsService = Depends(get_analytics_service)) -> Any:
    """Get the comprehensive analytics overview."""
    with failure_reported_as("Failed to fetch analytics overview"):
        with create_span("analytics.overview", {"donations": len(analytics.dataset)}):
            overview = analytics.analytics_overview()
    record_report_served("overview")
    return envelope(overview)


@router.get(
    "/charts/{chart_type}",
    response_model=ChartEnvelopeModel[ChartData],
    summary="Chart data",
    description="Data shaped for one chart. Supported types: " + ", ".join(ChartType.values()) + ".",
    responses=chart_error_responses,
)
async def get_chart_data(
    chart_type: str = Path(..., description="Chart type", examples=ChartType.values()),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """Get the data behind a chart."""
    if chart_type not in ChartType.values():
        raise InvalidChartTypeError(chart_type)

    with failure_reported_as("Failed to fetch chart data"):
        with create_span("analytics.chart", {"chart.type": chart_type, "donations": len(analytics.dataset)}):
            data = analytics.chart_data(ChartType(chart_type))
    record_report_served(f"chart:{chart_type}")
    return envelope(data, chartType=chart_type)


@router.get(
    "/trends",
    response_model=CountedEnvelopeModel[List[MonthlyTrend]],
    summary="Monthly trends",
    description="Donations per month with month-over-month growth.",
    responses=default_error_responses,
)
async def get_trends(reports: ReportService = Depends(get_report_service)) -> Any:
    """Get donation trends over time."""
    with failure_reported_as("Failed to fetch trends data"):
        with create_span("analytics.trends") as span:
            trends = reports.trends()
            span.set_attribute("months", len(trends))
    record_report_served("trends")
    return counted_envelope(trends)


@router.get(
    "/category-performance",
    response_model=CountedEnvelopeModel[List[CategoryPerformance]],
    summary="Category performance",
    description="Category stats with donation counts and a usage status.",
    responses=default_error_responses,
)
async def get_category_performance(reports: ReportService = Depends(get_report_service)) -> Any:
    """Get detailed category performance."""
    with failure_reported_as("Failed to fetch category performance"):
        with create_span("analytics.category_performance") as span:
            performance = reports.category_performance()
            span.set_attribute("categories", len(performance))
    record_report_served("category-performance")
    return counted_envelope(performance)


@router.get(
    "/summary",
    response_model=EnvelopeModel[AnalyticsSummary],
    summary="Key metrics summary",
    responses=default_error_responses,
)
async def get_summary(reports: ReportService = Depends(get_report_service)) -> Any:
    """Get the key metrics summary."""
    with failure_reported_as("Failed to fetch summary"):
        with create_span("analytics.summary", {"donations": len(reports.analytics.dataset)}):
            summary = reports.summary()
    record_report_served("summary")
    return envelope(summary)


@router.get(
    "/export",
    response_model=EnvelopeModel[AnalyticsExport],
    summary="Export all analytics",
    description="Every analytics view bundled into one payload.",
    responses=default_error_responses,
)
async def get_export(reports: ReportService = Depends(get_report_service)) -> Any:
    """Get all analytics data for export."""
    with failure_reported_as("Failed to export analytics data"):
        with create_span("analytics.export", {"donations": len(reports.analytics.dataset)}) as span:
            export = reports.export()
            span.add_event("export_composed")
    record_report_served("export")
    return envelope(export)
