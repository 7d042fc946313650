"""Report views composed from analytics queries."""

from datetime import datetime, timezone
from typing import List

from app.schemas.analytics import (
    AnalyticsExport,
    AnalyticsSummary,
    CategoryPerformance,
    MonthlyTrend,
    UsageStatus,
)
from app.services.analytics import AnalyticsService
from app.utils.percentages import percentage, ratio

HIGH_USAGE_THRESHOLD = 70
MEDIUM_USAGE_THRESHOLD = 40
NOT_AVAILABLE = "N/A"


def usage_status(usage_percentage: int) -> UsageStatus:
    """Classify a usage percentage; both bounds are exclusive."""
    if usage_percentage > HIGH_USAGE_THRESHOLD:
        return UsageStatus.HIGH
    if usage_percentage > MEDIUM_USAGE_THRESHOLD:
        return UsageStatus.MEDIUM
    return UsageStatus.LOW


class ReportService:
    """Service for the composite analytics reports."""

    def __init__(self, analytics: AnalyticsService):
        """Initialize with the analytics engine to read from."""
        self.analytics = analytics

    def trends(self) -> List[MonthlyTrend]:
        """Monthly totals with month-over-month growth."""
        trends = []
        previous = None
        for month in self.analytics.donations_over_time():
            growth = month.total_quantity - previous.total_quantity if previous is not None else 0
            growth_percentage = percentage(growth, previous.total_quantity) if previous is not None else 0
            trends.append(MonthlyTrend(**month.model_dump(), growth=growth, growth_percentage=growth_percentage))
            previous = month
        return trends

    def category_performance(self) -> List[CategoryPerformance]:
        """Category stats with donation counts and a usage status."""
        overview = self.analytics.analytics_overview()
        performance = []
        # category_stats follows dataset category order
        for category, stat in zip(self.analytics.dataset.categories, overview.category_stats):
            donation_count = len(self.analytics.donations_by_category(category.id))
            performance.append(
                CategoryPerformance(
                    **stat.model_dump(),
                    donation_count=donation_count,
                    average_usage_per_donation=ratio(stat.total_used, donation_count),
                    status=usage_status(stat.usage_percentage),
                )
            )
        return performance

    def summary(self) -> AnalyticsSummary:
        """Key metrics at a glance."""
        overview = self.analytics.analytics_overview()
        top_donators = self.analytics.top_donators(3)

        top_category = NOT_AVAILABLE
        if overview.category_stats:
            best = overview.category_stats[0]
            for stat in overview.category_stats[1:]:
                # ties go to the later category
                if not best.total_initial > stat.total_initial:
                    best = stat
            top_category = best.category

        return AnalyticsSummary(
            total_donations=overview.total_donations,
            total_categories=overview.total_categories,
            overall_usage=overview.overall_usage,
            running_low_count=len(self.analytics.running_low_donations()),
            top_donator=top_donators[0].name if top_donators else NOT_AVAILABLE,
            top_category=top_category,
            last_updated=datetime.now(timezone.utc),
        )

    def export(self) -> AnalyticsExport:
        """Bundle every analytics view into one payload."""
        return AnalyticsExport(
            overview=self.analytics.analytics_overview(),
            trends=self.analytics.donations_over_time(),
            running_low=self.analytics.running_low_donations(),
            top_donators=self.analytics.top_donators(),
            gender_distribution=self.analytics.donations_by_gender(),
            categories=self.analytics.list_categories(),
            donations=self.analytics.list_donations(),
            exported_at=datetime.now(timezone.utc),
        )
