"""
Pydantic schemas for analytics aggregates.

Aggregates serialize with camelCase keys (``categoryStats``, ``totalInitial``)
while record schemas keep their snake_case field names.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.donations import CategoryResponse, DonationResponse


class ChartType(str, Enum):
    """Chart views served by the analytics engine."""

    CATEGORY_PIE = "category-pie"
    USAGE_BAR = "usage-bar"
    MONTHLY_LINE = "monthly-line"
    GENDER_PIE = "gender-pie"
    OVERVIEW = "overview"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class UsageStatus(str, Enum):
    """Usage band of a category."""

    HIGH = "High Usage"
    MEDIUM = "Medium Usage"
    LOW = "Low Usage"


class AnalyticsModel(BaseModel):
    """Base model for camelCase aggregate payloads."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class UsageTotals(AnalyticsModel):
    total_initial: int
    total_current: int
    total_used: int
    usage_percentage: int


class CategoryStat(UsageTotals):
    category: str = Field(..., description="Category name")
    measure_unity: str


class AnalyticsOverview(AnalyticsModel):
    category_stats: List[CategoryStat]
    total_donations: int
    total_categories: int
    overall_usage: UsageTotals


class MonthlyDonations(AnalyticsModel):
    month: str = Field(..., description="YYYY-MM")
    total_donations: int
    total_quantity: int
    categories: Dict[str, int] = Field(default_factory=dict, description="Initial quantity per category name")


class GenderShare(AnalyticsModel):
    gender: str
    quantity: int
    percentage: int


class DonatorRanking(AnalyticsModel):
    name: str
    total_quantity: int
    total_donations: int


class CategoryPieSlice(AnalyticsModel):
    label: str
    value: int
    percentage: int


class UsageBar(AnalyticsModel):
    category: str
    used: int
    available: int
    usage_percentage: int


ChartData = Union[
    List[CategoryPieSlice],
    List[UsageBar],
    List[MonthlyDonations],
    List[GenderShare],
    AnalyticsOverview,
]


class MonthlyTrend(MonthlyDonations):
    growth: int = Field(..., description="Change in total quantity against the previous month")
    growth_percentage: int


class CategoryPerformance(CategoryStat):
    donation_count: int
    average_usage_per_donation: int
    status: UsageStatus


class AnalyticsSummary(AnalyticsModel):
    total_donations: int
    total_categories: int
    overall_usage: UsageTotals
    running_low_count: int
    top_donator: str
    top_category: str
    last_updated: datetime


class AnalyticsExport(AnalyticsModel):
    overview: AnalyticsOverview
    trends: List[MonthlyDonations]
    running_low: List[DonationResponse]
    top_donators: List[DonatorRanking]
    gender_distribution: List[GenderShare]
    categories: List[CategoryResponse]
    donations: List[DonationResponse]
    exported_at: datetime
