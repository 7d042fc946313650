"""Aggregation queries over the donation dataset."""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Union

from app.db.models import Donation
from app.db.store import DonationDataset
from app.schemas.analytics import (
    AnalyticsOverview,
    CategoryPieSlice,
    CategoryStat,
    ChartData,
    ChartType,
    DonatorRanking,
    GenderShare,
    MonthlyDonations,
    UsageBar,
    UsageTotals,
)
from app.schemas.donations import CategoryResponse, DonationResponse
from app.utils.percentages import percentage

UNSPECIFIED_GENDER = "Não especificado"
ANONYMOUS_DONATOR = "Anônimo"
DEFAULT_TOP_DONATORS_LIMIT = 5


def month_key(timestamp: datetime) -> str:
    """Truncate a timestamp to its UTC ``YYYY-MM`` month."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m")


def usage_totals(donations: Iterable[Donation]) -> UsageTotals:
    """Sum initial and current quantities over ``donations``."""
    total_initial = 0
    total_current = 0
    for donation in donations:
        total_initial += donation.initial_quantity
        total_current += donation.current_quantity
    total_used = total_initial - total_current
    return UsageTotals(
        total_initial=total_initial,
        total_current=total_current,
        total_used=total_used,
        usage_percentage=percentage(total_used, total_initial),
    )


class AnalyticsService:
    """
    Read-only analytics over a ``DonationDataset``.

    Every query allocates a fresh result and never raises for unknown ids or
    chart types.
    """

    def __init__(self, dataset: DonationDataset):
        """Initialize with the dataset to aggregate."""
        self.dataset = dataset

    def _serialize(self, donation: Donation) -> DonationResponse:
        return DonationResponse.from_record(donation, self.dataset.category_for(donation))

    def _total_initial(self) -> int:
        return sum(donation.initial_quantity for donation in self.dataset.donations)

    def list_donations(self) -> List[DonationResponse]:
        """Get all donations in dataset order."""
        return [self._serialize(donation) for donation in self.dataset.donations]

    def list_categories(self) -> List[CategoryResponse]:
        """Get all categories in dataset order."""
        return [CategoryResponse.model_validate(category) for category in self.dataset.categories]

    def donations_by_category(self, category_id: str) -> List[DonationResponse]:
        """Get the donations of one category; empty for an unknown id."""
        if self.dataset.category(category_id) is None:
            return []
        return [
            self._serialize(donation) for donation in self.dataset.donations if donation.category_id == category_id
        ]

    def overall_usage(self) -> UsageTotals:
        """Usage totals across every donation."""
        return usage_totals(self.dataset.donations)

    def analytics_overview(self) -> AnalyticsOverview:
        """Per-category usage stats plus dataset-wide totals."""
        category_stats = []
        for category in self.dataset.categories:
            totals = usage_totals(d for d in self.dataset.donations if d.category_id == category.id)
            category_stats.append(
                CategoryStat(
                    category=category.name,
                    measure_unity=category.measure_unity,
                    **totals.model_dump(),
                )
            )

        return AnalyticsOverview(
            category_stats=category_stats,
            total_donations=len(self.dataset.donations),
            total_categories=len(self.dataset.categories),
            overall_usage=self.overall_usage(),
        )

    def donations_over_time(self) -> List[MonthlyDonations]:
        """
        Group donations by creation month.

        Months without donations are omitted; the result is sorted ascending.
        """
        monthly: Dict[str, MonthlyDonations] = {}
        for donation in self.dataset.donations:
            month = month_key(donation.created_at)
            entry = monthly.get(month)
            if entry is None:
                entry = monthly[month] = MonthlyDonations(month=month, total_donations=0, total_quantity=0)

            entry.total_donations += 1
            entry.total_quantity += donation.initial_quantity

            category_name = self.dataset.category_for(donation).name
            entry.categories[category_name] = entry.categories.get(category_name, 0) + donation.initial_quantity

        return sorted(monthly.values(), key=lambda entry: entry.month)

    def running_low_donations(self) -> List[DonationResponse]:
        """Get donations with less than 20% of their initial quantity left."""
        return [self._serialize(donation) for donation in self.dataset.donations if donation.is_running_low]

    def donations_by_gender(self) -> List[GenderShare]:
        """Initial quantity per gender, in order of first appearance."""
        quantities: Dict[str, int] = {}
        for donation in self.dataset.donations:
            gender = donation.gender or UNSPECIFIED_GENDER
            quantities[gender] = quantities.get(gender, 0) + donation.initial_quantity

        grand_total = self._total_initial()
        return [
            GenderShare(gender=gender, quantity=quantity, percentage=percentage(quantity, grand_total))
            for gender, quantity in quantities.items()
        ]

    def top_donators(self, limit: int = DEFAULT_TOP_DONATORS_LIMIT) -> List[DonatorRanking]:
        """
        Rank donators by total initial quantity.

        Equal totals keep the order in which the donators first appear.
        """
        rankings: Dict[str, DonatorRanking] = {}
        for donation in self.dataset.donations:
            name = donation.donator_name or ANONYMOUS_DONATOR
            ranking = rankings.get(name)
            if ranking is None:
                ranking = rankings[name] = DonatorRanking(name=name, total_quantity=0, total_donations=0)
            ranking.total_quantity += donation.initial_quantity
            ranking.total_donations += 1

        ranked = sorted(rankings.values(), key=lambda ranking: ranking.total_quantity, reverse=True)
        return ranked[:limit]

    def chart_data(self, chart_type: Union[ChartType, str]) -> ChartData:
        """
        Get the data behind one chart.

        Unrecognized chart types fall back to the full analytics overview.
        """
        try:
            chart = ChartType(chart_type)
        except ValueError:
            chart = ChartType.OVERVIEW

        if chart is ChartType.CATEGORY_PIE:
            grand_total = self._total_initial()
            return [
                CategoryPieSlice(
                    label=stat.category,
                    value=stat.total_initial,
                    percentage=percentage(stat.total_initial, grand_total),
                )
                for stat in self.analytics_overview().category_stats
            ]
        elif chart is ChartType.USAGE_BAR:
            return [
                UsageBar(
                    category=stat.category,
                    used=stat.total_used,
                    available=stat.total_current,
                    usage_percentage=stat.usage_percentage,
                )
                for stat in self.analytics_overview().category_stats
            ]
        elif chart is ChartType.MONTHLY_LINE:
            return self.donations_over_time()
        elif chart is ChartType.GENDER_PIE:
            return self.donations_by_gender()
        else:
            return self.analytics_overview()
