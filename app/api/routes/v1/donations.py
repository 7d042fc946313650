"""
Donation and category listing endpoints.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, Path, Query

from app.api.dependencies import get_analytics_service
from app.api.errors import failure_reported_as
from app.api.responses import CountedEnvelopeModel, EnvelopeModel, default_error_responses
from app.api.utils import counted_envelope, envelope
from app.schemas.analytics import DonatorRanking, GenderShare
from app.schemas.donations import CategoryResponse, DonationResponse
from app.services.analytics import DEFAULT_TOP_DONATORS_LIMIT, AnalyticsService

router = APIRouter()


@router.get(
    "",
    response_model=CountedEnvelopeModel[List[DonationResponse]],
    summary="List donations",
    responses=default_error_responses,
)
async def list_donations(analytics: AnalyticsService = Depends(get_analytics_service)) -> Any:
    """Get all donations with their derived usage fields."""
    with failure_reported_as("Failed to fetch donations"):
        donations = analytics.list_donations()
    return counted_envelope(donations)


@router.get(
    "/categories",
    response_model=CountedEnvelopeModel[List[CategoryResponse]],
    summary="List categories",
    responses=default_error_responses,
)
async def list_categories(analytics: AnalyticsService = Depends(get_analytics_service)) -> Any:
    """Get all categories."""
    with failure_reported_as("Failed to fetch categories"):
        categories = analytics.list_categories()
    return counted_envelope(categories)


@router.get(
    "/category/{category_id}",
    response_model=CountedEnvelopeModel[List[DonationResponse]],
    summary="List donations of a category",
    description="Returns an empty list for an unknown category.",
    responses=default_error_responses,
)
async def list_donations_by_category(
    category_id: str = Path(..., description="Category ID"),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """Get the donations of one category."""
    with failure_reported_as("Failed to fetch donations by category"):
        donations = analytics.donations_by_category(category_id)
    return counted_envelope(donations)


@router.get(
    "/running-low",
    response_model=CountedEnvelopeModel[List[DonationResponse]],
    summary="Donations running low",
    description="Donations with less than 20% of their initial quantity left.",
    responses=default_error_responses,
)
async def list_running_low(analytics: AnalyticsService = Depends(get_analytics_service)) -> Any:
    """Get donations that are running low."""
    with failure_reported_as("Failed to fetch running low donations"):
        donations = analytics.running_low_donations()
    return counted_envelope(donations)


@router.get(
    "/top-donators",
    response_model=CountedEnvelopeModel[List[DonatorRanking]],
    summary="Top donators",
    responses=default_error_responses,
)
async def list_top_donators(
    limit: int = Query(DEFAULT_TOP_DONATORS_LIMIT, ge=1, le=100, description="Maximum number of donators"),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """Get donators ranked by total donated quantity."""
    with failure_reported_as("Failed to fetch top donators"):
        rankings = analytics.top_donators(limit)
    return counted_envelope(rankings)


@router.get(
    "/gender",
    response_model=EnvelopeModel[List[GenderShare]],
    summary="Donations by gender",
    responses=default_error_responses,
)
async def get_gender_distribution(analytics: AnalyticsService = Depends(get_analytics_service)) -> Any:
    """Get the initial quantity distribution per gender."""
    with failure_reported_as("Failed to fetch gender distribution"):
        distribution = analytics.donations_by_gender()
    return envelope(distribution)
