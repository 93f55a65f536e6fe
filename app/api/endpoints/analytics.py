from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
import structlog

from app.api.dependencies import get_analytics_service, get_month
from app.api.schemas.transactions import (
    StatisticsResponse,
    PriceRangeCount,
    CategoryCount,
    CombinedResponse
)
from app.transactions import TransactionAnalyticsService, TransactionsError


router = APIRouter()
logger = structlog.get_logger("analytics_api")


def _failure(view: str, month: Optional[int], error: Exception) -> HTTPException:
    logger.error(f"Error fetching {view}", month=month, error=str(error), cause=repr(error.__cause__))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to fetch {view}"
    )


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    month: Optional[int] = Depends(get_month),
    service: TransactionAnalyticsService = Depends(get_analytics_service)
):
    """Total sale amount and sold / not sold item counts for a month"""

    try:
        statistics = await service.get_statistics(month)
    except TransactionsError as e:
        raise _failure("statistics", month, e)

    return StatisticsResponse(**statistics)


@router.get("/bar-chart", response_model=List[PriceRangeCount])
async def get_bar_chart(
    month: Optional[int] = Depends(get_month),
    service: TransactionAnalyticsService = Depends(get_analytics_service)
):
    """Item counts per price range for a month"""

    try:
        histogram = await service.get_price_histogram(month)
    except TransactionsError as e:
        raise _failure("bar chart data", month, e)

    return [PriceRangeCount(**item) for item in histogram]


@router.get("/pie-chart", response_model=List[CategoryCount])
async def get_pie_chart(
    month: Optional[int] = Depends(get_month),
    service: TransactionAnalyticsService = Depends(get_analytics_service)
):
    """Item counts per category for a month"""

    try:
        breakdown = await service.get_category_breakdown(month)
    except TransactionsError as e:
        raise _failure("pie chart data", month, e)

    return [CategoryCount(**item) for item in breakdown]


@router.get("/combined-data", response_model=CombinedResponse)
async def get_combined_data(
    month: Optional[int] = Depends(get_month),
    service: TransactionAnalyticsService = Depends(get_analytics_service)
):
    """Statistics, bar chart and pie chart for a month in one response"""

    try:
        combined = await service.get_combined(month)
    except TransactionsError as e:
        raise _failure("combined data", month, e)

    return CombinedResponse(
        statistics=StatisticsResponse(**combined["statistics"]),
        bar_chart_data=[PriceRangeCount(**item) for item in combined["bar_chart_data"]],
        pie_chart_data=[CategoryCount(**item) for item in combined["pie_chart_data"]],
    )
