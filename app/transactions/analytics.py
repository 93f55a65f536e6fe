from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func, case
from typing import Any, Dict, List, Optional

from app.core.logging import get_logger
from app.db.models import ProductTransaction
from app.transactions.exceptions import StoreError
from app.transactions.filters import PRICE_BUCKETS, month_filter


logger = get_logger("analytics_service")


def _count_where(condition) -> Any:
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class TransactionAnalyticsService:
    """Aggregate views over product transactions for a calendar month"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_statistics(self, month: Optional[int]) -> Dict[str, Any]:
        """Sale amount and sold / not sold counts for the month"""

        sold = ProductTransaction.sold == True  # noqa: E712
        not_sold = ProductTransaction.sold == False  # noqa: E712

        stmt = select(
            func.coalesce(func.sum(case((sold, ProductTransaction.price), else_=0)), 0),
            _count_where(sold),
            _count_where(not_sold),
        ).where(month_filter(month))

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError("Statistics query failed") from e

        total_sale_amount, total_sold, total_not_sold = result.one()

        logger.debug(
            "Computed statistics",
            month=month,
            total_sold=total_sold,
            total_not_sold=total_not_sold,
        )

        return {
            "total_sale_amount": total_sale_amount,
            "total_sold_items": int(total_sold),
            "total_not_sold_items": int(total_not_sold),
        }

    async def get_price_histogram(self, month: Optional[int]) -> List[Dict[str, Any]]:
        """Record counts per price bucket, in bucket order"""

        stmt = select(
            *[_count_where(bucket.condition()) for bucket in PRICE_BUCKETS]
        ).where(month_filter(month))

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError("Price histogram query failed") from e

        counts = result.one()

        return [
            {"price_range": bucket.label, "count": int(count)}
            for bucket, count in zip(PRICE_BUCKETS, counts)
        ]

    async def get_category_breakdown(self, month: Optional[int]) -> List[Dict[str, Any]]:
        """Record counts per category present in the month"""

        stmt = (
            select(ProductTransaction.category, func.count())
            .where(month_filter(month))
            .group_by(ProductTransaction.category)
            .order_by(ProductTransaction.category)
        )

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError("Category breakdown query failed") from e

        return [
            {"category": category, "count": int(count)}
            for category, count in result.all()
        ]

    async def get_combined(self, month: Optional[int]) -> Dict[str, Any]:
        """All three views for the month"""

        # Queries share one session, so they run one after another
        statistics = await self.get_statistics(month)
        bar_chart = await self.get_price_histogram(month)
        pie_chart = await self.get_category_breakdown(month)

        return {
            "statistics": statistics,
            "bar_chart_data": bar_chart,
            "pie_chart_data": pie_chart,
        }
