"""
Product transaction services

This module provides:
- Seed loader that bulk loads the remote transaction dataset
- Analytics service for the monthly statistics, price histogram and category views
- Month parsing and price buckets shared by the views
"""

from .analytics import TransactionAnalyticsService
from .exceptions import TransactionsError, UpstreamFetchError, StoreError
from .filters import PRICE_BUCKETS, PriceBucket, parse_month, month_filter
from .seed import SeedLoader, SeedTransaction


__all__ = [
    "TransactionAnalyticsService",
    "TransactionsError",
    "UpstreamFetchError",
    "StoreError",
    "PRICE_BUCKETS",
    "PriceBucket",
    "parse_month",
    "month_filter",
    "SeedLoader",
    "SeedTransaction",
]
