from typing import Optional
from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
import httpx

from app.core.config import Settings
from app.core.database import get_db
from app.transactions import TransactionAnalyticsService, SeedLoader, parse_month


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """HTTP client owned by the application for outbound calls"""
    return request.app.state.http_client


def get_month(
    request: Request,
    month: Optional[str] = Query(None, description="Calendar month, 1-12")
) -> Optional[int]:
    """Parsed month, or None when the value can never match

    When ``month`` is repeated the first occurrence is used.
    """
    values = request.query_params.getlist("month")
    return parse_month(values[0] if values else month)


def get_analytics_service(db: AsyncSession = Depends(get_db)) -> TransactionAnalyticsService:
    return TransactionAnalyticsService(db)


def get_seed_loader(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> SeedLoader:
    return SeedLoader(
        http_client,
        settings.SEED_DATA_URL,
        timeout=settings.SEED_FETCH_TIMEOUT,
    )
