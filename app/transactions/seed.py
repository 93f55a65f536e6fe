from datetime import datetime, timezone
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.core.logging import get_logger
from app.db.models import ProductTransaction
from app.transactions.exceptions import StoreError, UpstreamFetchError


class SeedTransaction(BaseModel):
    """One element of the seed payload"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    sold: Optional[bool] = None
    date_of_sale: Optional[datetime] = Field(default=None, alias="dateOfSale")

    @field_validator("title", "description", "category", "image", mode="before")
    @classmethod
    def scalar_to_str(cls, value):
        # Numbers and booleans are stored as their text form
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def to_model(self) -> ProductTransaction:
        sale_date = self.date_of_sale
        if sale_date is not None and sale_date.tzinfo is not None:
            sale_date = sale_date.astimezone(timezone.utc).replace(tzinfo=None)

        return ProductTransaction(
            id=self.id,
            title=self.title,
            price=self.price,
            description=self.description,
            category=self.category,
            image=self.image,
            sold=self.sold,
            date_of_sale=sale_date,
        )


_seed_payload = TypeAdapter(List[SeedTransaction])


class SeedLoader:
    """Fetches the seed dataset and bulk inserts it into the store"""

    def __init__(self, http_client: httpx.AsyncClient, source_url: str, timeout: Optional[float] = None):
        self.http_client = http_client
        self.source_url = source_url
        self.timeout = timeout
        self.logger = get_logger("SeedLoader")

    async def fetch(self) -> List[SeedTransaction]:
        """Download and validate the seed payload"""

        try:
            response = await self.http_client.get(self.source_url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise UpstreamFetchError(f"Could not fetch seed data from {self.source_url}") from e
        except ValueError as e:
            raise UpstreamFetchError("Seed source returned a non-JSON body") from e

        try:
            return _seed_payload.validate_python(payload)
        except ValidationError as e:
            raise UpstreamFetchError(
                f"Seed payload failed validation ({e.error_count()} errors)"
            ) from e

    async def initialize(self, db: AsyncSession) -> int:
        """Insert the full seed dataset in one transaction; returns the row count"""

        records = await self.fetch()

        try:
            db.add_all([record.to_model() for record in records])
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError("Bulk insert of seed data failed") from e

        self.logger.info(
            "Seeded product transactions",
            source_url=self.source_url,
            inserted=len(records),
        )
        return len(records)
