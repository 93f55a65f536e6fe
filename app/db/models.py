from sqlalchemy import String, Float, DateTime, Boolean, Text, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from typing import Optional

from app.core.database import Base


class ProductTransaction(Base):
    """Product sale record loaded from the seed source"""
    __tablename__ = "product_transactions"

    # Surrogate key; the source id is not unique across seed runs
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[Optional[str]] = mapped_column(String(500))
    price: Mapped[Optional[float]] = mapped_column(Float)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    image: Mapped[Optional[str]] = mapped_column(String(1000))
    sold: Mapped[Optional[bool]] = mapped_column(Boolean)

    # Naive UTC
    date_of_sale: Mapped[Optional[datetime]] = mapped_column(DateTime, index=True)

    __table_args__ = (
        Index("idx_product_transaction_sold_date", "sold", "date_of_sale"),
    )

    def __repr__(self) -> str:
        return f"<ProductTransaction id={self.id} category={self.category!r} price={self.price}>"
