"""
Typed query inputs for the transaction views.

Month query strings are parsed once into an ``int`` (or ``None`` when they can
never match), and every view builds its SQL conditions from that value.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
import math
import re

from sqlalchemy import and_, extract, false
from sqlalchemy.sql.elements import ColumnElement

from app.db.models import ProductTransaction


_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_month(raw: Optional[str]) -> Optional[int]:
    """Parse a month query parameter.

    Reads the leading integer of the string, ignoring surrounding whitespace and
    any trailing characters ("03", "3abc" and "3.5" all give 3). Returns None when
    the value is missing, has no leading integer, or is outside 1-12.
    """
    if raw is None:
        return None

    match = _LEADING_INT.match(raw)
    if not match:
        return None

    month = int(match.group(1))
    if not 1 <= month <= 12:
        return None

    return month


def month_filter(month: Optional[int]) -> ColumnElement[bool]:
    """Condition matching records sold in the given calendar month of any year"""
    if month is None:
        return false()
    return extract("month", ProductTransaction.date_of_sale) == month


@dataclass(frozen=True)
class PriceBucket:
    """Inclusive price range used by the bar chart"""
    min_price: int
    max_price: float
    lower_exclusive: Optional[int] = None

    @property
    def label(self) -> str:
        upper = "Infinity" if math.isinf(self.max_price) else str(int(self.max_price))
        return f"{self.min_price}-{upper}"

    def condition(self) -> ColumnElement[bool]:
        price = ProductTransaction.price
        # Lower edge sits on the previous bucket's max so fractional prices are not lost
        if self.lower_exclusive is None:
            lower = price >= self.min_price
        else:
            lower = price > self.lower_exclusive
        if math.isinf(self.max_price):
            return lower
        return and_(lower, price <= self.max_price)


def _build_buckets() -> Tuple[PriceBucket, ...]:
    buckets = [PriceBucket(0, 100)]
    for start in range(101, 901, 100):
        buckets.append(PriceBucket(start, start + 99, lower_exclusive=start - 1))
    buckets.append(PriceBucket(901, math.inf, lower_exclusive=900))
    return tuple(buckets)


PRICE_BUCKETS: Tuple[PriceBucket, ...] = _build_buckets()
