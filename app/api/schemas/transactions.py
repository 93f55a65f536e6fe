from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StatisticsResponse(_CamelModel):
    """Monthly sale totals"""
    total_sale_amount: Union[int, float] = Field(alias="totalSaleAmount")
    total_sold_items: int = Field(alias="totalSoldItems")
    total_not_sold_items: int = Field(alias="totalNotSoldItems")


class PriceRangeCount(_CamelModel):
    """Record count in one price bucket"""
    price_range: str = Field(alias="priceRange")
    count: int


class CategoryCount(BaseModel):
    """Record count for one category"""
    category: Optional[str]
    count: int


class CombinedResponse(_CamelModel):
    """Statistics, bar chart and pie chart for one month"""
    statistics: StatisticsResponse
    bar_chart_data: List[PriceRangeCount] = Field(alias="barChartData")
    pie_chart_data: List[CategoryCount] = Field(alias="pieChartData")
