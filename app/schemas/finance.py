# schemas/finance.py

from pydantic import BaseModel
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal


TimeRange = Literal["week", "month", "year"]


class DailySalesResponse(BaseModel):
    date: date
    sales: int
    revenue: Decimal
    cost: Decimal
    profit: Decimal


class TopItemResponse(BaseModel):
    name: str
    quantity: int
    revenue: Decimal


class FinanceSummaryResponse(BaseModel):
    range: TimeRange
    start: datetime
    end: datetime
    total_revenue: Decimal
    total_cost: Decimal
    profit: Decimal
    sales_count: int
    sales_by_date: List[DailySalesResponse]
    top_items: List[TopItemResponse]
