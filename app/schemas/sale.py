# schemas/sale.py

from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional
from decimal import Decimal


class SaleItemResponse(BaseModel):
    item_id: Optional[int]
    item_name: Optional[str]
    quantity: int
    price_per_item: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: int
    total_amount: Decimal
    amount_paid: Decimal
    created_at: datetime
    items: List[SaleItemResponse]

    class Config:
        from_attributes = True
