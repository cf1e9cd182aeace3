from decimal import Decimal
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ItemCreate(BaseModel):
    name: str

    cost_price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        description="Cost price must be above zero",
    )

    sell_price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        description="Sell price must be above zero and above cost price",
    )

    inventory_count: int = Field(..., ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class ItemUpdate(BaseModel):
    name: str | None = None
    cost_price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    sell_price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    inventory_count: int | None = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class ItemResponse(BaseModel):
    id: int
    name: str
    cost_price: Decimal
    sell_price: Decimal
    inventory_count: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int
