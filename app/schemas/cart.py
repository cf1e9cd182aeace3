from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.item import ItemResponse


class CartItemAdd(BaseModel):
    item_id: int


class CartQuantityUpdate(BaseModel):
    quantity: int


class CartAmountPaidUpdate(BaseModel):
    amount: Decimal = Field(..., ge=0, lt=100_000_000)


class CartLineResponse(BaseModel):
    item: ItemResponse
    quantity: int
    subtotal: Decimal


class CartResponse(BaseModel):
    id: str
    items: list[CartLineResponse]
    total: Decimal
    amount_paid: Decimal
    change: Decimal
