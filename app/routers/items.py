# app/routers/items.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.items import Item
from app.schemas.item import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)

router = APIRouter(
    prefix="/items",
    tags=["Items"],
)

logger = logging.getLogger("app")


def _get_item_or_404(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found",
        )

    return item


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    item_data: ItemCreate,
    db: Session = Depends(get_db),
):
    # Business rule: sell price must be higher than cost price
    if item_data.sell_price <= item_data.cost_price:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sell price must be higher than cost price",
        )

    item = Item(
        name=item_data.name,
        cost_price=item_data.cost_price,
        sell_price=item_data.sell_price,
        inventory_count=item_data.inventory_count,
    )

    db.add(item)
    db.commit()
    db.refresh(item)

    return item


@router.get("", response_model=list[ItemResponse])
def list_items(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
):
    query = db.query(Item)

    if search:
        query = query.filter(Item.name.ilike(f"%{search.strip()}%"))

    return query.order_by(Item.name.asc(), Item.id.asc()).all()


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
):
    return _get_item_or_404(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_data: ItemUpdate,
    db: Session = Depends(get_db),
):
    item = _get_item_or_404(db, item_id)

    # Validate prices if either is being updated
    new_cost_price = item_data.cost_price if item_data.cost_price is not None else item.cost_price
    new_sell_price = item_data.sell_price if item_data.sell_price is not None else item.sell_price

    if new_sell_price <= new_cost_price:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sell price must be higher than cost price",
        )

    if item_data.name is not None:
        item.name = item_data.name

    if item_data.cost_price is not None:
        item.cost_price = item_data.cost_price

    if item_data.sell_price is not None:
        item.sell_price = item_data.sell_price

    if item_data.inventory_count is not None:
        item.inventory_count = item_data.inventory_count

    db.commit()
    db.refresh(item)

    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
):
    item = _get_item_or_404(db, item_id)

    db.delete(item)
    db.commit()

    logger.info(f"Item {item_id} deleted")

    return None


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete_items(
    payload: BulkDeleteRequest,
    db: Session = Depends(get_db),
):
    items = db.query(Item).filter(Item.id.in_(set(payload.ids))).all()

    for item in items:
        db.delete(item)

    db.commit()

    logger.info(f"Bulk delete removed {len(items)} items")

    return {"deleted": len(items)}
