# =========================================================
# SALE COMMIT
#
# Persists a cart as a sale in a single transaction:
# 1. sale row (total + amount paid)
# 2. one sale_item row per cart line, prices snapshotted
# 3. inventory overwritten to the cart's count minus quantity
#
# Stock is written from the cart's own snapshot, not re-read,
# so concurrent sales of the same item can still lose updates.
# =========================================================

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.cart import CartState
from app.models.items import Item
from app.models.sale_items import SaleItem
from app.models.sales import Sale

logger = logging.getLogger("app")


class SaleCommitError(Exception):
    """The sale could not be recorded; nothing was written."""


class EmptyCartError(SaleCommitError):
    pass


class ItemUnavailableError(SaleCommitError):
    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} no longer exists")
        self.item_id = item_id


def commit_sale(db: Session, cart: CartState) -> Sale:
    if not cart.items:
        raise EmptyCartError("Sale must contain items")

    item_ids = [line.item.id for line in cart.items]

    try:
        existing_ids = {
            row.id for row in db.query(Item.id).filter(Item.id.in_(item_ids)).all()
        }
        for item_id in item_ids:
            if item_id not in existing_ids:
                raise ItemUnavailableError(item_id)

        sale = Sale(
            total_amount=cart.total,
            amount_paid=cart.custom_amount,
        )
        db.add(sale)
        db.flush()

        db.add_all(
            [
                SaleItem(
                    sale_id=sale.id,
                    item_id=line.item.id,
                    quantity=line.quantity,
                    price_per_item=line.item.sell_price,
                )
                for line in cart.items
            ]
        )
        db.flush()

        for line in cart.items:
            db.query(Item).filter(Item.id == line.item.id).update(
                {Item.inventory_count: line.item.inventory_count - line.quantity},
                synchronize_session=False,
            )

        db.commit()

    except ItemUnavailableError as exc:
        db.rollback()
        logger.warning(f"Sale aborted: {exc}")
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Sale commit failed: {exc}")
        raise SaleCommitError("Unable to complete sale") from exc

    db.refresh(sale)

    logger.info(
        f"Sale {sale.id} recorded: {len(cart.items)} lines, "
        f"total {sale.total_amount}, paid {sale.amount_paid}"
    )

    return sale
