# =========================================================
# CART ROUTER
#
# Every mutation is dispatched through the cart reducer;
# checkout persists the cart and clears it only on success.
# A failed checkout leaves the cart as it was so the sale
# can be retried.
# =========================================================

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.cart import (
    AddItem,
    CartState,
    ClearCart,
    RemoveItem,
    SetCustomAmount,
    UpdateQuantity,
)
from app.core.cart_store import CartBusyError, CartNotFoundError, cart_store
from app.core.checkout import (
    EmptyCartError,
    ItemUnavailableError,
    SaleCommitError,
    commit_sale,
)
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.database import get_db
from app.models.items import Item
from app.schemas.cart import (
    CartAmountPaidUpdate,
    CartItemAdd,
    CartQuantityUpdate,
    CartResponse,
)
from app.schemas.item import ItemResponse
from app.schemas.sale import SaleResponse

router = APIRouter(prefix="/carts", tags=["Cart"])


def _cart_view(cart_id: str, state: CartState) -> dict:
    return {
        "id": cart_id,
        "items": [
            {"item": line.item, "quantity": line.quantity, "subtotal": line.subtotal}
            for line in state.items
        ],
        "total": state.total,
        "amount_paid": state.custom_amount,
        "change": state.custom_amount - state.total,
    }


def _dispatch(cart_id: str, action) -> dict:
    try:
        state = cart_store.dispatch(cart_id, action)
    except CartNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found")

    return _cart_view(cart_id, state)


# =========================================================
# CART LIFECYCLE
# =========================================================
@router.post("", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def create_cart():
    cart_id, state = cart_store.create()
    return _cart_view(cart_id, state)


@router.get("/{cart_id}", response_model=CartResponse)
def get_cart(cart_id: str):
    try:
        state = cart_store.get(cart_id)
    except CartNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found")

    return _cart_view(cart_id, state)


@router.delete("/{cart_id}", response_model=CartResponse)
def clear_cart(cart_id: str):
    return _dispatch(cart_id, ClearCart())


# =========================================================
# CART LINES
# =========================================================
@router.post("/{cart_id}/items", response_model=CartResponse)
def add_item(
    cart_id: str,
    payload: CartItemAdd,
    db: Session = Depends(get_db),
):
    item = db.query(Item).filter(Item.id == payload.item_id).first()

    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    return _dispatch(cart_id, AddItem(ItemResponse.model_validate(item)))


@router.put("/{cart_id}/items/{item_id}", response_model=CartResponse)
def update_quantity(cart_id: str, item_id: int, payload: CartQuantityUpdate):
    return _dispatch(cart_id, UpdateQuantity(item_id=item_id, quantity=payload.quantity))


@router.delete("/{cart_id}/items/{item_id}", response_model=CartResponse)
def remove_item(cart_id: str, item_id: int):
    return _dispatch(cart_id, RemoveItem(item_id))


@router.put("/{cart_id}/amount-paid", response_model=CartResponse)
def set_amount_paid(cart_id: str, payload: CartAmountPaidUpdate):
    return _dispatch(cart_id, SetCustomAmount(payload.amount))


# =========================================================
# CHECKOUT
# =========================================================
@router.post(
    "/{cart_id}/checkout",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.CHECKOUT_RATE_LIMIT)
def checkout(
    request: Request,
    cart_id: str,
    db: Session = Depends(get_db),
):
    try:
        state = cart_store.begin_checkout(cart_id)
    except CartNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found")
    except CartBusyError:
        # Double submit of the same cart
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Checkout already in progress",
        )

    completed = False
    try:
        sale = commit_sale(db, state)
        completed = True

    except EmptyCartError:
        raise HTTPException(status_code=400, detail="Sale must contain items")

    except ItemUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Item {exc.item_id} is no longer available",
        )

    except SaleCommitError:
        raise HTTPException(status_code=500, detail="Unable to complete sale")

    finally:
        cart_store.end_checkout(cart_id, completed)

    return sale
