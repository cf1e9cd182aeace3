# =========================================================
# CART STATE MACHINE
#
# Pure reducer over the cart actions:
# - ADD_ITEM / UPDATE_QUANTITY / REMOVE_ITEM recompute the total
#   and reset the amount paid to it
# - SET_CUSTOM_AMOUNT records tendered cash, never clamped
# - CLEAR_CART empties everything
#
# States are immutable; an ADD_ITEM that is refused
# returns the state it was given.
# =========================================================

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Tuple, Union

from app.schemas.item import ItemResponse


@dataclass(frozen=True)
class CartItem:
    item: ItemResponse
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.item.sell_price * self.quantity


@dataclass(frozen=True)
class CartState:
    items: Tuple[CartItem, ...] = ()
    total: Decimal = Decimal("0.00")
    custom_amount: Decimal = Decimal("0.00")

    def find(self, item_id: int) -> CartItem | None:
        for line in self.items:
            if line.item.id == item_id:
                return line
        return None


# =========================================================
# ACTIONS
# =========================================================
@dataclass(frozen=True)
class AddItem:
    item: ItemResponse


@dataclass(frozen=True)
class UpdateQuantity:
    item_id: int
    quantity: int


@dataclass(frozen=True)
class RemoveItem:
    item_id: int


@dataclass(frozen=True)
class SetCustomAmount:
    amount: Decimal


@dataclass(frozen=True)
class ClearCart:
    pass


CartAction = Union[AddItem, UpdateQuantity, RemoveItem, SetCustomAmount, ClearCart]


def cart_total(items: Tuple[CartItem, ...]) -> Decimal:
    return sum((line.subtotal for line in items), Decimal("0.00"))


def _with_items(state: CartState, items: Tuple[CartItem, ...]) -> CartState:
    total = cart_total(items)
    return replace(state, items=items, total=total, custom_amount=total)


def _add_item(state: CartState, item: ItemResponse) -> CartState:
    existing = state.find(item.id)

    if existing:
        # Stock limit comes from the item being added, it may be fresher;
        # the line keeps that snapshot so checkout subtracts from it
        if existing.quantity >= item.inventory_count:
            return state

        items = tuple(
            replace(line, item=item, quantity=line.quantity + 1)
            if line.item.id == item.id
            else line
            for line in state.items
        )
        return _with_items(state, items)

    if item.inventory_count <= 0:
        return state

    return _with_items(state, state.items + (CartItem(item=item, quantity=1),))


def _update_quantity(state: CartState, item_id: int, quantity: int) -> CartState:
    items = []
    for line in state.items:
        if line.item.id == item_id:
            line = replace(line, quantity=max(0, min(quantity, line.item.inventory_count)))
        if line.quantity > 0:
            items.append(line)

    return _with_items(state, tuple(items))


def _remove_item(state: CartState, item_id: int) -> CartState:
    items = tuple(line for line in state.items if line.item.id != item_id)
    return _with_items(state, items)


def cart_reducer(state: CartState, action: CartAction) -> CartState:
    if isinstance(action, AddItem):
        return _add_item(state, action.item)

    if isinstance(action, UpdateQuantity):
        return _update_quantity(state, action.item_id, action.quantity)

    if isinstance(action, RemoveItem):
        return _remove_item(state, action.item_id)

    if isinstance(action, SetCustomAmount):
        return replace(state, custom_amount=Decimal(str(action.amount)))

    if isinstance(action, ClearCart):
        return CartState()

    return state
