# app/core/cart_store.py

import threading
import uuid

from app.core.cart import CartAction, CartState, cart_reducer


class CartNotFoundError(KeyError):
    pass


class CartBusyError(Exception):
    pass


class CartStore:
    """Process-local carts, one per browser session."""

    def __init__(self):
        self._carts: dict[str, CartState] = {}
        self._checking_out: set[str] = set()
        self._lock = threading.Lock()

    def create(self) -> tuple[str, CartState]:
        cart_id = uuid.uuid4().hex
        state = CartState()
        with self._lock:
            self._carts[cart_id] = state
        return cart_id, state

    def get(self, cart_id: str) -> CartState:
        with self._lock:
            try:
                return self._carts[cart_id]
            except KeyError:
                raise CartNotFoundError(cart_id) from None

    def dispatch(self, cart_id: str, action: CartAction) -> CartState:
        with self._lock:
            try:
                state = self._carts[cart_id]
            except KeyError:
                raise CartNotFoundError(cart_id) from None

            new_state = cart_reducer(state, action)
            self._carts[cart_id] = new_state
            return new_state

    def begin_checkout(self, cart_id: str) -> CartState:
        """Claim the cart for one checkout; a second claim is refused."""
        with self._lock:
            try:
                state = self._carts[cart_id]
            except KeyError:
                raise CartNotFoundError(cart_id) from None

            if cart_id in self._checking_out:
                raise CartBusyError(cart_id)

            self._checking_out.add(cart_id)
            return state

    def end_checkout(self, cart_id: str, completed: bool) -> None:
        with self._lock:
            self._checking_out.discard(cart_id)
            if completed and cart_id in self._carts:
                self._carts[cart_id] = CartState()

    def reset(self) -> None:
        with self._lock:
            self._carts.clear()
            self._checking_out.clear()


cart_store = CartStore()
