import random
from decimal import Decimal

from app.core.cart import (
    AddItem,
    CartState,
    ClearCart,
    RemoveItem,
    SetCustomAmount,
    UpdateQuantity,
    cart_reducer,
)
from app.schemas.item import ItemResponse


def _item(item_id, sell_price="2.50", inventory_count=3, name=None):
    return ItemResponse(
        id=item_id,
        name=name or f"Item {item_id}",
        cost_price=Decimal("1.00"),
        sell_price=Decimal(sell_price),
        inventory_count=inventory_count,
    )


def _run(actions, state=None):
    state = state or CartState()
    for action in actions:
        state = cart_reducer(state, action)
    return state


def _expected_total(state):
    return sum((line.item.sell_price * line.quantity for line in state.items), Decimal("0.00"))


def test_add_item_inserts_line_with_quantity_one():
    state = _run([AddItem(_item(1))])

    assert len(state.items) == 1
    assert state.items[0].quantity == 1
    assert state.total == Decimal("2.50")
    assert state.custom_amount == Decimal("2.50")


def test_add_item_increments_existing_line():
    item = _item(1)
    state = _run([AddItem(item), AddItem(item)])

    assert len(state.items) == 1
    assert state.items[0].quantity == 2
    assert state.total == Decimal("5.00")


def test_add_item_stops_at_inventory_count():
    item = _item(1, inventory_count=2)
    state = _run([AddItem(item)] * 5)

    assert state.items[0].quantity == 2
    assert state.total == Decimal("5.00")


def test_add_item_without_stock_is_a_no_op():
    state = CartState()

    assert cart_reducer(state, AddItem(_item(1, inventory_count=0))) is state


def test_refused_add_keeps_custom_amount():
    item = _item(1, inventory_count=1)
    state = _run([AddItem(item), SetCustomAmount(Decimal("20"))])

    after = cart_reducer(state, AddItem(item))

    assert after is state
    assert after.custom_amount == Decimal("20")


def test_add_item_checks_stock_of_the_item_passed_in():
    state = _run([AddItem(_item(1, inventory_count=5)), AddItem(_item(1, inventory_count=5))])

    # Stock dropped to 2 since the item was first added
    after = cart_reducer(state, AddItem(_item(1, inventory_count=2)))

    assert after is state
    assert after.items[0].quantity == 2


def test_lines_keep_insertion_order():
    state = _run([AddItem(_item(3)), AddItem(_item(1)), AddItem(_item(2)), AddItem(_item(1))])

    assert [line.item.id for line in state.items] == [3, 1, 2]


def test_update_quantity_clamps_to_inventory():
    item = _item(1, inventory_count=4)
    state = _run([AddItem(item), UpdateQuantity(item_id=1, quantity=99)])

    assert state.items[0].quantity == 4
    assert state.total == Decimal("10.00")


def test_update_quantity_to_zero_removes_line():
    state = _run([
        AddItem(_item(1)),
        AddItem(_item(2)),
        UpdateQuantity(item_id=1, quantity=0),
    ])

    assert [line.item.id for line in state.items] == [2]
    assert state.total == Decimal("2.50")


def test_negative_quantity_removes_line():
    state = _run([AddItem(_item(1)), UpdateQuantity(item_id=1, quantity=-3)])

    assert state.items == ()
    assert state.total == Decimal("0.00")


def test_update_quantity_resets_custom_amount():
    state = _run([
        AddItem(_item(1)),
        SetCustomAmount(Decimal("50")),
        UpdateQuantity(item_id=1, quantity=2),
    ])

    assert state.custom_amount == state.total == Decimal("5.00")


def test_update_unknown_line_changes_nothing_but_resyncs_amount():
    state = _run([
        AddItem(_item(1)),
        SetCustomAmount(Decimal("7")),
        UpdateQuantity(item_id=99, quantity=2),
    ])

    assert state.items[0].quantity == 1
    assert state.custom_amount == Decimal("2.50")


def test_remove_item_deletes_line_and_recomputes():
    state = _run([
        AddItem(_item(1, sell_price="1.00")),
        AddItem(_item(2, sell_price="4.00")),
        RemoveItem(1),
    ])

    assert [line.item.id for line in state.items] == [2]
    assert state.total == Decimal("4.00")
    assert state.custom_amount == Decimal("4.00")


def test_remove_then_add_restores_quantity_one():
    item = _item(1, inventory_count=5)
    state = _run([AddItem(item), AddItem(item), AddItem(item), RemoveItem(1), AddItem(item)])

    assert state.items[0].quantity == 1


def test_set_custom_amount_is_not_clamped():
    state = _run([AddItem(_item(1)), SetCustomAmount(Decimal("100.00"))])

    assert state.total == Decimal("2.50")
    assert state.custom_amount == Decimal("100.00")

    state = cart_reducer(state, SetCustomAmount(Decimal("1.00")))

    assert state.custom_amount == Decimal("1.00")


def test_clear_cart_resets_everything():
    state = _run([
        AddItem(_item(1)),
        AddItem(_item(2)),
        SetCustomAmount(Decimal("9")),
        ClearCart(),
    ])

    assert state.items == ()
    assert state.total == 0
    assert state.custom_amount == 0


def test_unknown_action_returns_state():
    state = _run([AddItem(_item(1))])

    assert cart_reducer(state, object()) is state


def test_random_sequences_hold_invariants():
    rng = random.Random(1234)
    catalogue = [_item(i, sell_price=f"{i}.25", inventory_count=i % 4) for i in range(1, 7)]

    for _ in range(200):
        state = CartState()
        for _ in range(30):
            choice = rng.randrange(5)
            item = rng.choice(catalogue)
            if choice == 0:
                action = AddItem(item)
            elif choice == 1:
                # Stock may have changed since the line was added
                action = AddItem(_item(item.id, sell_price=f"{item.id}.25", inventory_count=rng.randint(0, 5)))
            elif choice == 2:
                action = UpdateQuantity(item_id=item.id, quantity=rng.randint(-2, 6))
            elif choice == 3:
                action = RemoveItem(item.id)
            else:
                action = SetCustomAmount(Decimal(rng.randint(0, 40)))

            state = cart_reducer(state, action)

            assert state.total == _expected_total(state)
            for line in state.items:
                assert 1 <= line.quantity <= line.item.inventory_count
            assert len({line.item.id for line in state.items}) == len(state.items)


def test_add_after_restock_refreshes_line_snapshot():
    state = _run([AddItem(_item(1, inventory_count=2))] * 2)

    state = cart_reducer(state, AddItem(_item(1, inventory_count=10)))

    line = state.items[0]
    assert line.quantity == 3
    assert line.item.inventory_count == 10
    assert line.quantity <= line.item.inventory_count


def test_set_custom_amount_from_float_keeps_decimal_value():
    state = cart_reducer(CartState(), SetCustomAmount(0.1))

    assert state.custom_amount == Decimal("0.1")
