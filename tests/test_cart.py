"""
Tests for the cart engine
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock

from storefront.cart import (
    AddItem,
    CartEngine,
    CartLine,
    CartState,
    Clear,
    MemoryCartStorage,
    RemoveItem,
    UpdateQuantity,
    apply_intent,
    calculate_total,
    hydrate,
)


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_create_cart_line(self, widget_line):
        """Test creating a cart line normalizes the price."""
        assert widget_line.product_id == 1
        assert widget_line.quantity == 2
        assert widget_line.price == Decimal("10")
        assert isinstance(widget_line.price, Decimal)
        assert widget_line.discount_price is None

    def test_effective_price_without_discount(self, widget_line):
        assert widget_line.effective_price == Decimal("10")

    def test_effective_price_uses_discount_price(self, gadget_line):
        """Discount price is the charged price, even though it may exceed price."""
        assert gadget_line.effective_price == Decimal("15")

        higher = CartLine(product_id=9, name="Odd", price=10, discount_price=12)
        assert higher.effective_price == Decimal("12")

    def test_zero_discount_price_is_still_a_price(self):
        line = CartLine(product_id=9, name="Free", price=10, discount_price=0)
        assert line.effective_price == Decimal("0")

    def test_line_total(self, widget_line):
        # 10 * 2 = 20
        assert widget_line.line_total == Decimal("20.00")

    def test_float_prices_do_not_drift(self):
        line = CartLine(product_id=5, name="Pen", price=0.1, quantity=3)
        assert line.line_total == Decimal("0.30")

    def test_to_dict(self, gadget_line):
        data = gadget_line.to_dict()
        assert data["product_id"] == 2
        assert data["price"] == "20"
        assert data["discount_price"] == "15"
        assert data["image_url"] == "https://img.test/gadget.png"


class TestCalculateTotal:
    """Tests for the pure total function."""

    def test_empty(self):
        assert calculate_total([]) == 0

    def test_sums_effective_prices(self, widget_line, gadget_line):
        # 10 * 2 + 15 * 1 = 35
        assert calculate_total([widget_line, gadget_line]) == Decimal("35.00")

    def test_state_total_is_derived(self, widget_line):
        state = CartState(items=[widget_line])
        assert state.total == Decimal("20.00")
        assert state.to_dict()["total"] == "20.00"


class TestApplyIntent:
    """Tests for the intent transition function."""

    def test_add_to_empty_cart(self, widget_line):
        state = apply_intent(CartState(), AddItem(widget_line))

        assert state.items == (widget_line,)
        assert state.total == 20

    def test_add_distinct_products(self):
        state = CartState()
        for pid in range(1, 6):
            state = apply_intent(state, AddItem(CartLine(product_id=pid, name=f"P{pid}", price=pid, quantity=pid)))

        assert len(state.items) == 5
        # 1 + 4 + 9 + 16 + 25
        assert state.total == 55
        assert state.total == sum(line.line_total for line in state.items)
        assert [line.product_id for line in state.items] == [1, 2, 3, 4, 5]

    def test_add_same_product_accumulates_quantity(self, widget_line):
        state = apply_intent(CartState(), AddItem(widget_line))
        state = apply_intent(state, AddItem(CartLine(product_id=1, name="Widget", price=10, quantity=5)))

        assert len(state.items) == 1
        assert state.items[0].quantity == 7

    def test_add_same_product_keeps_existing_snapshot(self, widget_line):
        state = apply_intent(CartState(), AddItem(widget_line))
        repriced = CartLine(product_id=1, name="Widget v2", price=99, discount_price=50, quantity=1)
        state = apply_intent(state, AddItem(repriced))

        line = state.items[0]
        assert line.name == "Widget"
        assert line.price == 10
        assert line.discount_price is None
        assert line.image_url == "https://img.test/widget.png"
        assert state.total == 30

    def test_add_does_not_mutate_previous_state(self, widget_line):
        before = apply_intent(CartState(), AddItem(widget_line))
        after = apply_intent(before, AddItem(widget_line))

        assert before.items[0].quantity == 2
        assert after.items[0].quantity == 4

    @pytest.mark.parametrize("requested", [0, -5])
    def test_update_quantity_clamps_to_one(self, widget_line, requested):
        state = apply_intent(CartState(items=[widget_line]), UpdateQuantity(1, requested))

        assert state.items[0].quantity == 1
        assert state.total == 10

    def test_update_quantity(self, widget_line, gadget_line):
        state = CartState(items=[widget_line, gadget_line])
        state = apply_intent(state, UpdateQuantity(2, 4))

        assert state.items[1].quantity == 4
        # 20 + 15 * 4 = 80
        assert state.total == 80

    def test_update_unknown_product_is_noop(self, widget_line):
        state = CartState(items=[widget_line])
        assert apply_intent(state, UpdateQuantity(99, 3)) == state

    def test_remove_item(self, widget_line, gadget_line):
        state = apply_intent(CartState(items=[widget_line, gadget_line]), RemoveItem(1))

        assert state.items == (gadget_line,)
        assert state.total == 15

    def test_remove_unknown_product_is_noop(self, widget_line):
        state = CartState(items=[widget_line])
        assert apply_intent(state, RemoveItem(99)) == state

    def test_clear(self, widget_line, gadget_line):
        state = apply_intent(CartState(items=[widget_line, gadget_line]), Clear())

        assert state.items == ()
        assert state.total == 0

    def test_clear_empty_cart(self):
        state = apply_intent(CartState(), Clear())
        assert state == CartState()
        assert state.total == 0

    def test_unknown_intent(self):
        with pytest.raises(TypeError):
            apply_intent(CartState(), "ADD_ITEM")


class TestCartScenarios:
    """End-to-end intent sequences."""

    def test_widget_scenario(self):
        state = apply_intent(CartState(), AddItem(CartLine(product_id=1, name="Widget", price=10, quantity=2)))
        state = apply_intent(state, AddItem(CartLine(product_id=1, name="Widget", price=10, quantity=1)))

        assert len(state.items) == 1
        assert state.items[0].quantity == 3
        assert state.total == 30

    def test_discount_price_scenario(self, gadget_line):
        state = apply_intent(CartState(), AddItem(gadget_line))
        assert state.total == 15

    def test_persist_hydrate_round_trip(self, widget_line, gadget_line):
        state = CartState()
        state = apply_intent(state, AddItem(widget_line))
        state = apply_intent(state, AddItem(gadget_line))
        state = apply_intent(state, UpdateQuantity(1, 5))
        state = apply_intent(state, AddItem(CartLine(product_id=3, name="Pen", price=1.25, quantity=4)))

        restored = hydrate(state.to_dict())

        assert restored == state
        assert restored.total == state.total

    def test_empty_round_trip(self):
        assert hydrate(CartState().to_dict()) == CartState()


class TestCartEngine:
    """Tests for the CartEngine facade."""

    def test_starts_empty(self, engine):
        assert engine.state == CartState()
        assert engine.state.item_count == 0

    def test_add_item_notifies(self, engine, toasts, widget_line):
        engine.add_item(widget_line)

        toast = toasts.pending[0]
        assert toast.title == "Added to Cart"
        assert toast.description == "Widget has been added to your cart."
        assert toast.duration == 2000

    def test_remove_item_notifies(self, engine, toasts, widget_line):
        engine.add_item(widget_line)
        toasts.drain()

        state = engine.remove_item(1)

        assert state.is_empty
        assert [t.title for t in toasts.pending] == ["Item Removed"]
        assert toasts.pending[0].description == "Item has been removed from your cart."

    def test_update_and_clear_are_silent(self, engine, toasts, widget_line):
        engine.add_item(widget_line)
        toasts.drain()

        engine.update_quantity(1, 3)
        engine.clear()

        assert toasts.pending == []

    def test_persists_after_every_mutation(self, engine, memory_storage, widget_line, gadget_line):
        engine.add_item(widget_line)
        assert memory_storage.load() == engine.state.to_dict()

        engine.add_item(gadget_line)
        engine.update_quantity(2, 3)
        assert memory_storage.load()["total"] == "65.00"

        engine.remove_item(1)
        assert len(memory_storage.load()["items"]) == 1

        engine.clear()
        assert memory_storage.load() == {"items": [], "total": "0.00"}

    def test_item_count(self, engine, widget_line, gadget_line):
        engine.add_item(widget_line)
        engine.add_item(gadget_line)
        assert engine.state.item_count == 3

    def test_load_hydrates_from_storage(self, widget_line, gadget_line):
        stored = CartState(items=[widget_line, gadget_line]).to_dict()
        engine = CartEngine(storage=MemoryCartStorage(stored))

        state = engine.load()

        assert state == CartState(items=[widget_line, gadget_line])
        assert engine.state.total == 35

    def test_load_from_empty_storage(self, engine):
        assert engine.load() == CartState()

    def test_load_failure_is_treated_as_absent(self, caplog):
        storage = Mock()
        storage.load.side_effect = ConnectionError("redis down")
        engine = CartEngine(storage=storage)

        state = engine.load()

        assert state == CartState()
        assert "Failed to load cart" in caplog.text

    def test_save_failure_keeps_in_memory_state(self, widget_line, caplog):
        storage = Mock()
        storage.save.side_effect = ConnectionError("redis down")
        engine = CartEngine(storage=storage)

        state = engine.add_item(widget_line)

        assert state.total == 20
        assert engine.state is state
        assert "Failed to persist cart" in caplog.text

    def test_notifier_failure_is_not_observable(self, memory_storage, widget_line):
        notifier = Mock()
        notifier.notify.side_effect = RuntimeError("toast overflow")
        engine = CartEngine(storage=memory_storage, notifier=notifier)

        state = engine.add_item(widget_line)
        engine.remove_item(1)

        assert state.total == 20
        assert notifier.notify.call_count == 2

    def test_works_without_notifier(self, memory_storage, widget_line):
        engine = CartEngine(storage=memory_storage)
        engine.add_item(widget_line)
        assert engine.remove_item(1).is_empty

    def test_dispatch_returns_new_state(self, engine, widget_line):
        first = engine.dispatch(AddItem(widget_line))
        second = engine.dispatch(UpdateQuantity(1, 9))

        assert first.items[0].quantity == 2
        assert second.items[0].quantity == 9
        assert engine.state is second
