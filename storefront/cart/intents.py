"""Cart intents and the pure transition function that folds them."""
from dataclasses import dataclass, replace
from typing import Union

from .models import CartLine, CartState

MIN_QUANTITY = 1


@dataclass(frozen=True)
class AddItem:
    line: CartLine


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class RemoveItem:
    product_id: int


@dataclass(frozen=True)
class Clear:
    pass


CartIntent = Union[AddItem, UpdateQuantity, RemoveItem, Clear]


def _add_item(state: CartState, line: CartLine) -> CartState:
    if state.find(line.product_id) is None:
        return CartState(items=state.items + (line,))

    # Existing snapshot (name, prices, image) is kept; only quantity grows
    items = tuple(
        replace(existing, quantity=existing.quantity + line.quantity)
        if existing.product_id == line.product_id
        else existing
        for existing in state.items
    )
    return CartState(items=items)


def _update_quantity(state: CartState, product_id: int, quantity: int) -> CartState:
    if state.find(product_id) is None:
        return state

    quantity = max(MIN_QUANTITY, quantity)
    items = tuple(
        replace(line, quantity=quantity) if line.product_id == product_id else line
        for line in state.items
    )
    return CartState(items=items)


def _remove_item(state: CartState, product_id: int) -> CartState:
    if state.find(product_id) is None:
        return state
    return CartState(items=tuple(line for line in state.items if line.product_id != product_id))


def apply_intent(state: CartState, intent: CartIntent) -> CartState:
    """
    Return the cart state that results from applying `intent` to `state`.

    Pure and total: never mutates `state` and never raises for a well-typed
    intent. Unknown product ids make UpdateQuantity/RemoveItem no-ops.
    """
    if isinstance(intent, AddItem):
        return _add_item(state, intent.line)
    if isinstance(intent, UpdateQuantity):
        return _update_quantity(state, intent.product_id, intent.quantity)
    if isinstance(intent, RemoveItem):
        return _remove_item(state, intent.product_id)
    if isinstance(intent, Clear):
        return CartState()
    raise TypeError(f"Unsupported cart intent: {intent!r}")
