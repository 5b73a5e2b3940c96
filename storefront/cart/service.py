"""Cart engine: applies intents, persists after each one, emits notifications."""
from typing import Optional

from storefront.logging import get_logger
from storefront.services.notifications import (
    MSG_ITEM_REMOVED,
    TITLE_ITEM_ADDED,
    TITLE_ITEM_REMOVED,
    Notifier,
    item_added_message,
)
from .intents import AddItem, CartIntent, Clear, RemoveItem, UpdateQuantity, apply_intent
from .models import CartLine, CartState
from .storage import CartStorage
from .validation import hydrate

logger = get_logger(__name__)


class CartEngine:
    """
    Owns one cart session's state.

    - State values are immutable; every intent produces a new CartState
    - Persists after each transition; a failed save is logged and the
      in-memory state stays authoritative
    - Notifier failures are logged and never reach the caller
    """

    def __init__(
        self,
        storage: CartStorage,
        notifier: Optional[Notifier] = None,
        state: Optional[CartState] = None,
    ):
        self.storage = storage
        self.notifier = notifier
        self._state = state if state is not None else CartState()

    @property
    def state(self) -> CartState:
        return self._state

    def load(self) -> CartState:
        """Hydrate from storage. Unreadable storage counts as an empty cart."""
        try:
            snapshot = self.storage.load()
        except Exception as e:
            logger.error(f"Failed to load cart: {e}", exc_info=True)
            snapshot = None

        self._state = hydrate(snapshot)
        return self._state

    def dispatch(self, intent: CartIntent) -> CartState:
        """Apply an intent, persist the result and return it."""
        self._state = apply_intent(self._state, intent)
        self._persist()
        return self._state

    def add_item(self, line: CartLine) -> CartState:
        state = self.dispatch(AddItem(line))
        self.notify(TITLE_ITEM_ADDED, item_added_message(line.name))
        return state

    def update_quantity(self, product_id: int, quantity: int) -> CartState:
        return self.dispatch(UpdateQuantity(product_id, quantity))

    def remove_item(self, product_id: int) -> CartState:
        state = self.dispatch(RemoveItem(product_id))
        self.notify(TITLE_ITEM_REMOVED, MSG_ITEM_REMOVED)
        return state

    def clear(self) -> CartState:
        return self.dispatch(Clear())

    def _persist(self) -> None:
        try:
            self.storage.save(self._state.to_dict())
        except Exception as e:
            logger.error(f"Failed to persist cart: {e}", exc_info=True)

    def notify(self, title: str, description: str) -> None:
        """Fire-and-forget notification through the injected notifier."""
        if self.notifier is None:
            return
        try:
            self.notifier.notify(title, description)
        except Exception as e:
            logger.warning(f"Notifier failed for '{title}': {e}")
