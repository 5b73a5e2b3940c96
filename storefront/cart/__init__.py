"""Cart package: models, intents, validation, storage, and engine facade."""
from .intents import AddItem, CartIntent, Clear, RemoveItem, UpdateQuantity, apply_intent
from .models import CartLine, CartState, calculate_total, line_from_product
from .service import CartEngine
from .storage import CartStorage, MemoryCartStorage, MemoryCartStorageRegistry, RedisCartStorage
from .validation import CartLineRecord, hydrate, validate_line

__all__ = [
    "AddItem",
    "CartIntent",
    "Clear",
    "RemoveItem",
    "UpdateQuantity",
    "apply_intent",
    "CartLine",
    "CartState",
    "calculate_total",
    "line_from_product",
    "CartEngine",
    "CartStorage",
    "MemoryCartStorage",
    "MemoryCartStorageRegistry",
    "RedisCartStorage",
    "CartLineRecord",
    "hydrate",
    "validate_line",
]
