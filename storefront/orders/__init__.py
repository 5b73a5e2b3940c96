"""Orders package: checkout from the cart."""
from .checkout import (
    CheckoutError,
    CheckoutForm,
    OrderReceipt,
    build_order_payload,
    order_total,
    place_order,
    shipping_cost,
)

__all__ = [
    "CheckoutError",
    "CheckoutForm",
    "OrderReceipt",
    "build_order_payload",
    "order_total",
    "place_order",
    "shipping_cost",
]
