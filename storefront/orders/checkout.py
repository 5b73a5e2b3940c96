"""
Checkout - turns the cart into a backend order.

Flow:
1. Validate the shipping form
2. Post the order (items priced at their effective price) to the backend
3. Snapshot the receipt, then clear the cart

A backend failure leaves the cart untouched and is reported to the user
through the cart's notifier.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field

from storefront.cart import CartEngine, CartLine, CartState
from storefront.config import get_settings
from storefront.errors import ERROR_CART_EMPTY, ERROR_ORDER_FAILED
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import OrderStatus
from storefront.services.api_client import StorefrontAPI, StorefrontAPIError
from storefront.services.money import add, round_money, to_float
from storefront.services.notifications import TITLE_ORDER_FAILED

logger = get_logger(__name__)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CheckoutError(Exception):
    """Checkout could not be completed. The cart is left as it was."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CheckoutForm(BaseModel):
    """Shipping information collected on the checkout page."""
    full_name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)

    class Config:
        str_strip_whitespace = True

    @property
    def shipping_address(self) -> str:
        return f"{self.address}, {self.city}, {self.state} {self.zip_code}"


@dataclass(frozen=True)
class OrderReceipt:
    """What the confirmation screen shows once the cart has been cleared."""
    order_id: Optional[int]
    items: Tuple[CartLine, ...]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "items": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "quantity": line.quantity,
                    "price": to_float(line.effective_price),
                    "line_total": to_float(line.line_total),
                }
                for line in self.items
            ],
            "subtotal": to_float(self.subtotal),
            "shipping": to_float(self.shipping),
            "total": to_float(self.total),
        }


def shipping_cost(state: CartState) -> Decimal:
    """Flat shipping, charged only when there is something to ship."""
    if state.is_empty:
        return Decimal("0")
    return round_money(get_settings().shipping_cost)


def order_total(state: CartState) -> Decimal:
    return round_money(add(state.total, shipping_cost(state)))


def build_order_payload(
    state: CartState,
    form: CheckoutForm,
    user_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Order body in the backend's camelCase format."""
    return {
        "userId": user_id,
        "status": OrderStatus.PENDING.value,
        "totalAmount": to_float(order_total(state)),
        "shippingAddress": form.shipping_address,
        "createdAt": datetime.now(timezone.utc).isoformat(),
        "items": [
            {
                "productId": line.product_id,
                "quantity": line.quantity,
                "price": to_float(line.effective_price),
            }
            for line in state.items
        ],
    }


def place_order(
    engine: CartEngine,
    api: StorefrontAPI,
    form: CheckoutForm,
    user_id: Optional[int] = None,
) -> OrderReceipt:
    """Place an order for the engine's cart and clear the cart on success."""
    state = engine.state
    if state.is_empty:
        raise CheckoutError(ERROR_CART_EMPTY)

    payload = build_order_payload(state, form, user_id)
    try:
        order = api.create_order(payload)
    except StorefrontAPIError as e:
        logger.error(f"Order placement failed for user {sanitize_id_for_logging(user_id)}: {e}")
        engine.notify(TITLE_ORDER_FAILED, e.message or ERROR_ORDER_FAILED)
        # Auth problems are the caller's to fix; anything else is a bad gateway
        status_code = e.status_code if e.status_code in (401, 403) else 502
        raise CheckoutError(ERROR_ORDER_FAILED, status_code=status_code) from e
    except ValueError as e:
        # The order exists on the backend; only its response body is unreadable
        logger.error(f"Order accepted but response could not be parsed: {e}")
        order_id = None
    else:
        order_id = order.id

    # Receipt is taken from the pre-clear state
    receipt = OrderReceipt(
        order_id=order_id,
        items=state.items,
        subtotal=state.total,
        shipping=shipping_cost(state),
        total=order_total(state),
    )
    engine.clear()
    return receipt
