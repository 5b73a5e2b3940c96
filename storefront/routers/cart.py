"""
Cart Router

Shopping cart endpoints over the cart engine. Each request rebuilds the
engine from the session's stored snapshot; every mutation is persisted
before the response is sent.

Response format:
- Money values are floats (USD) for the frontend
- `notifications` carries the toasts raised by the request
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import CartEngine, CartState
from storefront.logging import get_logger
from storefront.orders import CheckoutError, CheckoutForm, order_total, place_order, shipping_cost
from storefront.services.api_client import StorefrontAPI, StorefrontAPIError
from storefront.services.money import to_float
from storefront.services.notifications import ToastCollector
from .deps import get_cart_engine, get_notifier, get_storefront_api
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _format_cart_response(state: CartState, notifier: ToastCollector) -> dict:
    return {
        "items": [
            {
                "product_id": line.product_id,
                "name": line.name,
                "image_url": line.image_url,
                "price": to_float(line.price),
                "discount_price": to_float(line.discount_price) if line.discount_price is not None else None,
                "effective_price": to_float(line.effective_price),
                "quantity": line.quantity,
                "line_total": to_float(line.line_total),
            }
            for line in state.items
        ],
        "total": to_float(state.total),
        "item_count": state.item_count,
        "shipping": to_float(shipping_cost(state)),
        "order_total": to_float(order_total(state)),
        "notifications": [toast.to_dict() for toast in notifier.drain()],
    }


def _current_user_id(api: StorefrontAPI) -> Optional[int]:
    """Id of the user logged in on the backend session, or None for guests."""
    try:
        user = api.current_user()
    except StorefrontAPIError as e:
        logger.warning(f"Could not resolve checkout user: {e}")
        return None
    return user.id if user else None


@router.get("")
def get_cart(
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
):
    """Get the session's cart."""
    return _format_cart_response(engine.state, notifier)


@router.post("/items")
def add_to_cart(
    request: AddToCartRequest,
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
):
    """Add a product line; an existing line for the same product only grows in quantity."""
    state = engine.add_item(request.to_line())
    return _format_cart_response(state, notifier)


@router.patch("/items/{product_id}")
def update_cart_item(
    product_id: int,
    request: UpdateCartItemRequest,
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
):
    """Set a line's quantity (minimum 1)."""
    state = engine.update_quantity(product_id, request.quantity)
    return _format_cart_response(state, notifier)


@router.delete("/items/{product_id}")
def remove_cart_item(
    product_id: int,
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
):
    """Remove a line from the cart."""
    state = engine.remove_item(product_id)
    return _format_cart_response(state, notifier)


@router.delete("")
def clear_cart(
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
):
    """Empty the cart."""
    state = engine.clear()
    return _format_cart_response(state, notifier)


@router.post("/checkout")
def checkout(
    request: CheckoutForm,
    engine: CartEngine = Depends(get_cart_engine),
    notifier: ToastCollector = Depends(get_notifier),
    api: StorefrontAPI = Depends(get_storefront_api),
):
    """Place an order for the cart. The cart is cleared only if the backend accepts it."""
    try:
        receipt = place_order(engine, api, request, user_id=_current_user_id(api))
    except CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Checkout failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to place order")

    return {
        "order": receipt.to_dict(),
        "cart": _format_cart_response(engine.state, notifier),
    }
