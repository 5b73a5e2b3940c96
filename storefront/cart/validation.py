"""Schema check for persisted cart snapshots."""
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from storefront.logging import get_logger
from .intents import AddItem, apply_intent
from .models import CartLine, CartState

logger = get_logger(__name__)


class CartLineRecord(BaseModel):
    """One persisted cart line. Accepts snake_case and the browser client's camelCase."""
    product_id: int
    name: str
    price: Decimal = Field(ge=0)
    discount_price: Optional[Decimal] = Field(default=None, ge=0)
    image_url: str
    quantity: int = Field(ge=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"

    def to_line(self) -> CartLine:
        return CartLine(
            product_id=self.product_id,
            name=self.name,
            image_url=self.image_url,
            price=self.price,
            discount_price=self.discount_price,
            quantity=self.quantity,
        )


def validate_line(raw: Any) -> Optional[CartLine]:
    """Return a well-formed CartLine for `raw`, or None if it fails the schema."""
    try:
        return CartLineRecord.model_validate(raw).to_line()
    except ValidationError as e:
        logger.warning(f"Invalid cart item dropped: {e.error_count()} error(s)")
        return None


def hydrate(snapshot: Any) -> CartState:
    """
    Rebuild a CartState from a persisted snapshot.

    Invalid lines are dropped one by one; the rest are replayed through
    AddItem, so duplicate product ids in a damaged snapshot are merged.
    The stored total is ignored and recomputed.
    """
    if not isinstance(snapshot, dict):
        return CartState()

    raw_items = snapshot.get("items")
    if not isinstance(raw_items, list):
        return CartState()

    state = CartState()
    for raw in raw_items:
        line = validate_line(raw)
        if line is not None:
            state = apply_intent(state, AddItem(line))
    return state
