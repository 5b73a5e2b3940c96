"""
Cart API Pydantic Models

Request bodies for the cart endpoints.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from storefront.cart import CartLine


class AddToCartRequest(BaseModel):
    product_id: int
    name: str = Field(min_length=1)
    image_url: str = ""
    price: Decimal = Field(ge=0)
    discount_price: Optional[Decimal] = Field(default=None, ge=0)
    quantity: int = Field(default=1, ge=1)

    def to_line(self) -> CartLine:
        return CartLine(
            product_id=self.product_id,
            name=self.name,
            image_url=self.image_url,
            price=self.price,
            discount_price=self.discount_price,
            quantity=self.quantity,
        )


class UpdateCartItemRequest(BaseModel):
    quantity: int  # values below 1 are clamped to 1

