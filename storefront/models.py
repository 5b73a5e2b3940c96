"""
Pydantic Models - Storefront backend resources

Mirrors the REST backend's users/products/orders/order_items/reviews
resources. The backend speaks camelCase JSON; models accept either
camelCase or snake_case and dump camelCase.
"""
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from storefront.services.money import to_decimal as _to_decimal, to_float as _to_float


class OrderStatus(str, Enum):
    """Order status as stored by the backend."""
    PENDING = "pending"


class BackendModel(BaseModel):
    """Base for backend resources: camelCase on the wire, unknown fields ignored."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class User(BackendModel):
    id: int
    username: str
    is_admin: bool = False


class ProductInput(BackendModel):
    """Writable product fields (admin create/update)."""
    name: str
    description: str
    price: Decimal = Field(ge=0)
    discount_price: Optional[Decimal] = Field(default=None, ge=0)
    image_url: str
    category: str
    in_stock: bool = True
    is_new: bool = False
    is_featured: bool = False

    @field_serializer("price", "discount_price")
    def _serialize_money(self, v: Optional[Decimal]) -> Optional[float]:
        return _to_float(v) if v is not None else None


class Product(ProductInput):
    id: int
    rating: Optional[float] = 0
    review_count: Optional[int] = 0

    @field_validator("price", "discount_price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        if v is None:
            return None
        return _to_decimal(v)

    @field_validator("rating", "review_count", mode="before")
    @classmethod
    def default_missing_stats(cls, v):
        # Unrated products come back with null stats
        return 0 if v is None else v


class OrderItem(BackendModel):
    id: Optional[int] = None
    order_id: Optional[int] = None
    product_id: int
    quantity: int
    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class Order(BackendModel):
    id: int
    user_id: Optional[int] = None
    status: str = OrderStatus.PENDING.value
    total_amount: Decimal
    shipping_address: str
    created_at: str
    items: List[OrderItem] = []

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)


class Review(BackendModel):
    id: int
    product_id: int
    user_id: int
    rating: int
    comment: str
    username: str
    created_at: str


class ReviewRequest(BaseModel):
    """Review form as submitted by the product page."""
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=3)


class Credentials(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class Registration(Credentials):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
