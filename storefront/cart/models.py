"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from storefront.models import Product
from storefront.services.money import multiply, round_money, to_decimal


@dataclass(frozen=True)
class CartLine:
    """One product line in the cart, with the display snapshot taken at add-time."""
    product_id: int
    name: str
    price: Decimal
    quantity: int = 1
    image_url: str = ""
    discount_price: Optional[Decimal] = None

    def __post_init__(self):
        # Normalize numeric fields
        object.__setattr__(self, "price", to_decimal(self.price))
        if self.discount_price is not None:
            object.__setattr__(self, "discount_price", to_decimal(self.discount_price))

    @property
    def effective_price(self) -> Decimal:
        """Unit price actually charged.

        NOTE: discount_price wins whenever it is set, even though the catalog
        data often carries a discount_price above price. The name reads like a
        reference price but it is the charged one.
        """
        if self.discount_price is not None:
            return self.discount_price
        return self.price

    @property
    def line_total(self) -> Decimal:
        """Total price for all units of this line."""
        return round_money(multiply(self.effective_price, self.quantity))

    def to_dict(self) -> dict:
        """Convert to dictionary for persistence."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "image_url": self.image_url,
            "price": str(self.price),
            "discount_price": str(self.discount_price) if self.discount_price is not None else None,
            "quantity": self.quantity,
        }


def calculate_total(items: Iterable[CartLine]) -> Decimal:
    """Sum of effective price times quantity over all lines, rounded to cents."""
    return round_money(sum((multiply(line.effective_price, line.quantity) for line in items), Decimal("0")))


@dataclass(frozen=True)
class CartState:
    """Shopping cart aggregate. `total` is always derived from `items`."""
    items: Tuple[CartLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def total(self) -> Decimal:
        return calculate_total(self.items)

    @property
    def item_count(self) -> int:
        """Total number of units in cart."""
        return sum(line.quantity for line in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: int) -> Optional[CartLine]:
        return next((line for line in self.items if line.product_id == product_id), None)

    def to_dict(self) -> dict:
        """Snapshot written by the persistence port."""
        return {
            "items": [line.to_dict() for line in self.items],
            "total": str(self.total),
        }


def line_from_product(product: Product, quantity: int = 1) -> CartLine:
    """Build the add-to-cart snapshot for a catalog product."""
    # A zero discount price on the catalog means "no discount"
    discount_price = product.discount_price or None
    return CartLine(
        product_id=product.id,
        name=product.name,
        image_url=product.image_url,
        price=product.price,
        discount_price=discount_price,
        quantity=max(1, quantity),
    )
