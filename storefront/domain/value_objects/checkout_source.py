"""
Checkout source value objects

A checkout draws its items from exactly one of two shapes: a selection of
existing cart items, or a single "buy now" item that never enters the cart.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Union

from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.product_id import ProductId


@dataclass(frozen=True)
class CartSubset:
    """A non-empty selection of cart item ids"""

    cart_item_ids: FrozenSet[int]

    def __post_init__(self):
        ids = frozenset(self.cart_item_ids)
        if not ids:
            raise ValueError("Cart subset must select at least one cart item")
        if any(isinstance(i, bool) or not isinstance(i, int) or i <= 0 for i in ids):
            raise ValueError("Cart item ids must be positive integers")
        object.__setattr__(self, "cart_item_ids", ids)

    @classmethod
    def of(cls, ids: Iterable[int]) -> "CartSubset":
        return cls(frozenset(ids))


@dataclass(frozen=True)
class DirectItem:
    """A single item bought directly from the product page"""

    product_id: ProductId
    quantity: int
    name: str
    price: Money
    image_ref: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.product_id, ProductId):
            object.__setattr__(self, "product_id", ProductId(self.product_id))
        if not isinstance(self.price, Money):
            object.__setattr__(self, "price", Money(self.price))
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if not self.name:
            raise ValueError("Direct item name cannot be empty")


CheckoutSource = Union[CartSubset, DirectItem]
