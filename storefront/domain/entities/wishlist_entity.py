"""
Wishlist Entity
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.product_id import ProductId


@dataclass(frozen=True)
class WishlistItem:
    """A saved-for-later product reference"""

    id: int
    product_id: ProductId
    name: str
    price: Money
    image_ref: Optional[str] = None
    added_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.product_id, ProductId):
            object.__setattr__(self, "product_id", ProductId(self.product_id))
        if not isinstance(self.price, Money):
            object.__setattr__(self, "price", Money(self.price))
