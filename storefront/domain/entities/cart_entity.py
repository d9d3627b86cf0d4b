"""
Cart Entity - server-owned cart as seen by the client
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.product_id import ProductId


@dataclass(frozen=True)
class CartItem:
    """A single line of the cart"""

    id: int
    product_id: ProductId
    name: str
    unit_price: Money
    quantity: int
    image_ref: Optional[str] = None

    def __post_init__(self):
        """Validate the item after initialization"""
        if not isinstance(self.product_id, ProductId):
            object.__setattr__(self, "product_id", ProductId(self.product_id))
        if not isinstance(self.unit_price, Money):
            object.__setattr__(self, "unit_price", Money(self.unit_price))
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("Cart item quantity must be at least 1")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    """
    Cart domain entity

    Immutable snapshot: a new Cart replaces the old one after every fetch or
    mutation response.
    """

    id: Optional[int]
    owner_id: Optional[int]
    status: str
    items: Tuple[CartItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def empty(cls) -> "Cart":
        """The explicit empty cart, used when the backend reports none"""
        return cls(id=None, owner_id=None, status="EMPTY", items=())

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        """Number of line items, as shown on the header badge"""
        return len(self.items)

    def select(self, item_ids: Iterable[int]) -> Tuple[CartItem, ...]:
        """Items whose id is in ``item_ids``, in cart order"""
        wanted = frozenset(item_ids)
        return tuple(item for item in self.items if item.id in wanted)
