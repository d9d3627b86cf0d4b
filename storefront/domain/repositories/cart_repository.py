"""
Cart repository interface

Defines the contract for backend cart operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.entities.cart_entity import Cart
from storefront.domain.value_objects.product_id import ProductId
from storefront.domain.value_objects.session import Session


class CartRepository(ABC):
    """Repository interface for cart operations"""

    @abstractmethod
    async def fetch_cart(self, session: Session) -> Optional[Cart]:
        """Get the current cart, or None when the backend has none"""

    @abstractmethod
    async def add_item(
        self, session: Session, product_id: ProductId, quantity: int
    ) -> Optional[Cart]:
        """Add a product; returns the updated cart when the backend sends one"""

    @abstractmethod
    async def remove_item(self, session: Session, cart_item_id: int) -> Cart:
        """Remove one cart line and return the updated cart"""

    @abstractmethod
    async def delete_cart(self, session: Session) -> None:
        """Delete the whole cart"""
