"""
Wishlist repository interface
"""

from abc import ABC, abstractmethod
from typing import List

from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.domain.value_objects.product_id import ProductId
from storefront.domain.value_objects.session import Session


class WishlistRepository(ABC):
    """Repository interface for wishlist operations"""

    @abstractmethod
    async def get_wishlist(self, session: Session) -> List[WishlistItem]:
        """Get all wishlist items"""

    @abstractmethod
    async def add_item(self, session: Session, product_id: ProductId) -> None:
        """Add a product to the wishlist"""

    @abstractmethod
    async def remove_item(self, session: Session, wishlist_item_id: int) -> List[WishlistItem]:
        """Remove a wishlist entry and return the updated list"""
