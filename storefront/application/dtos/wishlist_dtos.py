"""
Wishlist DTOs
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.infrastructure.utilities.exceptions import Redirect, StorefrontError


@dataclass
class WishlistResponse:
    """Response for loading or editing the wishlist view"""

    success: bool
    items: Tuple[WishlistItem, ...] = ()
    error: Optional[StorefrontError] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None

    @property
    def redirect(self) -> Optional[Redirect]:
        return self.error.redirect if self.error else None
