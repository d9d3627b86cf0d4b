"""
Cart DTOs

Data Transfer Objects for cart synchronization results.
"""

from dataclasses import dataclass
from typing import Optional

from storefront.domain.entities.cart_entity import Cart
from storefront.infrastructure.utilities.exceptions import Redirect, StorefrontError


@dataclass
class CartSnapshotResponse:
    """Response for a cart fetch"""

    success: bool
    cart: Optional[Cart] = None
    error: Optional[StorefrontError] = None
    # False when a newer fetch or mutation superseded this one
    applied: bool = True

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None

    @property
    def redirect(self) -> Optional[Redirect]:
        return self.error.redirect if self.error else None
