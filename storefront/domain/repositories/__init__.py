"""
Domain repositories package

Interfaces the application layer uses to reach the backend and the session.
"""

from .cart_repository import CartRepository
from .order_repository import CheckoutRequest, OrderRepository, OrderResult
from .session_accessor import SessionAccessor
from .wishlist_repository import WishlistRepository

__all__ = [
    "CartRepository",
    "CheckoutRequest",
    "OrderRepository",
    "OrderResult",
    "SessionAccessor",
    "WishlistRepository",
]
