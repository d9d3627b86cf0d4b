"""
Repository implementations backed by the store HTTP API
"""

from .http_cart_repository import HttpCartRepository
from .http_order_repository import HttpOrderRepository
from .http_wishlist_repository import HttpWishlistRepository

__all__ = ["HttpCartRepository", "HttpOrderRepository", "HttpWishlistRepository"]
