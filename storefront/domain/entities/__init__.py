"""
Domain entities package

Contains the client-side views of the backend's cart and wishlist.
"""

from .cart_entity import Cart, CartItem
from .wishlist_entity import WishlistItem

__all__ = ["Cart", "CartItem", "WishlistItem"]
