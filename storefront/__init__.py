"""
Storefront client core

Cart synchronization, optimistic wishlist and cart mutations, checkout
composition and order submission against the store backend.
"""

__version__ = "1.0.0"
