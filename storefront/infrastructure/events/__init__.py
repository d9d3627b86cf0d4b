"""
Cross-surface events

Contains the cart changed notification channel.
"""

from .cart_changed_channel import CartChangedChannel, CartChangedListener, Subscription

__all__ = ["CartChangedChannel", "CartChangedListener", "Subscription"]
