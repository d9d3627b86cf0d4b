"""
Application Layer

Contains the storefront use cases: cart synchronization, cart and wishlist
mutations, checkout composition and order submission. Use cases talk to the
backend only through domain repository interfaces.
"""
