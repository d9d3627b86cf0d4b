"""
HTTP gateway to the store backend
"""

from .api_client import StorefrontApiClient

__all__ = ["StorefrontApiClient"]
