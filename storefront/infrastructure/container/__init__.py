"""
Application container
"""

from .dependency_injection import (
    StorefrontContainer,
    get_container,
    initialize_container,
    reset_container,
)

__all__ = [
    "StorefrontContainer",
    "get_container",
    "initialize_container",
    "reset_container",
]
