"""
Application constants for the storefront client

Centralizes API paths, header names and other fixed values.
"""

from typing import Final


class ApiPaths:
    """Backend endpoint paths, relative to the API base URL"""

    CART: Final[str] = "/cart"
    CART_ADD: Final[str] = "/cart/add"
    CART_ITEM: Final[str] = "/cart/items/{item_id}"
    WISHLIST: Final[str] = "/wishlist"
    WISHLIST_ITEM: Final[str] = "/wishlist/{item_id}"
    CHECKOUT: Final[str] = "/checkout"


class HttpHeaders:
    """Header names sent with every backend call"""

    AUTHORIZATION: Final[str] = "Authorization"
    IDEMPOTENCY_KEY: Final[str] = "Idempotency-Key"


class CheckoutSettings:
    """Checkout form defaults"""

    DEFAULT_COUNTRY: Final[str] = "India"
    REQUIRED_ADDRESS_FIELDS: Final[tuple] = ("line1", "district", "state", "country", "phone")


class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT: Final[int] = 5
    MAIN_LOG_FILE: Final[str] = "storefront.log"
    JSON_LOG_FILE: Final[str] = "storefront.json.log"
