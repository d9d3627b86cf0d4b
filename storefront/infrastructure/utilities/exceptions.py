"""
Custom exceptions for the storefront client

Every backend or validation failure is converted into one of these kinds at
its call site.
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Redirect(Enum):
    """Navigation outcomes a surface must act on"""

    SIGN_IN = "sign_in"
    CART = "cart"


class StorefrontError(Exception):
    """Base exception for the storefront client"""

    redirect: Optional[Redirect] = None

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or "GENERAL_ERROR"


class AuthRequiredError(StorefrontError):
    """Missing, expired or rejected bearer credential"""

    redirect = Redirect.SIGN_IN

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "Please log in to continue.", "AUTH_REQUIRED")


class EmptyResourceError(StorefrontError):
    """The backend reports the resource does not exist (404)"""

    def __init__(self, resource: str):
        super().__init__(
            f"Resource not found: {resource}", "Nothing here yet.", "EMPTY_RESOURCE"
        )
        self.resource = resource


class ValidationError(StorefrontError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, message, "VALIDATION_ERROR")
        self.field = field


class StaleSelectionError(StorefrontError):
    """Selected cart items are no longer present in the cart"""

    redirect = Redirect.CART

    def __init__(self, missing_ids=None):
        super().__init__(
            "Selected cart items not found",
            "Failed to load selected cart items. Please return to your cart.",
            "STALE_SELECTION",
        )
        self.missing_ids = frozenset(missing_ids or ())


class NetworkOrServerError(StorefrontError):
    """Transport failure or unexpected backend response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            "Something went wrong while talking to the store. Please try again.",
            "NETWORK_OR_SERVER_ERROR",
        )
        self.status_code = status_code


class ConfirmationDeclinedError(StorefrontError):
    """User declined a destructive operation"""

    def __init__(self, operation: str):
        super().__init__(
            f"Confirmation declined for {operation}",
            "Nothing was changed.",
            "CONFIRMATION_DECLINED",
        )
        self.operation = operation


def validate_and_raise(condition: bool, error_class: type, *args, **kwargs):
    """Helper function to validate condition and raise specific error"""
    if not condition:
        raise error_class(*args, **kwargs)


def report_error(error: StorefrontError, operation: str) -> None:
    """Log a converted error with its taxonomy code"""
    context = {
        "operation": operation,
        "error_code": error.error_code,
        "error_type": type(error).__name__,
    }
    if isinstance(error, NetworkOrServerError):
        logger.error("Backend error in %s: %s", operation, error, extra=context)
    else:
        logger.warning("Error in %s: %s", operation, error, extra=context)
