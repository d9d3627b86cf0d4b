"""
Domain value objects package

Contains immutable value objects that represent concepts in the storefront domain.
"""

from .checkout_source import CartSubset, CheckoutSource, DirectItem
from .money import Money
from .order_summary import OrderSummary, summarize
from .payment_method import PaymentMethod
from .phone_number import PhoneNumber
from .product_id import ProductId
from .session import Session
from .shipping_address import ShippingAddress

__all__ = [
    "CartSubset",
    "CheckoutSource",
    "DirectItem",
    "Money",
    "OrderSummary",
    "summarize",
    "PaymentMethod",
    "PhoneNumber",
    "ProductId",
    "Session",
    "ShippingAddress",
]
