"""
Checkout DTOs

Data Transfer Objects for checkout composition and order submission.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from storefront.domain.repositories.order_repository import OrderResult
from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.order_summary import OrderSummary
from storefront.domain.value_objects.payment_method import PaymentMethod
from storefront.domain.value_objects.product_id import ProductId
from storefront.infrastructure.utilities.constants import CheckoutSettings
from storefront.infrastructure.utilities.exceptions import Redirect, StorefrontError


class CompositionState(Enum):
    """Checkout composer lifecycle"""

    IDLE = "idle"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class SubmissionState(Enum):
    """Order submission lifecycle"""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutLineItem:
    """A normalized item on the checkout page"""

    product_id: ProductId
    name: str
    quantity: int
    unit_price: Money
    image_ref: Optional[str] = None
    cart_item_id: Optional[int] = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class CheckoutForm:
    """Shipping and payment input, kept as typed for correction after a failure"""

    address_line1: str = ""
    address_line2: str = ""
    district: str = ""
    state: str = ""
    country: str = CheckoutSettings.DEFAULT_COUNTRY
    phone_number: str = ""
    alternative_phone_number: str = ""
    payment_method: Optional[Union[PaymentMethod, str]] = None


@dataclass
class CheckoutComposition:
    """Result of resolving a checkout source"""

    state: CompositionState
    items: Tuple[CheckoutLineItem, ...] = ()
    summary: Optional[OrderSummary] = None
    error: Optional[StorefrontError] = None
    redirect: Optional[Redirect] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.redirect is None and bool(self.items)

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None


@dataclass
class OrderSubmissionResponse:
    """Response from order submission"""

    success: bool
    state: Optional[SubmissionState] = None
    order: Optional[OrderResult] = None
    error: Optional[StorefrontError] = None
    ignored: bool = False
    form: Optional[CheckoutForm] = field(default=None, repr=False)

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None

    @property
    def redirect(self) -> Optional[Redirect]:
        return self.error.redirect if self.error else None
