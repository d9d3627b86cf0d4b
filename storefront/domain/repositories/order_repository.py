"""
Order repository interface
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.value_objects.checkout_source import CheckoutSource
from storefront.domain.value_objects.payment_method import PaymentMethod
from storefront.domain.value_objects.session import Session
from storefront.domain.value_objects.shipping_address import ShippingAddress


@dataclass(frozen=True)
class CheckoutRequest:
    """Final order request: where to ship, how to pay, what to buy"""

    address: ShippingAddress
    payment_method: PaymentMethod
    source: CheckoutSource


@dataclass(frozen=True)
class OrderResult:
    """Opaque identifier of a placed order"""

    order_id: str


class OrderRepository(ABC):
    """Repository interface for order submission"""

    @abstractmethod
    async def submit_order(
        self, session: Session, request: CheckoutRequest, idempotency_key: str
    ) -> OrderResult:
        """Place the order"""
