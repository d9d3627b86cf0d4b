"""
Order Submission Use Case

Validates the checkout form and places the order for a checkout source.
"""

import logging
import uuid
from typing import Callable, Optional

from storefront.application.dtos.checkout_dtos import (
    CheckoutForm,
    OrderSubmissionResponse,
    SubmissionState,
)
from storefront.application.use_cases.session_guard import SessionGuard
from storefront.domain.repositories.order_repository import CheckoutRequest, OrderRepository
from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.value_objects.checkout_source import CartSubset, CheckoutSource, DirectItem
from storefront.domain.value_objects.payment_method import PaymentMethod
from storefront.domain.value_objects.phone_number import PhoneNumber
from storefront.domain.value_objects.shipping_address import ShippingAddress
from storefront.infrastructure.events.cart_changed_channel import CartChangedChannel
from storefront.infrastructure.utilities.constants import CheckoutSettings
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    StorefrontError,
    ValidationError,
    report_error,
    validate_and_raise,
)

# Required address field -> (form attribute, label)
_FORM_FIELDS = {
    "line1": ("address_line1", "address"),
    "district": ("district", "district"),
    "state": ("state", "state"),
    "country": ("country", "country"),
    "phone": ("phone_number", "phone number"),
}


def _new_key() -> str:
    return str(uuid.uuid4())


class OrderSubmissionUseCase:
    """
    Use case for placing an order

    IDLE -> SUBMITTING -> SUCCEEDED | FAILED. A failed submission keeps the
    form and may be retried; a retry of the identical request reuses its
    idempotency key so the backend can recognise the duplicate.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        session_accessor: SessionAccessor,
        channel: CartChangedChannel,
        session_leeway_seconds: float = 0,
        key_factory: Optional[Callable[[], str]] = None,
    ):
        self._order_repository = order_repository
        self._guard = SessionGuard(session_accessor, session_leeway_seconds)
        self._channel = channel
        self._key_factory = key_factory or _new_key
        self._logger = logging.getLogger(self.__class__.__name__)

        self._state = SubmissionState.IDLE
        self._last_request: Optional[CheckoutRequest] = None
        self._idempotency_key: Optional[str] = None
        self._last_response: Optional[OrderSubmissionResponse] = None

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state is SubmissionState.SUBMITTING

    @property
    def last_response(self) -> Optional[OrderSubmissionResponse]:
        return self._last_response

    async def submit(
        self, source: Optional[CheckoutSource], form: CheckoutForm
    ) -> OrderSubmissionResponse:
        """Validate ``form`` and place the order for ``source``"""
        if self._state is SubmissionState.SUBMITTING:
            self._logger.info("⏳ SUBMIT IGNORED: order already being placed")
            return OrderSubmissionResponse(
                success=False, state=self._state, ignored=True, form=form
            )
        if self._state is SubmissionState.SUCCEEDED and self._last_response is not None:
            self._logger.info("✅ SUBMIT IGNORED: order %s already placed", self._last_response.order.order_id)
            return self._last_response

        self._logger.info("📝 ===== ORDER SUBMISSION STARTED =====")

        try:
            session = self._guard.require()
            request = self._build_request(source, form)
        except StorefrontError as e:
            report_error(e, "submit_order")
            return OrderSubmissionResponse(success=False, state=self._state, error=e, form=form)

        key = self._key_for(request)
        self._state = SubmissionState.SUBMITTING
        self._logger.info(
            "📝 ORDER SUBMISSION: %s via %s (key %s)",
            type(request.source).__name__,
            request.payment_method.value,
            key,
        )

        try:
            order = await self._order_repository.submit_order(session, request, key)
        except StorefrontError as e:
            report_error(e, "submit_order")
            self._state = SubmissionState.FAILED
            if isinstance(e, AuthRequiredError):
                # Rejected before the backend considered the order
                self._rotate_key()
            self._logger.error("💥 ORDER SUBMISSION FAILED: %s", e)
            return OrderSubmissionResponse(success=False, state=self._state, error=e, form=form)
        except BaseException:
            self._state = SubmissionState.FAILED
            raise

        self._state = SubmissionState.SUCCEEDED
        self._rotate_key()
        self._logger.info("🎉 ORDER PLACED: %s", order.order_id)

        if isinstance(request.source, CartSubset):
            delivered = self._channel.publish()
            self._logger.debug("📣 CART CHANGED delivered to %d listeners", delivered)

        self._last_response = OrderSubmissionResponse(
            success=True, state=self._state, order=order, form=form
        )
        self._logger.info("🎉 ===== ORDER SUBMISSION COMPLETED =====")
        return self._last_response

    def _build_request(
        self, source: Optional[CheckoutSource], form: CheckoutForm
    ) -> CheckoutRequest:
        if not isinstance(source, (CartSubset, DirectItem)):
            raise ValidationError("There is nothing to order.", "source")

        payment_method = PaymentMethod.parse(form.payment_method)
        validate_and_raise(
            payment_method is not None,
            ValidationError,
            "Please select a payment method.",
            "payment_method",
        )

        for field in CheckoutSettings.REQUIRED_ADDRESS_FIELDS:
            attribute, label = _FORM_FIELDS[field]
            value = getattr(form, attribute) or ""
            validate_and_raise(
                bool(value.strip()), ValidationError, f"Please enter the {label}.", field
            )

        try:
            PhoneNumber(form.phone_number)
        except ValueError as e:
            raise ValidationError("Please enter a valid phone number.", "phone") from e
        alternate = (form.alternative_phone_number or "").strip()
        if alternate:
            try:
                PhoneNumber(alternate)
            except ValueError as e:
                raise ValidationError(
                    "Please enter a valid alternative phone number.", "alternate_phone"
                ) from e

        try:
            address = ShippingAddress.create(
                line1=form.address_line1,
                district=form.district,
                state=form.state,
                country=form.country,
                phone=form.phone_number,
                line2=form.address_line2,
                alternate_phone=alternate or None,
            )
        except ValueError as e:
            raise ValidationError(str(e), "line1") from e

        return CheckoutRequest(address=address, payment_method=payment_method, source=source)

    def _key_for(self, request: CheckoutRequest) -> str:
        if self._idempotency_key is None or request != self._last_request:
            self._idempotency_key = self._key_factory()
            self._last_request = request
        return self._idempotency_key

    def _rotate_key(self) -> None:
        self._idempotency_key = None
        self._last_request = None
