"""
Order submission tests
"""

import asyncio
from decimal import Decimal
from itertools import count
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.application.dtos.checkout_dtos import CheckoutForm, SubmissionState
from storefront.application.use_cases.order_submission_use_case import OrderSubmissionUseCase
from storefront.domain.repositories.order_repository import OrderResult
from storefront.domain.value_objects.checkout_source import CartSubset, DirectItem
from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.payment_method import PaymentMethod
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    NetworkOrServerError,
    Redirect,
    ValidationError,
)


def _form(**overrides):
    values = {
        "address_line1": "12 MG Road",
        "address_line2": "Near the clock tower",
        "district": "Bengaluru Urban",
        "state": "Karnataka",
        "country": "India",
        "phone_number": "98765 43210",
        "alternative_phone_number": "",
        "payment_method": "UPI",
    }
    values.update(overrides)
    return CheckoutForm(**values)


@pytest.fixture
def keys():
    counter = count(1)
    return lambda: f"key-{next(counter)}"


@pytest.fixture
def submission(order_repository, session_accessor, channel, keys):
    order_repository.submit_order.return_value = OrderResult(order_id="5001")
    return OrderSubmissionUseCase(order_repository, session_accessor, channel, key_factory=keys)


@pytest.fixture
def direct_item():
    return DirectItem(product_id=7, quantity=1, name="Handloom Saree", price=Money(Decimal("2000")))


class TestPreconditions:
    """Test checks performed before any network call"""

    @pytest.mark.asyncio
    async def test_signed_out(self, order_repository, signed_out_accessor, channel, direct_item):
        use_case = OrderSubmissionUseCase(order_repository, signed_out_accessor, channel)

        response = await use_case.submit(direct_item, _form())

        assert not response.success
        assert isinstance(response.error, AuthRequiredError)
        assert response.redirect is Redirect.SIGN_IN
        assert use_case.state is SubmissionState.IDLE
        order_repository.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_payment_method(self, submission, order_repository, direct_item):
        response = await submission.submit(direct_item, _form(payment_method=None))

        assert isinstance(response.error, ValidationError)
        assert response.error.field == "payment_method"
        order_repository.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_payment_method(self, submission, order_repository, direct_item):
        response = await submission.submit(direct_item, _form(payment_method="CARD"))

        assert response.error.field == "payment_method"
        order_repository.submit_order.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "attribute, field",
        [
            ("address_line1", "line1"),
            ("district", "district"),
            ("state", "state"),
            ("country", "country"),
            ("phone_number", "phone"),
        ],
    )
    async def test_required_fields(self, submission, order_repository, direct_item, attribute, field):
        """Test each required field is named in the validation error"""
        form = _form(**{attribute: "   "})

        response = await submission.submit(direct_item, form)

        assert not response.success
        assert isinstance(response.error, ValidationError)
        assert response.error.field == field
        assert response.form is form
        assert submission.state is SubmissionState.IDLE
        order_repository.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_phone(self, submission, order_repository, direct_item):
        response = await submission.submit(direct_item, _form(phone_number="12ab"))

        assert response.error.field == "phone"
        order_repository.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_source(self, submission, order_repository):
        response = await submission.submit(None, _form())

        assert response.error.field == "source"
        order_repository.submit_order.assert_not_called()


class TestSubmission:
    """Test placing the order"""

    @pytest.mark.asyncio
    async def test_direct_item_order(self, submission, order_repository, channel, direct_item, session):
        listener = MagicMock()
        channel.subscribe(listener)

        response = await submission.submit(direct_item, _form())

        assert response.success
        assert response.order == OrderResult(order_id="5001")
        assert submission.state is SubmissionState.SUCCEEDED
        sent_session, request, key = order_repository.submit_order.await_args.args
        assert sent_session == session
        assert request.source == direct_item
        assert request.payment_method is PaymentMethod.UPI
        assert request.address.phone.value == "9876543210"
        assert key == "key-1"
        listener.assert_not_called()

    @pytest.mark.asyncio
    async def test_cart_subset_order_publishes(self, submission, order_repository, channel):
        listener = MagicMock()
        channel.subscribe(listener)

        response = await submission.submit(CartSubset.of([11, 12]), _form(payment_method="CASH_ON_HAND"))

        assert response.success
        listener.assert_called_once_with()
        request = order_repository.submit_order.await_args.args[1]
        assert request.source.cart_item_ids == frozenset({11, 12})

    @pytest.mark.asyncio
    async def test_failure_keeps_form_and_allows_retry(self, submission, order_repository, direct_item):
        order_repository.submit_order.side_effect = [
            NetworkOrServerError("down", status_code=500),
            OrderResult(order_id="5002"),
        ]
        form = _form()

        failed = await submission.submit(direct_item, form)

        assert not failed.success
        assert failed.state is SubmissionState.FAILED
        assert failed.form is form
        assert failed.error_message

        retried = await submission.submit(direct_item, form)

        assert retried.success
        assert retried.order.order_id == "5002"

    @pytest.mark.asyncio
    async def test_identical_retry_reuses_idempotency_key(self, submission, order_repository, direct_item):
        order_repository.submit_order.side_effect = [
            NetworkOrServerError("timeout"),
            OrderResult(order_id="5003"),
        ]

        await submission.submit(direct_item, _form())
        await submission.submit(direct_item, _form())

        first_key = order_repository.submit_order.await_args_list[0].args[2]
        second_key = order_repository.submit_order.await_args_list[1].args[2]
        assert first_key == second_key == "key-1"

    @pytest.mark.asyncio
    async def test_changed_request_rotates_key(self, submission, order_repository, direct_item):
        order_repository.submit_order.side_effect = [
            NetworkOrServerError("timeout"),
            OrderResult(order_id="5004"),
        ]

        await submission.submit(direct_item, _form())
        await submission.submit(direct_item, _form(district="Mysuru"))

        keys_sent = [call.args[2] for call in order_repository.submit_order.await_args_list]
        assert keys_sent == ["key-1", "key-2"]

    @pytest.mark.asyncio
    async def test_submit_while_submitting_is_ignored(self, submission, order_repository, direct_item):
        gate = asyncio.Event()

        async def slow_submit(session, request, key):
            await gate.wait()
            return OrderResult(order_id="5005")

        order_repository.submit_order = AsyncMock(side_effect=slow_submit)
        first = asyncio.create_task(submission.submit(direct_item, _form()))
        await asyncio.sleep(0)
        assert submission.is_submitting

        second = await submission.submit(direct_item, _form())
        gate.set()
        first_response = await first

        assert second.ignored
        assert not second.success
        assert first_response.success
        assert order_repository.submit_order.await_count == 1

    @pytest.mark.asyncio
    async def test_submit_after_success_returns_placed_order(self, submission, order_repository, direct_item):
        first = await submission.submit(direct_item, _form())
        again = await submission.submit(direct_item, _form())

        assert again is first
        assert submission.last_response is first
        assert order_repository.submit_order.await_count == 1
