"""
Cart management use case

Handles cart mutations for the signed-in customer. Nothing changes locally
until the backend confirms the write.
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from storefront.application.use_cases.cart_synchronization_use_case import (
    CartSynchronizationClient,
)
from storefront.application.use_cases.optimistic_mutation import (
    MutationKind,
    MutationResult,
    OptimisticMutation,
)
from storefront.application.use_cases.session_guard import SessionGuard
from storefront.domain.entities.cart_entity import Cart
from storefront.domain.repositories.cart_repository import CartRepository
from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.value_objects.product_id import ProductId
from storefront.infrastructure.events.cart_changed_channel import CartChangedChannel
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    ConfirmationDeclinedError,
    ValidationError,
    report_error,
)

ConfirmCallback = Callable[[], Union[bool, Awaitable[bool]]]


class CartManagementUseCase:
    """
    Use case for cart management operations

    Handles:
    1. Adding items to cart
    2. Removing items from cart
    3. Deleting the whole cart after confirmation

    Every confirmed mutation replaces the sync client's snapshot (when the
    backend returned a cart) and publishes "cart changed".
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        session_accessor: SessionAccessor,
        channel: CartChangedChannel,
        cart_sync: Optional[CartSynchronizationClient] = None,
        session_leeway_seconds: float = 0,
    ):
        self._cart_repository = cart_repository
        self._guard = SessionGuard(session_accessor, session_leeway_seconds)
        self._channel = channel
        self._cart_sync = cart_sync
        self._mutation = OptimisticMutation(MutationKind.CONFIRM_AFTER_WRITE, "CART")
        self._logger = logging.getLogger(self.__class__.__name__)

    async def add_to_cart(self, product_id, quantity: int = 1) -> MutationResult:
        """Add a product to the customer's cart"""
        self._logger.info(
            "🛒 CART USE CASE: Adding to cart - Product: %s, Qty: %s", product_id, quantity
        )

        try:
            product = product_id if isinstance(product_id, ProductId) else ProductId(product_id)
        except ValueError as e:
            return MutationResult.rejected(ValidationError(str(e), "product_id"))
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            return MutationResult.rejected(
                ValidationError("Quantity must be at least 1", "quantity")
            )

        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            self._logger.warning("🔒 ADD TO CART REJECTED: not signed in")
            return MutationResult.rejected(e)

        return await self._mutation.run(
            lambda: self._cart_repository.add_item(session, product, quantity),
            confirm=self._confirm,
        )

    async def remove_item(self, cart_item_id: int) -> MutationResult:
        """Remove one line from the cart"""
        self._logger.info("🗑️ CART USE CASE: Removing cart item %s", cart_item_id)

        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            return MutationResult.rejected(e)

        return await self._mutation.run(
            lambda: self._cart_repository.remove_item(session, cart_item_id),
            key=("remove", cart_item_id),
            confirm=self._confirm,
        )

    async def delete_cart(self, confirm: ConfirmCallback) -> MutationResult:
        """Delete the whole cart, only once ``confirm`` agrees"""
        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            return MutationResult.rejected(e)

        agreed = confirm()
        if inspect.isawaitable(agreed):
            agreed = await agreed
        if not agreed:
            self._logger.info("🙅 DELETE CART declined by user")
            error = ConfirmationDeclinedError("delete_cart")
            report_error(error, "delete_cart")
            return MutationResult.rejected(error)

        self._logger.info("🧹 CART USE CASE: Deleting cart")

        async def _delete() -> Cart:
            await self._cart_repository.delete_cart(session)
            return Cart.empty()

        return await self._mutation.run(_delete, key="delete", confirm=self._confirm)

    def _confirm(self, cart: Optional[Cart]) -> None:
        if cart is not None and self._cart_sync is not None:
            self._cart_sync.apply_mutation_response(cart)
        delivered = self._channel.publish()
        self._logger.debug("📣 CART CHANGED delivered to %d listeners", delivered)
