"""
Checkout composition use case

Turns a checkout source into the line items and totals the checkout page
shows. A composer is bound to one source for its lifetime.
"""

import logging
from typing import Optional, Tuple

from storefront.application.dtos.checkout_dtos import (
    CheckoutComposition,
    CheckoutLineItem,
    CompositionState,
)
from storefront.application.use_cases.cart_synchronization_use_case import (
    CartSynchronizationClient,
)
from storefront.application.use_cases.session_guard import SessionGuard
from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.value_objects.checkout_source import (
    CartSubset,
    CheckoutSource,
    DirectItem,
)
from storefront.domain.value_objects.order_summary import OrderSummary, summarize
from storefront.infrastructure.utilities.exceptions import (
    Redirect,
    StaleSelectionError,
    StorefrontError,
    report_error,
)


class CheckoutComposer:
    """
    Use case for checkout page composition

    IDLE -> RESOLVING -> RESOLVED | FAILED. Input is accepted only once the
    items are resolved.
    """

    def __init__(
        self,
        cart_sync: CartSynchronizationClient,
        session_accessor: SessionAccessor,
        session_leeway_seconds: float = 0,
        currency: str = "INR",
    ):
        self._cart_sync = cart_sync
        self._guard = SessionGuard(session_accessor, session_leeway_seconds)
        self._currency = currency
        self._logger = logging.getLogger(self.__class__.__name__)

        self._source: Optional[CheckoutSource] = None
        self._state = CompositionState.IDLE
        self._items: Tuple[CheckoutLineItem, ...] = ()
        self._error: Optional[StorefrontError] = None

    @property
    def source(self) -> Optional[CheckoutSource]:
        return self._source

    @property
    def state(self) -> CompositionState:
        return self._state

    @property
    def items(self) -> Tuple[CheckoutLineItem, ...]:
        return self._items

    @property
    def error(self) -> Optional[StorefrontError]:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._state is CompositionState.RESOLVING

    @property
    def accepts_input(self) -> bool:
        return self._state is CompositionState.RESOLVED

    @property
    def summary(self) -> OrderSummary:
        """Recomputed from the current items on every access"""
        return summarize(self._items, self._currency)

    async def resolve(self, source: Optional[CheckoutSource]) -> CheckoutComposition:
        """Resolve ``source`` into checkout line items"""
        if source is None:
            self._logger.info("↪️ CHECKOUT: no source, back to cart")
            return CheckoutComposition(state=self._state, redirect=Redirect.CART)

        if self._source is not None and source != self._source:
            raise ValueError("Checkout source cannot change once set")

        if self._guard.current() is None:
            self._logger.info("🔒 CHECKOUT: not signed in")
            return CheckoutComposition(state=self._state, redirect=Redirect.SIGN_IN)

        self._source = source
        self._error = None
        self._state = CompositionState.RESOLVING

        if isinstance(source, DirectItem):
            self._logger.info("⚡ CHECKOUT DIRECT: product %s x%d", source.product_id, source.quantity)
            self._resolved(
                (
                    CheckoutLineItem(
                        product_id=source.product_id,
                        name=source.name,
                        quantity=source.quantity,
                        unit_price=source.price,
                        image_ref=source.image_ref,
                    ),
                )
            )
        elif isinstance(source, CartSubset):
            await self._resolve_cart_subset(source)
        else:
            raise TypeError(f"Unsupported checkout source: {type(source).__name__}")

        return self._composition()

    async def _resolve_cart_subset(self, source: CartSubset) -> None:
        self._logger.info("🛒 CHECKOUT FROM CART: %d selected items", len(source.cart_item_ids))
        response = await self._cart_sync.fetch_cart()
        if not response.success:
            self._failed(response.error)
            return

        selected = response.cart.select(source.cart_item_ids) if response.cart else ()
        if not selected:
            self._failed(StaleSelectionError(source.cart_item_ids))
            return

        found = {item.id for item in selected}
        missing = source.cart_item_ids - found
        if missing:
            self._logger.warning(
                "⚠️ CHECKOUT: %d selected items no longer in cart: %s",
                len(missing),
                sorted(missing),
            )

        self._resolved(
            tuple(
                CheckoutLineItem(
                    product_id=item.product_id,
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    image_ref=item.image_ref,
                    cart_item_id=item.id,
                )
                for item in selected
            )
        )

    def _resolved(self, items: Tuple[CheckoutLineItem, ...]) -> None:
        self._items = items
        self._state = CompositionState.RESOLVED
        summary = self.summary
        self._logger.info(
            "📊 CHECKOUT RESOLVED: %d items, total %s", len(items), summary.total.format_display()
        )

    def _failed(self, error: StorefrontError) -> None:
        report_error(error, "checkout_resolve")
        self._items = ()
        self._error = error
        self._state = CompositionState.FAILED

    def _composition(self) -> CheckoutComposition:
        error = self._error
        return CheckoutComposition(
            state=self._state,
            items=self._items,
            summary=self.summary if self._state is CompositionState.RESOLVED else None,
            error=error,
            redirect=error.redirect if error else None,
        )
