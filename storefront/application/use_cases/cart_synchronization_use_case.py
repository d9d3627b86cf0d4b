"""
Cart synchronization use case

Keeps a read-through copy of the backend cart for one surface (header badge,
cart view) and re-fetches whenever the cart changed channel fires.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Set

from storefront.application.dtos.cart_dtos import CartSnapshotResponse
from storefront.application.use_cases.session_guard import SessionGuard
from storefront.domain.entities.cart_entity import Cart
from storefront.domain.repositories.cart_repository import CartRepository
from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.infrastructure.events.cart_changed_channel import CartChangedChannel
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    NetworkOrServerError,
    StorefrontError,
    report_error,
)


class SyncState(Enum):
    """Cart snapshot status"""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAUTHENTICATED = "unauthenticated"
    FAILED = "failed"


class CartSynchronizationClient:
    """
    Owner of the cached cart snapshot

    The snapshot only changes through a successful fetch or a mutation's
    replacement response. Every change bumps a version; a fetch whose version
    is no longer current when it resolves is not applied.
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        session_accessor: SessionAccessor,
        channel: CartChangedChannel,
        session_leeway_seconds: float = 0,
    ):
        self._cart_repository = cart_repository
        self._guard = SessionGuard(session_accessor, session_leeway_seconds)
        self._channel = channel
        self._logger = logging.getLogger(self.__class__.__name__)

        self._snapshot: Optional[Cart] = None
        self._state = SyncState.IDLE
        self._last_error: Optional[StorefrontError] = None
        self._version = 0
        self._closed = False
        self._refresh_tasks: Set[asyncio.Task] = set()
        self._refresh_task: Optional[asyncio.Task] = None

        self._subscription = channel.subscribe(self._on_cart_changed)

    # ------------------------------------------------------------------ state

    @property
    def snapshot(self) -> Optional[Cart]:
        return self._snapshot

    @property
    def item_count(self) -> int:
        if self._snapshot is None or self._state is SyncState.UNAUTHENTICATED:
            return 0
        return self._snapshot.item_count

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def last_error(self) -> Optional[StorefrontError]:
        return self._last_error

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def pending_refresh(self) -> Optional[asyncio.Task]:
        """The most recent notification-triggered fetch, if still running"""
        task = self._refresh_task
        if task is None or task.done():
            return None
        return task

    # -------------------------------------------------------------- operations

    async def fetch_cart(self) -> CartSnapshotResponse:
        """Fetch the authoritative cart and make it the snapshot"""
        if self._closed:
            self._logger.warning("🚫 FETCH SKIPPED: client closed")
            return CartSnapshotResponse(
                success=False,
                cart=self._snapshot,
                error=NetworkOrServerError("Cart client closed"),
                applied=False,
            )

        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            self._mark_unauthenticated(e)
            return CartSnapshotResponse(success=False, error=e)

        self._version += 1
        version = self._version
        self._state = SyncState.LOADING
        self._logger.info("🛒 FETCH CART: version %d", version)

        try:
            cart = await self._cart_repository.fetch_cart(session)
        except AuthRequiredError as e:
            if self._is_current(version):
                self._mark_unauthenticated(e)
            return CartSnapshotResponse(success=False, error=e, applied=self._is_current(version))
        except StorefrontError as e:
            report_error(e, "fetch_cart")
            applied = self._is_current(version)
            if applied:
                # The last confirmed snapshot stays in place
                self._state = SyncState.FAILED
                self._last_error = e
            return CartSnapshotResponse(success=False, cart=self._snapshot, error=e, applied=applied)

        if cart is None:
            cart = Cart.empty()

        if not self._is_current(version):
            self._logger.info("🗑️ FETCH DISCARDED: version %d superseded", version)
            return CartSnapshotResponse(success=True, cart=cart, applied=False)

        self._snapshot = cart
        self._state = SyncState.READY
        self._last_error = None
        self._logger.info("📊 CART READY: %d items", cart.item_count)
        return CartSnapshotResponse(success=True, cart=cart)

    def apply_mutation_response(self, cart: Cart) -> None:
        """Replace the snapshot with the cart a mutation returned"""
        if self._closed:
            return
        self._version += 1
        self._snapshot = cart
        self._state = SyncState.READY
        self._last_error = None
        self._logger.info("🔄 SNAPSHOT REPLACED by mutation response: %d items", cart.item_count)

    def reset(self) -> None:
        """Discard the snapshot (sign-out); in-flight fetches are ignored"""
        self._version += 1
        self._snapshot = None
        self._state = SyncState.IDLE
        self._last_error = None

    def close(self) -> None:
        """Stop listening; late results are discarded"""
        if self._closed:
            return
        self._closed = True
        self._version += 1
        self._subscription.cancel()
        self._logger.debug("👋 CART SYNC CLOSED")

    # ---------------------------------------------------------------- helpers

    def _is_current(self, version: int) -> bool:
        return not self._closed and version == self._version

    def _mark_unauthenticated(self, error: AuthRequiredError) -> None:
        self._version += 1
        self._snapshot = None
        self._state = SyncState.UNAUTHENTICATED
        self._last_error = error
        self._logger.info("🔒 CART UNAVAILABLE: not signed in")

    def _on_cart_changed(self) -> None:
        if self._closed:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._logger.warning("⚠️ Cart changed outside an event loop, refresh skipped")
            return
        task = loop.create_task(self.fetch_cart())
        self._refresh_task = task
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
