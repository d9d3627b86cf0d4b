"""
Wishlist management use case

Wishlist membership is shown optimistically: the heart flips at once and flips
back if the backend refuses.
"""

import logging
from typing import Dict, List, Optional, Tuple

from storefront.application.dtos.wishlist_dtos import WishlistResponse
from storefront.application.use_cases.cart_management_use_case import CartManagementUseCase
from storefront.application.use_cases.optimistic_mutation import (
    MutationKind,
    MutationResult,
    OptimisticMutation,
)
from storefront.application.use_cases.session_guard import SessionGuard
from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.repositories.wishlist_repository import WishlistRepository
from storefront.domain.value_objects.product_id import ProductId
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    StorefrontError,
    ValidationError,
    report_error,
)

_ABSENT = object()


class WishlistManagementUseCase:
    """
    Use case for wishlist operations

    Handles:
    1. Loading the wishlist
    2. Toggling membership from product cards (optimistic)
    3. Removing entries from the wishlist view
    4. Moving a wishlisted product into the cart
    """

    def __init__(
        self,
        wishlist_repository: WishlistRepository,
        session_accessor: SessionAccessor,
        cart_mutations: Optional[CartManagementUseCase] = None,
        session_leeway_seconds: float = 0,
    ):
        self._wishlist_repository = wishlist_repository
        self._guard = SessionGuard(session_accessor, session_leeway_seconds)
        self._cart_mutations = cart_mutations
        self._toggle = OptimisticMutation(MutationKind.OPTIMISTIC, "WISHLIST TOGGLE")
        self._removal = OptimisticMutation(MutationKind.CONFIRM_AFTER_WRITE, "WISHLIST REMOVE")
        self._logger = logging.getLogger(self.__class__.__name__)

        # product id -> wishlist item id (None until the backend tells us)
        self._membership: Dict[int, Optional[int]] = {}
        self._items: Tuple[WishlistItem, ...] = ()
        self._disposed = False
        # Bumped by reset(); calls started before a reset no longer settle
        self._generation = 0

    @property
    def items(self) -> Tuple[WishlistItem, ...]:
        return self._items

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def is_wishlisted(self, product_id) -> bool:
        return int(product_id) in self._membership

    def is_toggle_in_flight(self, product_id) -> bool:
        return self._toggle.is_in_flight(int(product_id))

    async def load_wishlist(self) -> WishlistResponse:
        """Fetch the wishlist and make it the local membership"""
        generation = self._generation
        try:
            session = self._guard.require()
            items = await self._wishlist_repository.get_wishlist(session)
        except StorefrontError as e:
            report_error(e, "load_wishlist")
            return WishlistResponse(success=False, items=self._items, error=e)

        if not self._is_current(generation):
            return WishlistResponse(success=True, items=tuple(items))
        self._replace_items(items)
        self._logger.info("💝 WISHLIST LOADED: %d items", len(self._items))
        return WishlistResponse(success=True, items=self._items)

    async def toggle_wishlist(self, product_id) -> MutationResult:
        """Flip membership locally, then add or remove on the backend"""
        try:
            product = product_id if isinstance(product_id, ProductId) else ProductId(product_id)
        except ValueError as e:
            return MutationResult.rejected(ValidationError(str(e), "product_id"))

        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            self._logger.warning("🔒 WISHLIST TOGGLE REJECTED: not signed in")
            return MutationResult.rejected(e)

        key = product.value
        generation = self._generation
        was_wishlisted = key in self._membership
        previous = self._membership.get(key, _ABSENT)

        def apply() -> None:
            if was_wishlisted:
                self._membership.pop(key, None)
            else:
                self._membership[key] = None

        def rollback() -> None:
            if previous is _ABSENT:
                self._membership.pop(key, None)
            else:
                self._membership[key] = previous

        if was_wishlisted:
            self._logger.info("💔 WISHLIST REMOVE: product %s", key)

            async def call() -> Optional[List[WishlistItem]]:
                item_id = previous
                if item_id is None:
                    item_id = await self._resolve_item_id(session, key)
                if item_id is None:
                    # Already gone on the backend
                    return None
                return await self._wishlist_repository.remove_item(session, item_id)

            def confirm(items: Optional[List[WishlistItem]]) -> None:
                if items is not None:
                    self._replace_items(items, settled_key=key)

        else:
            self._logger.info("💝 WISHLIST ADD: product %s", key)

            async def call() -> None:
                await self._wishlist_repository.add_item(session, product)

            confirm = None

        return await self._toggle.run(
            call,
            key=key,
            apply=apply,
            rollback=rollback,
            confirm=confirm,
            is_active=lambda: self._is_current(generation),
        )

    async def remove_wishlist_item(self, wishlist_item_id: int) -> MutationResult:
        """Remove an entry from the wishlist view; the server list replaces ours"""
        try:
            session = self._guard.require()
        except AuthRequiredError as e:
            return MutationResult.rejected(e)

        generation = self._generation
        self._logger.info("🗑️ WISHLIST REMOVE ITEM: %s", wishlist_item_id)
        return await self._removal.run(
            lambda: self._wishlist_repository.remove_item(session, wishlist_item_id),
            key=wishlist_item_id,
            confirm=self._replace_items,
            is_active=lambda: self._is_current(generation),
        )

    async def move_to_cart(self, product_id) -> MutationResult:
        """Add one unit of a wishlisted product to the cart"""
        if self._cart_mutations is None:
            raise RuntimeError("Wishlist was built without cart mutations")
        self._logger.info("🛒 MOVE TO CART: product %s", product_id)
        return await self._cart_mutations.add_to_cart(product_id, 1)

    def dispose(self) -> None:
        """The surface went away: late results no longer touch local state"""
        self._disposed = True

    def reset(self) -> None:
        """Forget every local copy (sign-out)"""
        self._generation += 1
        self._membership.clear()
        self._items = ()

    # ---------------------------------------------------------------- helpers

    def _is_current(self, generation: int) -> bool:
        return not self._disposed and generation == self._generation

    async def _resolve_item_id(self, session: Session, product_key: int) -> Optional[int]:
        for item in self._items:
            if item.product_id.value == product_key:
                return item.id
        items = await self._wishlist_repository.get_wishlist(session)
        for item in items:
            if item.product_id.value == product_key:
                return item.id
        return None

    def _replace_items(self, items, settled_key: Optional[int] = None) -> None:
        """Take the server list wholesale, except for toggles still in flight"""
        items = tuple(items)
        membership: Dict[int, Optional[int]] = {
            item.product_id.value: item.id for item in items
        }
        for pending in self._toggle.in_flight_keys:
            if pending == settled_key:
                continue
            if pending in self._membership:
                membership[pending] = self._membership[pending]
            else:
                membership.pop(pending, None)
        self._items = items
        self._membership = membership
