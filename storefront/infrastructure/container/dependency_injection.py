"""
Dependency Injection Container

Builds the storefront components and owns the objects they share: settings,
the session accessor, the HTTP client and the cart changed channel.
"""

import logging
import weakref
from typing import Any, Dict, Optional

import httpx

from ...application.dtos.checkout_dtos import CheckoutForm
from ...application.use_cases.cart_management_use_case import CartManagementUseCase
from ...application.use_cases.cart_synchronization_use_case import (
    CartSynchronizationClient,
)
from ...application.use_cases.checkout_composition_use_case import CheckoutComposer
from ...application.use_cases.order_submission_use_case import OrderSubmissionUseCase
from ...application.use_cases.wishlist_management_use_case import (
    WishlistManagementUseCase,
)
from ...domain.repositories.cart_repository import CartRepository
from ...domain.repositories.order_repository import OrderRepository
from ...domain.repositories.wishlist_repository import WishlistRepository
from ..configuration.config import Settings, get_config
from ..events.cart_changed_channel import CartChangedChannel
from ..http.api_client import StorefrontApiClient
from ..logging.logging_config import (
    get_request_metrics,
    options_from_settings,
    reset_request_metrics,
    setup_logging,
)
from ..repositories.http_cart_repository import HttpCartRepository
from ..repositories.http_order_repository import HttpOrderRepository
from ..repositories.http_wishlist_repository import HttpWishlistRepository
from ..session.in_memory_session_accessor import InMemorySessionAccessor

logger = logging.getLogger(__name__)


class StorefrontContainer:
    """
    Dependency injection container for the storefront client

    Manages the instantiation and lifecycle of:
    - Shared infrastructure (API client, channel, session accessor)
    - Repositories (Infrastructure layer)
    - Per-surface use cases (Application layer), created through factories
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_accessor: Optional[InMemorySessionAccessor] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._instances: Dict[str, Any] = {}
        self._logger = logging.getLogger(self.__class__.__name__)
        self.settings = settings or get_config()
        self.session_accessor = session_accessor or InMemorySessionAccessor()
        self._http_client = http_client
        # Every client-side copy of backend state, for sign-out
        self._stateful = weakref.WeakSet()
        self._closed = False
        self._setup_dependencies()

    def _setup_dependencies(self):
        """Setup all dependencies and their relationships"""
        self._logger.info("Setting up storefront container...")

        self._instances["channel"] = CartChangedChannel()
        self._instances["api_client"] = StorefrontApiClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.request_timeout_seconds,
            client=self._http_client,
        )
        self._register_repositories()
        self.session_accessor.on_sign_out(self._discard_client_state)

        self._logger.info(
            "Storefront container ready (backend=%s, environment=%s)",
            self.settings.api_base_url,
            self.settings.environment,
        )

    def _register_repositories(self):
        """Register repository implementations"""
        api_client = self.api_client
        currency = self.settings.currency
        self._instances["cart_repository"] = HttpCartRepository(api_client, currency)
        self._instances["wishlist_repository"] = HttpWishlistRepository(api_client, currency)
        self._instances["order_repository"] = HttpOrderRepository(api_client)

        self._logger.debug("Repositories registered successfully")

    # Shared instances
    @property
    def channel(self) -> CartChangedChannel:
        return self._instances["channel"]

    @property
    def api_client(self) -> StorefrontApiClient:
        return self._instances["api_client"]

    @property
    def cart_repository(self) -> CartRepository:
        return self._instances["cart_repository"]

    @property
    def wishlist_repository(self) -> WishlistRepository:
        return self._instances["wishlist_repository"]

    @property
    def order_repository(self) -> OrderRepository:
        return self._instances["order_repository"]

    @property
    def _leeway(self) -> float:
        return self.settings.session_expiry_leeway_seconds

    # Factories, one instance per surface
    def create_cart_sync(self) -> CartSynchronizationClient:
        """Cart snapshot for one surface (header badge, cart page)"""
        client = CartSynchronizationClient(
            cart_repository=self.cart_repository,
            session_accessor=self.session_accessor,
            channel=self.channel,
            session_leeway_seconds=self._leeway,
        )
        self._stateful.add(client)
        return client

    def create_cart_mutations(
        self, cart_sync: Optional[CartSynchronizationClient] = None
    ) -> CartManagementUseCase:
        return CartManagementUseCase(
            cart_repository=self.cart_repository,
            session_accessor=self.session_accessor,
            channel=self.channel,
            cart_sync=cart_sync,
            session_leeway_seconds=self._leeway,
        )

    def create_wishlist(
        self, cart_mutations: Optional[CartManagementUseCase] = None
    ) -> WishlistManagementUseCase:
        wishlist = WishlistManagementUseCase(
            wishlist_repository=self.wishlist_repository,
            session_accessor=self.session_accessor,
            cart_mutations=cart_mutations or self.create_cart_mutations(),
            session_leeway_seconds=self._leeway,
        )
        self._stateful.add(wishlist)
        return wishlist

    def create_checkout_composer(
        self, cart_sync: Optional[CartSynchronizationClient] = None
    ) -> CheckoutComposer:
        return CheckoutComposer(
            cart_sync=cart_sync or self.create_cart_sync(),
            session_accessor=self.session_accessor,
            session_leeway_seconds=self._leeway,
            currency=self.settings.currency,
        )

    def create_order_submission(self) -> OrderSubmissionUseCase:
        return OrderSubmissionUseCase(
            order_repository=self.order_repository,
            session_accessor=self.session_accessor,
            channel=self.channel,
            session_leeway_seconds=self._leeway,
        )

    def new_checkout_form(self) -> CheckoutForm:
        """Blank checkout form with the configured country pre-filled"""
        return CheckoutForm(country=self.settings.default_country)

    # Lifecycle
    def sign_out(self) -> None:
        """Clear the session and every client-side copy of the user's data"""
        self.session_accessor.sign_out()

    def _discard_client_state(self) -> None:
        stateful = list(self._stateful)
        for component in stateful:
            component.reset()
        self._logger.info("🚪 Signed out, discarded %d client-side copies", len(stateful))

    def request_metrics(self) -> Dict[str, Any]:
        """Backend round trip counters for diagnostics"""
        return get_request_metrics()

    async def aclose(self) -> None:
        """Cleanup resources when shutting down"""
        if self._closed:
            return
        self._closed = True
        self._logger.info("Cleaning up storefront container...")
        self._logger.info("📊 Backend requests: %s", self.request_metrics())
        for component in list(self._stateful):
            if isinstance(component, CartSynchronizationClient):
                component.close()
        self.channel.clear()
        await self.api_client.aclose()
        self._instances.clear()


# Global container instance
_container: Optional[StorefrontContainer] = None


def get_container() -> StorefrontContainer:
    """Get the global container instance"""
    global _container
    if _container is None:
        _container = StorefrontContainer()
    return _container


def initialize_container(
    settings: Optional[Settings] = None, configure_logging: bool = True
) -> StorefrontContainer:
    """Initialize logging and the global container"""
    global _container
    settings = settings or get_config()
    if configure_logging:
        setup_logging(options_from_settings(settings))
    _container = StorefrontContainer(settings=settings)
    return _container


async def reset_container() -> None:
    """Close and drop the global container (useful for testing)"""
    global _container
    if _container is not None:
        await _container.aclose()
    _container = None
    reset_request_metrics()
