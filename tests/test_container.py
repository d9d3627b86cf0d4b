"""
Application container tests
"""

import httpx
import pytest

from storefront.application.dtos.checkout_dtos import SubmissionState
from storefront.application.use_cases.cart_synchronization_use_case import SyncState
from storefront.application.use_cases.optimistic_mutation import MutationOutcome
from storefront.infrastructure.configuration.config import Settings
from storefront.infrastructure.logging.logging_config import reset_request_metrics
from storefront.infrastructure.container.dependency_injection import (
    StorefrontContainer,
    get_container,
    initialize_container,
    reset_container,
)

BASE_URL = "http://store.test/api"

CART_BODY = {
    "id": 1,
    "userId": 42,
    "status": "ACTIVE",
    "cartItems": [
        {"id": 11, "productId": 7, "productName": "Handloom Saree", "quantity": 1, "price": 2000, "imageUrl": None},
    ],
}

GROWN_CART_BODY = {
    **CART_BODY,
    "cartItems": CART_BODY["cartItems"] + [
        {"id": 12, "productId": 8, "productName": "Cotton Dupatta", "quantity": 2, "price": 250, "imageUrl": None},
    ],
}


class FakeBackend:
    """In-process stand-in for the store backend"""

    def __init__(self):
        self.cart = CART_BODY
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        if request.headers.get("Authorization") != "Bearer token-1":
            return httpx.Response(401)
        if request.url.path == "/api/cart" and request.method == "GET":
            return httpx.Response(200, json=self.cart)
        if request.url.path == "/api/cart/add":
            self.cart = GROWN_CART_BODY
            return httpx.Response(200, text="Product added to cart")
        if request.url.path == "/api/wishlist":
            if request.method == "GET":
                return httpx.Response(200, json=[])
            return httpx.Response(200, text="")
        return httpx.Response(404)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def container(backend):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(backend))
    return StorefrontContainer(settings=Settings(_env_file=None, api_base_url=BASE_URL), http_client=client)


class TestStorefrontContainer:
    """Test wiring and lifecycle"""

    def test_shared_instances(self, container):
        assert container.channel is container.channel
        assert container.cart_repository is not None
        assert container.wishlist_repository is not None
        assert container.order_repository is not None

    def test_each_surface_gets_its_own_client(self, container):
        header = container.create_cart_sync()
        page = container.create_cart_sync()
        assert header is not page
        assert container.channel.listener_count == 2

    def test_checkout_surfaces_share_the_channel(self, container):
        cart_sync = container.create_cart_sync()
        composer = container.create_checkout_composer(cart_sync=cart_sync)
        submission = container.create_order_submission()

        assert composer.source is None
        assert submission.state is SubmissionState.IDLE
        assert container.channel.listener_count == 1

    def test_new_checkout_form_uses_default_country(self, backend):
        settings = Settings(_env_file=None, default_country="Sri Lanka")
        container = StorefrontContainer(settings=settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(backend)))
        assert container.new_checkout_form().country == "Sri Lanka"

    @pytest.mark.asyncio
    async def test_mutation_refreshes_every_surface(self, container, backend):
        """Test add_to_cart from one surface updates the header badge"""
        container.session_accessor.sign_in("token-1")
        header = container.create_cart_sync()
        page = container.create_cart_sync()
        await header.fetch_cart()
        assert header.item_count == 1

        mutations = container.create_cart_mutations(cart_sync=page)
        result = await mutations.add_to_cart(8, 2)
        assert result.outcome is MutationOutcome.CONFIRMED

        await header.pending_refresh
        await page.pending_refresh
        assert header.item_count == 2
        assert page.item_count == 2
        await container.aclose()

    @pytest.mark.asyncio
    async def test_sign_out_discards_client_state(self, container):
        container.session_accessor.sign_in("token-1")
        cart_sync = container.create_cart_sync()
        wishlist = container.create_wishlist()
        await cart_sync.fetch_cart()
        await wishlist.toggle_wishlist(7)
        assert cart_sync.item_count == 1

        container.sign_out()

        assert cart_sync.snapshot is None
        assert cart_sync.item_count == 0
        assert not wishlist.is_wishlisted(7)
        assert not container.session_accessor.is_signed_in()
        response = await cart_sync.fetch_cart()
        assert cart_sync.state is SyncState.UNAUTHENTICATED
        assert not response.success
        await container.aclose()

    @pytest.mark.asyncio
    async def test_rejected_token(self, container, backend):
        container.session_accessor.sign_in("stale-token")
        cart_sync = container.create_cart_sync()

        await cart_sync.fetch_cart()

        assert cart_sync.state is SyncState.UNAUTHENTICATED
        assert backend.calls == [("GET", "/api/cart")]
        await container.aclose()

    @pytest.mark.asyncio
    async def test_request_metrics(self, container):
        reset_request_metrics()
        container.session_accessor.sign_in("token-1")
        cart_sync = container.create_cart_sync()

        await cart_sync.fetch_cart()

        metrics = container.request_metrics()
        assert metrics["total_requests"] == 1
        assert metrics["error_requests"] == 0
        await container.aclose()

    @pytest.mark.asyncio
    async def test_aclose_detaches_listeners(self, container):
        channel = container.channel
        cart_sync = container.create_cart_sync()

        await container.aclose()
        await container.aclose()

        assert channel.listener_count == 0
        assert cart_sync.is_closed


class TestGlobalContainer:
    """Test the process-wide container helpers"""

    @pytest.mark.asyncio
    async def test_get_container_singleton(self):
        await reset_container()
        assert get_container() is get_container()
        await reset_container()

    @pytest.mark.asyncio
    async def test_initialize_and_reset(self):
        await reset_container()
        settings = Settings(_env_file=None, currency="USD")

        container = initialize_container(settings, configure_logging=False)

        assert get_container() is container
        assert container.settings.currency == "USD"
        await reset_container()
        assert get_container() is not container
        assert container.request_metrics()["total_requests"] == 0
        await reset_container()
