"""
Test configuration and fixtures for the storefront client
"""

import os
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storefront.domain.entities.cart_entity import Cart, CartItem
from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.domain.repositories.cart_repository import CartRepository
from storefront.domain.repositories.order_repository import OrderRepository
from storefront.domain.repositories.wishlist_repository import WishlistRepository
from storefront.domain.value_objects.money import Money
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.configuration.config import reset_config
from storefront.infrastructure.events.cart_changed_channel import CartChangedChannel
from storefront.infrastructure.session.in_memory_session_accessor import (
    InMemorySessionAccessor,
)


# Mock environment variables for testing
@pytest.fixture(autouse=True)
def mock_env():
    """Run every test with a known, STOREFRONT_-free environment"""
    test_env = {
        key: value for key, value in os.environ.items() if not key.startswith("STOREFRONT_")
    }
    test_env["STOREFRONT_ENVIRONMENT"] = "test"

    reset_config()
    with patch.dict(os.environ, test_env, clear=True):
        yield test_env
    reset_config()


@pytest.fixture
def session():
    return Session(token="test-token-123")


@pytest.fixture
def session_accessor(session):
    """Signed-in session accessor"""
    return InMemorySessionAccessor(session)


@pytest.fixture
def signed_out_accessor():
    return InMemorySessionAccessor()


@pytest.fixture
def channel():
    return CartChangedChannel()


@pytest.fixture
def sample_cart():
    """Cart with two lines totalling 2500"""
    return Cart(
        id=1,
        owner_id=42,
        status="ACTIVE",
        items=(
            CartItem(
                id=11,
                product_id=7,
                name="Handloom Saree",
                unit_price=Money(Decimal("2000")),
                quantity=1,
                image_ref="https://cdn.example.com/saree.jpg",
            ),
            CartItem(
                id=12,
                product_id=8,
                name="Cotton Dupatta",
                unit_price=Money(Decimal("250")),
                quantity=2,
            ),
        ),
    )


@pytest.fixture
def sample_wishlist():
    return [
        WishlistItem(id=101, product_id=7, name="Handloom Saree", price=Money(Decimal("2000"))),
        WishlistItem(id=102, product_id=9, name="Silk Stole", price=Money(Decimal("800"))),
    ]


@pytest.fixture
def cart_repository(sample_cart):
    """Cart repository double returning ``sample_cart``"""
    repo = MagicMock(spec=CartRepository)
    repo.fetch_cart = AsyncMock(return_value=sample_cart)
    repo.add_item = AsyncMock(return_value=sample_cart)
    repo.remove_item = AsyncMock(return_value=sample_cart)
    repo.delete_cart = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def wishlist_repository(sample_wishlist):
    repo = MagicMock(spec=WishlistRepository)
    repo.get_wishlist = AsyncMock(return_value=list(sample_wishlist))
    repo.add_item = AsyncMock(return_value=None)
    repo.remove_item = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def order_repository():
    repo = MagicMock(spec=OrderRepository)
    repo.submit_order = AsyncMock()
    return repo
