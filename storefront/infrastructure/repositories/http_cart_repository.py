"""
HTTP implementation of the cart repository
"""

import logging
from typing import Optional

from pydantic import ValidationError as SchemaError

from storefront.domain.entities.cart_entity import Cart
from storefront.domain.repositories.cart_repository import CartRepository
from storefront.domain.value_objects.product_id import ProductId
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.http.api_client import StorefrontApiClient
from storefront.infrastructure.http.schemas import AddToCartSchema, CartSchema
from storefront.infrastructure.utilities.constants import ApiPaths
from storefront.infrastructure.utilities.exceptions import (
    EmptyResourceError,
    NetworkOrServerError,
)

logger = logging.getLogger(__name__)


class HttpCartRepository(CartRepository):
    """Cart operations against the store backend"""

    def __init__(self, api_client: StorefrontApiClient, currency: str = "INR"):
        self._api = api_client
        self._currency = currency

    async def fetch_cart(self, session: Session) -> Optional[Cart]:
        try:
            response = await self._api.request(
                "GET", ApiPaths.CART, session, not_found_is_empty=True
            )
        except EmptyResourceError:
            logger.info("🛒 Backend has no cart for this user")
            return None
        body = self._api.json_body(response)
        if body is None:
            return None
        return self._parse_cart(body)

    async def add_item(
        self, session: Session, product_id: ProductId, quantity: int
    ) -> Optional[Cart]:
        payload = AddToCartSchema(product_id=product_id.value, quantity=quantity)
        response = await self._api.request(
            "POST", ApiPaths.CART_ADD, session, json=payload.model_dump(by_alias=True)
        )
        # Some backends acknowledge with plain text instead of echoing the cart
        if "json" not in response.headers.get("content-type", ""):
            return None
        body = self._api.json_body(response)
        if isinstance(body, dict) and "cartItems" in body:
            return self._parse_cart(body)
        return None

    async def remove_item(self, session: Session, cart_item_id: int) -> Cart:
        response = await self._api.request(
            "DELETE", ApiPaths.CART_ITEM.format(item_id=cart_item_id), session
        )
        body = self._api.json_body(response)
        if body is None:
            raise NetworkOrServerError(
                "Remove item returned no cart", status_code=response.status_code
            )
        return self._parse_cart(body)

    async def delete_cart(self, session: Session) -> None:
        await self._api.request("DELETE", ApiPaths.CART, session)

    def _parse_cart(self, body) -> Cart:
        try:
            return CartSchema.model_validate(body).to_entity(self._currency)
        except (SchemaError, ValueError) as e:
            raise NetworkOrServerError(f"Malformed cart payload: {e}") from e
