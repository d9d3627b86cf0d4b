"""
HTTP implementation of the wishlist repository
"""

from typing import List

from pydantic import ValidationError as SchemaError

from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.domain.repositories.wishlist_repository import WishlistRepository
from storefront.domain.value_objects.product_id import ProductId
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.http.api_client import StorefrontApiClient
from storefront.infrastructure.http.schemas import AddToWishlistSchema, WishlistItemSchema
from storefront.infrastructure.utilities.constants import ApiPaths
from storefront.infrastructure.utilities.exceptions import (
    EmptyResourceError,
    NetworkOrServerError,
)


class HttpWishlistRepository(WishlistRepository):
    """Wishlist operations against the store backend"""

    def __init__(self, api_client: StorefrontApiClient, currency: str = "INR"):
        self._api = api_client
        self._currency = currency

    async def get_wishlist(self, session: Session) -> List[WishlistItem]:
        try:
            response = await self._api.request(
                "GET", ApiPaths.WISHLIST, session, not_found_is_empty=True
            )
        except EmptyResourceError:
            return []
        return self._parse_list(self._api.json_body(response))

    async def add_item(self, session: Session, product_id: ProductId) -> None:
        payload = AddToWishlistSchema(product_id=product_id.value)
        await self._api.request(
            "POST", ApiPaths.WISHLIST, session, json=payload.model_dump(by_alias=True)
        )

    async def remove_item(self, session: Session, wishlist_item_id: int) -> List[WishlistItem]:
        response = await self._api.request(
            "DELETE", ApiPaths.WISHLIST_ITEM.format(item_id=wishlist_item_id), session
        )
        return self._parse_list(self._api.json_body(response))

    def _parse_list(self, body) -> List[WishlistItem]:
        if body is None:
            return []
        if not isinstance(body, list):
            raise NetworkOrServerError("Wishlist payload is not a list")
        try:
            return [WishlistItemSchema.model_validate(item).to_entity(self._currency) for item in body]
        except (SchemaError, ValueError) as e:
            raise NetworkOrServerError(f"Malformed wishlist payload: {e}") from e
