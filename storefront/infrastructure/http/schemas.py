"""Pydantic request/response schemas for the store backend.

These are the wire contracts (camelCase, as the backend sends them), kept
separate from the domain entities they map to.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.entities.cart_entity import Cart, CartItem
from storefront.domain.entities.wishlist_entity import WishlistItem
from storefront.domain.repositories.order_repository import CheckoutRequest, OrderResult
from storefront.domain.value_objects.checkout_source import CartSubset, DirectItem
from storefront.domain.value_objects.money import Money


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartItemSchema(WireModel):
    id: int
    product_id: int = Field(alias="productId")
    product_name: str = Field(alias="productName")
    quantity: int
    price: Decimal = Field(ge=0)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class CartSchema(WireModel):
    id: Optional[int] = None
    user_id: Optional[int] = Field(default=None, alias="userId")
    status: str = "ACTIVE"
    cart_items: List[CartItemSchema] = Field(default_factory=list, alias="cartItems")

    def to_entity(self, currency: str = "INR") -> Cart:
        # Lines with quantity 0 are gone, not kept
        items = tuple(
            CartItem(
                id=item.id,
                product_id=item.product_id,
                name=item.product_name,
                unit_price=Money(item.price, currency),
                quantity=item.quantity,
                image_ref=item.image_url or None,
            )
            for item in self.cart_items
            if item.quantity >= 1
        )
        return Cart(id=self.id, owner_id=self.user_id, status=self.status, items=items)


class AddToCartSchema(WireModel):
    product_id: int = Field(alias="productId")
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
class WishlistItemSchema(WireModel):
    wishlist_item_id: int = Field(alias="wishlistItemId")
    product_id: int = Field(alias="productId")
    product_name: str = Field(alias="productName")
    product_price: Decimal = Field(ge=0, alias="productPrice")
    product_image_url: Optional[str] = Field(default=None, alias="productImageUrl")
    added_at: Optional[datetime] = Field(default=None, alias="addedAt")

    def to_entity(self, currency: str = "INR") -> WishlistItem:
        return WishlistItem(
            id=self.wishlist_item_id,
            product_id=self.product_id,
            name=self.product_name,
            price=Money(self.product_price, currency),
            image_ref=self.product_image_url or None,
            added_at=self.added_at,
        )


class AddToWishlistSchema(WireModel):
    product_id: int = Field(alias="productId")


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequestSchema(WireModel):
    address_line1: str = Field(alias="addressLine1")
    address_line2: Optional[str] = Field(default=None, alias="addressLine2")
    district: str
    state: str
    country: str
    phone_number: str = Field(alias="phoneNumber")
    alternative_phone_number: Optional[str] = Field(default=None, alias="alternativePhoneNumber")
    payment_method: str = Field(alias="paymentMethod")
    cart_item_ids: Optional[List[int]] = Field(default=None, alias="cartItemIds")
    direct_product_id: Optional[int] = Field(default=None, alias="directProductId")
    direct_product_quantity: Optional[int] = Field(default=None, alias="directProductQuantity")

    @classmethod
    def from_request(cls, request: CheckoutRequest) -> "CheckoutRequestSchema":
        address = request.address
        fields = {
            "address_line1": address.line1,
            "address_line2": address.line2,
            "district": address.district,
            "state": address.state,
            "country": address.country,
            "phone_number": address.phone.value,
            "alternative_phone_number": (
                address.alternate_phone.value if address.alternate_phone else None
            ),
            "payment_method": request.payment_method.value,
        }
        source = request.source
        if isinstance(source, CartSubset):
            fields["cart_item_ids"] = sorted(source.cart_item_ids)
        elif isinstance(source, DirectItem):
            fields["direct_product_id"] = source.product_id.value
            fields["direct_product_quantity"] = source.quantity
        else:
            raise TypeError(f"Unsupported checkout source: {type(source).__name__}")
        return cls(**fields)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class OrderResponseSchema(WireModel):
    order_id: str = Field(alias="orderId")

    @classmethod
    def parse(cls, data) -> "OrderResponseSchema":
        # The backend sends a numeric id; keep it opaque on our side
        if isinstance(data, dict) and isinstance(data.get("orderId"), int):
            data = {**data, "orderId": str(data["orderId"])}
        return cls.model_validate(data)

    def to_result(self) -> OrderResult:
        return OrderResult(order_id=self.order_id)
