"""
HTTP implementation of the order repository
"""

from pydantic import ValidationError as SchemaError

from storefront.domain.repositories.order_repository import (
    CheckoutRequest,
    OrderRepository,
    OrderResult,
)
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.http.api_client import StorefrontApiClient
from storefront.infrastructure.http.schemas import CheckoutRequestSchema, OrderResponseSchema
from storefront.infrastructure.utilities.constants import ApiPaths, HttpHeaders
from storefront.infrastructure.utilities.exceptions import NetworkOrServerError


class HttpOrderRepository(OrderRepository):
    """Places orders through POST /checkout"""

    def __init__(self, api_client: StorefrontApiClient):
        self._api = api_client

    async def submit_order(
        self, session: Session, request: CheckoutRequest, idempotency_key: str
    ) -> OrderResult:
        payload = CheckoutRequestSchema.from_request(request).to_payload()
        response = await self._api.request(
            "POST",
            ApiPaths.CHECKOUT,
            session,
            json=payload,
            headers={HttpHeaders.IDEMPOTENCY_KEY: idempotency_key},
        )
        try:
            return OrderResponseSchema.parse(self._api.json_body(response)).to_result()
        except SchemaError as e:
            raise NetworkOrServerError(f"Malformed order response: {e}") from e
