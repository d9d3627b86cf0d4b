"""
Store backend API client

Thin wrapper over httpx.AsyncClient that attaches the bearer credential and
converts every transport or status failure into the storefront error taxonomy.
"""

import time
from typing import Any, Dict, Optional

import httpx

from storefront.domain.value_objects.session import Session
from storefront.infrastructure.logging.logging_config import (
    RequestLog,
    get_structured_logger,
    log_request,
)
from storefront.infrastructure.utilities.constants import HttpHeaders
from storefront.infrastructure.utilities.exceptions import (
    AuthRequiredError,
    EmptyResourceError,
    NetworkOrServerError,
)


class StorefrontApiClient:
    """Authenticated JSON client for the store backend"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        self._logger = get_structured_logger(self.__class__.__name__)

    async def request(
        self,
        method: str,
        path: str,
        session: Session,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        not_found_is_empty: bool = False,
    ) -> httpx.Response:
        """
        Send one request and return the successful response.

        Raises AuthRequiredError on 401/403 and NetworkOrServerError on any
        other failure. A 404 becomes EmptyResourceError only when
        ``not_found_is_empty`` is set (reads of a resource that may not exist
        yet).
        """
        request_headers = {HttpHeaders.AUTHORIZATION: session.authorization_header()}
        if headers:
            request_headers.update(headers)

        start_time = time.monotonic()
        try:
            response = await self._client.request(
                method, path, json=json, headers=request_headers
            )
        except httpx.HTTPError as e:
            elapsed = time.monotonic() - start_time
            log_request(RequestLog(method, path, elapsed, status="error"))
            self._logger.error(
                "api_request_failed", method=method, path=path, error=str(e)
            )
            raise NetworkOrServerError(f"{method} {path} failed: {e}") from e

        elapsed = time.monotonic() - start_time
        status = "success" if response.is_success else "error"
        log_request(RequestLog(method, path, elapsed, status=status, status_code=response.status_code))
        self._logger.info(
            "api_request",
            method=method,
            path=path,
            status_code=response.status_code,
            elapsed_ms=round(elapsed * 1000, 1),
        )

        if response.status_code in (401, 403):
            raise AuthRequiredError(f"{method} {path} rejected the credential")
        if response.status_code == 404 and not_found_is_empty:
            raise EmptyResourceError(path)
        if not response.is_success:
            raise NetworkOrServerError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def json_body(response: httpx.Response) -> Any:
        """Decoded JSON body, or None for an empty acknowledgement"""
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkOrServerError(
                f"Malformed response body from {response.request.url.path}",
                status_code=response.status_code,
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
