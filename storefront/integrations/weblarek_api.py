"""
Catalog/order API client.

Endpoints (relative to the API URL):
- GET  /product/  -> {"total": n, "items": [product, ...]}
- POST /order/    -> {"id": "...", "total": n}

Failures surface as ``ApiException``. There is no retry.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from storefront.core.constants import API_TIMEOUT_SECONDS
from storefront.core.exceptions import ApiException
from storefront.domain.order import OrderRequest, OrderResult
from storefront.domain.product import Product

logger = logging.getLogger(__name__)


class StorefrontApi(Protocol):
    """What the checkout workflow needs from the network."""

    async def fetch_products(self) -> list[Product]: ...

    async def submit_order(self, order: OrderRequest) -> OrderResult: ...


def parse_products(data: Any) -> list[Product]:
    """Accept both the paginated ``{"items": [...]}`` shape and a bare list."""
    items = data.get("items", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ApiException(f"Unexpected product list payload: {type(items).__name__}")
    try:
        return [Product.model_validate(item) for item in items]
    except ValidationError as e:
        raise ApiException(f"Invalid product in catalog: {e}") from e


def parse_order_result(data: Any) -> OrderResult:
    try:
        return OrderResult.model_validate(data)
    except ValidationError as e:
        raise ApiException(f"Invalid order confirmation: {e}") from e


def error_message(data: Any, fallback: str) -> str:
    """Server error text from ``{"error": "..."}`` or the HTTP reason."""
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return fallback


class WeblarekApiClient:
    """
    HTTP client for the storefront API.

    Example:
    ```python
    client = WeblarekApiClient("https://larek-api.example/api/weblarek")
    products = await client.fetch_products()
    await client.close()
    ```
    """

    def __init__(self, api_url: str, timeout: float = API_TIMEOUT_SECONDS) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(self, method: str, uri: str, payload: dict | None = None) -> Any:
        url = f"{self.api_url}{uri}"
        session = await self._get_session()
        try:
            async with session.request(method, url, json=payload) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None
                if response.status >= 400:
                    message = error_message(data, response.reason or f"HTTP {response.status}")
                    logger.warning("%s %s failed: %s %s", method, uri, response.status, message)
                    raise ApiException(message, status=response.status)
                return data
        except asyncio.TimeoutError as e:
            raise ApiException(f"{method} {uri} timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise ApiException(f"{method} {uri} failed: {e}") from e

    async def fetch_products(self) -> list[Product]:
        data = await self._request("GET", "/product/")
        products = parse_products(data)
        logger.info("Fetched %d products", len(products))
        return products

    async def submit_order(self, order: OrderRequest) -> OrderResult:
        data = await self._request("POST", "/order/", order.to_payload())
        result = parse_order_result(data)
        logger.info("Order %s accepted, total %s", result.id, result.total)
        return result
