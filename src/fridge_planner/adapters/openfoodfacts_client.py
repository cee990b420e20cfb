"""Open Food Facts product lookup client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ProductLookupClient(Protocol):
    """Interface for barcode product lookups."""

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product record, or None when unknown."""


@dataclass
class HttpxOpenFoodFactsClient(ProductLookupClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/product/{barcode}.json", timeout=10
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") != 1 or not payload.get("product"):
            return None
        return payload["product"]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
