"""Korea Food Safety open API client for the COOKRCP01 recipe dataset."""

from dataclasses import dataclass
from typing import Protocol

import httpx

SERVICE_ID = "COOKRCP01"


class RecipeCorpusClient(Protocol):
    """Interface for paging through the public recipe dataset."""

    async def fetch_rows(self, start: int, end: int) -> list[dict[str, str]]:
        """Return raw recipe rows for the inclusive 1-based range."""


@dataclass
class HttpxFoodSafetyClient(RecipeCorpusClient):
    """HTTPX-backed COOKRCP01 client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFoodSafetyClient":
        """Create a client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def fetch_rows(self, start: int, end: int) -> list[dict[str, str]]:
        """Fetch one page of recipe rows."""
        url = f"{self.base_url}/{self.api_key}/{SERVICE_ID}/json/{start}/{end}"
        response = await self.http_client.get(url, timeout=30)
        response.raise_for_status()
        payload = response.json()
        section = payload.get(SERVICE_ID) or {}
        return list(section.get("row") or [])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
