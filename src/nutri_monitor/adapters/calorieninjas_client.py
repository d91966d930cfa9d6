"""CalorieNinjas nutrition API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and raw body text returned by the nutrition API."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        """Return True for 2xx responses."""
        return 200 <= self.status_code < 300  # noqa: PLR2004


class CalorieNinjasClient(Protocol):
    """Interface for CalorieNinjas API interactions."""

    async def get_nutrition(self, query: str) -> UpstreamResponse:
        """Look up nutrition for a free-text query and return the raw response."""


@dataclass
class HttpxCalorieNinjasClient(CalorieNinjasClient):
    """HTTPX-backed CalorieNinjas client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxCalorieNinjasClient":
        """Create a CalorieNinjas client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def get_nutrition(self, query: str) -> UpstreamResponse:
        """Look up nutrition facts for a query."""
        url = f"{self.base_url}/nutrition"
        response = await self.http_client.get(
            url,
            params={"query": query},
            headers={"X-Api-Key": self.api_key},
        )
        return UpstreamResponse(status_code=response.status_code, text=response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
