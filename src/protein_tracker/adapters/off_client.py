"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from protein_tracker.domain.errors import SourceUnavailableError

_PRODUCT_FIELDS = (
    "code,product_name,brands,nutriments,serving_quantity,image_front_small_url"
)


class OpenFoodFactsClient(Protocol):
    """Interface for Open Food Facts lookups."""

    async def search_products(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        """Run a structured (category) search and return raw API data."""

    async def search_text(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        """Run a free-text search and return raw API data."""

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client.

    Transport errors and non-success responses are raised as
    ``SourceUnavailableError``.
    """

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, timeout_seconds: float = 15.0
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_products(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        """Search products tagged with the query as a category."""
        return await self._get_json(
            f"{self.base_url}/api/v2/search",
            params={
                "categories_tags_en": query,
                "fields": _PRODUCT_FIELDS,
                "page": page,
                "page_size": page_size,
            },
        )

    async def search_text(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        """Search products by free text."""
        return await self._get_json(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": query,
                "json": 1,
                "fields": _PRODUCT_FIELDS,
                "page": page,
                "page_size": page_size,
            },
        )

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a single product by barcode."""
        return await self._get_json(f"{self.base_url}/api/v0/product/{barcode}.json")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_json(
        self, url: str, params: dict[str, object] | None = None
    ) -> dict[str, object]:
        try:
            response = await self.http_client.get(
                url,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailableError(
                f"Open Food Facts returned {exc.response.status_code} for {url}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise SourceUnavailableError(
                f"Open Food Facts request failed: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise SourceUnavailableError(
                f"Open Food Facts returned a non-object body for {url}"
            )
        return payload
