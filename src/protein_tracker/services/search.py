"""Food search service combining curated foods with Open Food Facts."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from protein_tracker.adapters.off_client import OpenFoodFactsClient
from protein_tracker.domain.errors import SourceUnavailableError
from protein_tracker.domain.foods import FoodRecord
from protein_tracker.services.combiner import search_with_fallback
from protein_tracker.services.curated import CURATED_FOODS
from protein_tracker.services.merger import merge_results
from protein_tracker.services.normalizer import normalize_product

_logger = logging.getLogger(__name__)

_PRODUCT_FOUND = 1


@dataclass
class FoodSearchService:
    """Text and barcode lookups over the curated set and the remote source."""

    client: OpenFoodFactsClient
    page_size: int = 20
    curated_foods: tuple[FoodRecord, ...] = CURATED_FOODS

    async def search(self, query: str) -> list[FoodRecord]:
        """Return curated matches followed by non-duplicate remote matches."""
        cleaned = query.strip()
        if not cleaned:
            return []
        return await search_with_fallback(
            cleaned, self.search_remote, self.curated_foods
        )

    async def search_remote(self, query: str) -> list[FoodRecord]:
        """Run the structured and free-text queries and merge their results."""
        structured, text = await asyncio.gather(
            self._fetch_products(
                lambda: self.client.search_products(query, page_size=self.page_size),
                action="structured search",
            ),
            self._fetch_products(
                lambda: self.client.search_text(query, page_size=self.page_size),
                action="text search",
            ),
        )
        results = merge_results(structured, text)
        _logger.info(
            "Remote search: query=%s structured=%s text=%s merged=%s",
            query,
            len(structured),
            len(text),
            len(results),
        )
        return results

    async def lookup_barcode(self, barcode: str) -> FoodRecord | None:
        """Return the product for a barcode, or ``None`` if it can't be found."""
        try:
            payload = await self.client.get_product(barcode)
        except SourceUnavailableError as exc:
            _logger.warning("Barcode lookup failed: barcode=%s error=%s", barcode, exc)
            return None
        product = payload.get("product")
        if payload.get("status") != _PRODUCT_FOUND or not isinstance(product, Mapping):
            return None
        return normalize_product({"code": barcode, **product})

    async def _fetch_products(
        self,
        func: Callable[[], Awaitable[dict[str, object]]],
        *,
        action: str,
    ) -> list[Mapping[str, object]]:
        """Return raw products from one query, or nothing if it failed."""
        try:
            payload = await func()
        except SourceUnavailableError as exc:
            _logger.warning("Open Food Facts %s failed: %s", action, exc)
            return []
        products = payload.get("products")
        if not isinstance(products, list):
            return []
        return [product for product in products if isinstance(product, Mapping)]
