"""Tests for the food search service."""

import asyncio

from protein_tracker.domain.foods import FoodSource
from protein_tracker.services.search import FoodSearchService
from tests.conftest import FakeOpenFoodFactsClient, off_product


def test_search_puts_curated_before_remote(off_client: FakeOpenFoodFactsClient) -> None:
    off_client.structured = [
        off_product("111", "chicken breast (cooked)", 31.2),
        off_product("222", "Chicken Nuggets", 14),
    ]
    off_client.text = [off_product("333", "Chicken Wrap", 9)]
    service = FoodSearchService(client=off_client)

    results = asyncio.run(service.search("chicken"))

    assert [food.name for food in results] == [
        "Chicken Breast (cooked)",
        "Chicken Nuggets",
        "Chicken Wrap",
    ]
    assert results[0].source is FoodSource.CURATED
    assert {food.source for food in results[1:]} == {FoodSource.REMOTE}


def test_search_remote_merges_structured_first(
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.structured = [off_product("X123", "Structured Name", 10)]
    off_client.text = [off_product("X123", "Text Name", 10)]
    service = FoodSearchService(client=off_client)

    results = asyncio.run(service.search_remote("yogurt"))

    assert [food.name for food in results] == ["Structured Name"]


def test_one_failing_query_keeps_the_other(
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.fail_structured = True
    off_client.text = [off_product("9", "Lentil Pasta", 21)]
    service = FoodSearchService(client=off_client)

    results = asyncio.run(service.search("lentil"))

    assert [food.name for food in results] == ["Lentils (cooked)", "Lentil Pasta"]


def test_remote_outage_degrades_to_curated(
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.fail_structured = True
    off_client.fail_text = True
    service = FoodSearchService(client=off_client)

    results = asyncio.run(service.search("beef"))

    assert [food.source for food in results] == [FoodSource.CURATED] * 2


def test_blank_query_skips_all_sources(off_client: FakeOpenFoodFactsClient) -> None:
    service = FoodSearchService(client=off_client)

    assert asyncio.run(service.search("   ")) == []
    assert off_client.calls == []


def test_lookup_barcode_normalizes_product(
    off_client: FakeOpenFoodFactsClient,
) -> None:
    product = off_product(None, "Protein Pudding", 10, serving_quantity=200)
    off_client.products["4001"] = product
    service = FoodSearchService(client=off_client)

    record = asyncio.run(service.lookup_barcode("4001"))

    assert record is not None
    assert record.id == "4001"
    assert record.protein_per_serving == 20.0


def test_lookup_barcode_not_found_or_unavailable(
    off_client: FakeOpenFoodFactsClient,
) -> None:
    service = FoodSearchService(client=off_client)

    assert asyncio.run(service.lookup_barcode("0000")) is None

    off_client.fail_product = True
    assert asyncio.run(service.lookup_barcode("0000")) is None
