"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

import pytest

from protein_tracker.adapters.off_client import OpenFoodFactsClient
from protein_tracker.config import Settings
from protein_tracker.containers import AppContainer
from protein_tracker.domain.errors import SourceUnavailableError
from protein_tracker.domain.ledger import LedgerEntry, RecentFood
from protein_tracker.domain.recognition import Prediction
from protein_tracker.services.ledger import LedgerRepository, LedgerService
from protein_tracker.services.recognition import (
    ImageClassifier,
    LazyClassifier,
    RecognitionService,
)
from protein_tracker.services.search import FoodSearchService


def off_product(  # noqa: PLR0913
    code: str | None,
    name: str | None,
    proteins_100g: object = None,
    *,
    proteins_serving: object = None,
    serving_quantity: object = None,
    brands: str | None = None,
) -> dict[str, object]:
    """Build a raw Open Food Facts product payload."""
    nutriments: dict[str, object] = {}
    if proteins_100g is not None:
        nutriments["proteins_100g"] = proteins_100g
    if proteins_serving is not None:
        nutriments["proteins_serving"] = proteins_serving
    product: dict[str, object] = {"nutriments": nutriments}
    if code is not None:
        product["code"] = code
    if name is not None:
        product["product_name"] = name
    if brands is not None:
        product["brands"] = brands
    if serving_quantity is not None:
        product["serving_quantity"] = serving_quantity
    return product


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client returning canned payloads."""

    structured: list[dict[str, object]] = field(default_factory=list)
    text: list[dict[str, object]] = field(default_factory=list)
    products: dict[str, dict[str, object]] = field(default_factory=dict)
    fail_structured: bool = False
    fail_text: bool = False
    fail_product: bool = False
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def search_products(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        self.calls.append(("structured", query))
        if self.fail_structured:
            raise SourceUnavailableError("structured search down")
        return {"products": list(self.structured)}

    async def search_text(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, object]:
        self.calls.append(("text", query))
        if self.fail_text:
            raise SourceUnavailableError("text search down")
        return {"products": list(self.text)}

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.calls.append(("barcode", barcode))
        if self.fail_product:
            raise SourceUnavailableError("product lookup down")
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "product": product}


@dataclass
class FakeClassifier(ImageClassifier):
    """Fake classifier returning fixed predictions."""

    predictions: list[Prediction] = field(
        default_factory=lambda: [
            Prediction(label="cheeseburger", probability=0.82),
            Prediction(label="plate", probability=0.10),
        ]
    )
    fail: bool = False
    calls: int = 0

    async def classify(self, image_bytes: bytes, top_k: int) -> list[Prediction]:
        self.calls += 1
        if self.fail:
            raise RuntimeError("inference crashed")
        return self.predictions[:top_k]


def loader_for(classifier: ImageClassifier):  # type: ignore[no-untyped-def]
    """Return a loader that yields the given classifier."""

    async def load() -> ImageClassifier:
        return classifier

    return load


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    """In-memory ledger repository for tests."""

    entries: list[LedgerEntry] = field(default_factory=list)
    goal_g: float | None = None
    recent: dict[str, RecentFood] = field(default_factory=dict)

    def add_entry(self, entry: LedgerEntry) -> None:
        self.entries.append(entry)

    def remove_entry(self, day: date, entry_id: UUID) -> bool:
        before = len(self.entries)
        self.entries = [
            entry
            for entry in self.entries
            if not (entry.id == entry_id and entry.day == day)
        ]
        return len(self.entries) < before

    def list_entries(self, start: date, end: date) -> list[LedgerEntry]:
        return sorted(
            (entry for entry in self.entries if start <= entry.day <= end),
            key=lambda entry: entry.logged_at,
        )

    def get_goal(self) -> float | None:
        return self.goal_g

    def set_goal(self, goal_g: float) -> None:
        self.goal_g = goal_g

    def upsert_recent_food(self, food: RecentFood) -> None:
        self.recent[food.name] = food

    def list_recent_foods(self, limit: int) -> list[RecentFood]:
        ordered = sorted(
            self.recent.values(), key=lambda food: food.last_used_at, reverse=True
        )
        return ordered[:limit]

    def prune_recent_foods(self, keep: int) -> None:
        kept = self.list_recent_foods(keep)
        self.recent = {food.name: food for food in kept}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
    )


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def fake_classifier() -> FakeClassifier:
    return FakeClassifier()


@pytest.fixture
def ledger_repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def container(
    settings: Settings,
    off_client: FakeOpenFoodFactsClient,
    fake_classifier: FakeClassifier,
    ledger_repository: InMemoryLedgerRepository,
) -> AppContainer:
    classifier = LazyClassifier(loader_for(fake_classifier))
    recognition_service = RecognitionService(
        classifier=classifier,
        min_confidence=settings.recognition_min_confidence,
        max_results=settings.recognition_max_results,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        search_service=FoodSearchService(client=off_client),
        classifier=classifier,
        recognition_service=recognition_service,
        ledger_service=LedgerService(
            repository=ledger_repository,
            default_goal_g=settings.default_protein_goal_g,
        ),
        close_resources=close_resources,
    )
