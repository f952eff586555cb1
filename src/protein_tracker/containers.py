"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from protein_tracker.adapters.off_client import HttpxOpenFoodFactsClient
from protein_tracker.adapters.openai_classifier import openai_classifier_loader
from protein_tracker.adapters.supabase_ledger_repository import (
    SupabaseLedgerRepository,
)
from protein_tracker.config import Settings
from protein_tracker.services.ledger import LedgerService
from protein_tracker.services.recognition import LazyClassifier, RecognitionService
from protein_tracker.services.search import FoodSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    search_service: FoodSearchService
    classifier: LazyClassifier
    recognition_service: RecognitionService
    ledger_service: LedgerService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
        timeout_seconds=resolved_settings.remote_timeout_seconds,
    )
    search_service = FoodSearchService(
        client=off_client,
        page_size=resolved_settings.off_page_size,
    )
    classifier = LazyClassifier(
        openai_classifier_loader(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
        ),
        load_timeout_seconds=resolved_settings.classifier_load_timeout_seconds,
    )
    recognition_service = RecognitionService(
        classifier=classifier,
        min_confidence=resolved_settings.recognition_min_confidence,
        max_results=resolved_settings.recognition_max_results,
    )
    ledger_service = LedgerService(
        repository=SupabaseLedgerRepository(supabase_client),
        default_goal_g=resolved_settings.default_protein_goal_g,
    )

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        search_service=search_service,
        classifier=classifier,
        recognition_service=recognition_service,
        ledger_service=ledger_service,
        close_resources=close_resources,
    )
