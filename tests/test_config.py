"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from protein_tracker.config import Settings


def test_settings_defaults(settings: Settings) -> None:
    assert settings.recognition_min_confidence == 0.3
    assert settings.recognition_max_results == 3
    assert settings.default_protein_goal_g == 150
    assert settings.off_base_url == "https://world.openfoodfacts.org"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai")
    monkeypatch.setenv("RECOGNITION_MIN_CONFIDENCE", "0.5")

    loaded = Settings()

    assert loaded.supabase_url == "https://env.supabase.co"
    assert loaded.recognition_min_confidence == 0.5


def test_settings_reject_out_of_range_confidence(settings: Settings) -> None:
    with pytest.raises(ValidationError):
        Settings(
            supabase_url=settings.supabase_url,
            supabase_service_key=settings.supabase_service_key,
            openai_api_key=settings.openai_api_key,
            recognition_min_confidence=1.5,
        )
