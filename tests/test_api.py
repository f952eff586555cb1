"""Tests for the HTTP API."""

import json
import math

from fastapi.testclient import TestClient

from protein_tracker.api.app import create_app
from protein_tracker.domain.recognition import Prediction
from tests.conftest import (
    FakeClassifier,
    FakeOpenFoodFactsClient,
    InMemoryLedgerRepository,
    off_product,
)


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_search_returns_curated_then_remote(
    container, off_client: FakeOpenFoodFactsClient
) -> None:
    off_client.text = [
        off_product("1", "CHICKEN BREAST (COOKED)", 30),
        off_product("2", "Chicken Jerky", 33),
    ]
    client = TestClient(create_app(container))

    response = client.get("/foods/search", params={"q": "chicken"})

    assert response.status_code == 200
    foods = response.json()["foods"]
    assert [food["name"] for food in foods] == [
        "Chicken Breast (cooked)",
        "Chicken Jerky",
    ]
    assert foods[0]["source"] == "curated"
    assert foods[0]["confidence"] is None


def test_barcode_lookup(container, off_client: FakeOpenFoodFactsClient) -> None:
    off_client.products["5000"] = off_product("5000", "Whey Isolate", 90)
    client = TestClient(create_app(container))

    found = client.get("/foods/barcode/5000")
    missing = client.get("/foods/barcode/0000")

    assert found.status_code == 200
    assert found.json()["protein_per_100"] == 90
    assert missing.status_code == 404


def test_recognize_returns_status_and_foods(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/foods/recognize", content=b"\xff\xd8\xffimage")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["foods"][0]["name"] == "Cheeseburger"
    assert body["foods"][0]["confidence"] == 82


def test_recognize_distinguishes_no_match(
    container, fake_classifier: FakeClassifier
) -> None:
    fake_classifier.predictions = [Prediction(label="tablecloth", probability=0.7)]
    client = TestClient(create_app(container))

    body = client.post("/foods/recognize", content=b"image").json()

    assert body["status"] == "no_match"
    assert body["foods"] == []


def test_recognize_rejects_empty_body(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/foods/recognize", content=b"")

    assert response.status_code == 400


def test_classifier_status_after_use(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/classifier/status").json()["state"] == "uninitialized"
    client.post("/foods/recognize", content=b"image")
    assert client.get("/classifier/status").json() == {
        "state": "ready",
        "error": None,
    }


def test_log_entry_and_read_day(
    container, ledger_repository: InMemoryLedgerRepository
) -> None:
    client = TestClient(create_app(container))
    food = client.get("/foods/search", params={"q": "tofu"}).json()["foods"][0]

    created = client.post(
        "/ledger/2026-10-18/entries",
        json={"food": food, "meal": "lunch", "serving_size": 150},
    )

    assert created.status_code == 201
    body = created.json()
    assert body["total_protein_g"] == 12.0
    assert body["entries"][0]["name"] == "Tofu (firm)"
    assert body["progress"]["remaining_g"] == 138.0
    assert len(ledger_repository.entries) == 1

    day = client.get("/ledger/2026-10-18").json()
    assert day["total_protein_g"] == 12.0

    entry_id = body["entries"][0]["id"]
    removed = client.delete(f"/ledger/2026-10-18/entries/{entry_id}")
    assert removed.status_code == 200
    assert removed.json()["entries"] == []
    assert client.delete(f"/ledger/2026-10-18/entries/{entry_id}").status_code == 404


def test_log_entry_rejects_non_positive_serving(container) -> None:
    client = TestClient(create_app(container))
    food = client.get("/foods/search", params={"q": "tofu"}).json()["foods"][0]

    response = client.post(
        "/ledger/2026-10-18/entries",
        json={"food": food, "meal": "lunch", "serving_size": 0},
    )

    assert response.status_code == 400


def test_log_entry_and_goal_reject_non_finite_numbers(container) -> None:
    client = TestClient(create_app(container))
    food = client.get("/foods/search", params={"q": "tofu"}).json()["foods"][0]
    headers = {"Content-Type": "application/json"}

    response = client.post(
        "/ledger/2026-10-18/entries",
        content=json.dumps({"food": food, "meal": "lunch", "serving_size": math.nan}),
        headers=headers,
    )
    assert response.status_code == 400

    response = client.put(
        "/goal", content=json.dumps({"goal_g": math.inf}), headers=headers
    )
    assert response.status_code == 400
    assert client.get("/goal").json() == {"goal_g": 150}


def test_goal_history_and_recent(container) -> None:
    client = TestClient(create_app(container))
    food = client.get("/foods/search", params={"q": "salmon"}).json()["foods"][0]
    client.post(
        "/ledger/2026-10-17/entries",
        json={"food": food, "meal": "dinner", "serving_size": 200},
    )

    assert client.get("/goal").json() == {"goal_g": 150}
    assert client.put("/goal", json={"goal_g": 120}).json() == {"goal_g": 120}
    assert client.put("/goal", json={"goal_g": -1}).status_code == 400

    history = client.get(
        "/ledger/history", params={"start": "2026-10-12", "end": "2026-10-18"}
    ).json()
    assert history == [{"day": "2026-10-17", "protein_g": 50.0, "entry_count": 1}]

    recent = client.get("/ledger/recent").json()
    assert [food["name"] for food in recent] == ["Salmon (cooked)"]

    bad_range = client.get(
        "/ledger/history", params={"start": "2026-10-18", "end": "2026-10-12"}
    )
    assert bad_range.status_code == 400


def test_lifespan_preloads_classifier(container) -> None:
    with TestClient(create_app(container)) as client:
        client.post("/foods/recognize", content=b"image")
        status = client.get("/classifier/status").json()

    assert status["state"] == "ready"
