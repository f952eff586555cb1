"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from protein_tracker.api.ledger import router as ledger_router
from protein_tracker.api.models import (
    ClassifierStatusResponse,
    FoodRecordModel,
    RecognitionResponse,
    SearchResponse,
)
from protein_tracker.app_logging import configure_logging
from protein_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Warm the classifier so the first photo doesn't wait on the load.
        app.state.container.classifier.start()
        logger.info("Classifier preload started")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(ledger_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(q: str, request: Request) -> SearchResponse:
        """Search curated and remote foods."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.search_service.search(q)
        return SearchResponse(
            query=q, foods=[FoodRecordModel.model_validate(food) for food in foods]
        )

    @app.get("/foods/barcode/{code}")
    async def food_by_barcode(code: str, request: Request) -> FoodRecordModel:
        """Look up a packaged food by barcode."""
        state_container: AppContainer = request.app.state.container
        food = await state_container.search_service.lookup_barcode(code)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FoodRecordModel.model_validate(food)

    @app.post("/foods/recognize")
    async def recognize_food(request: Request) -> RecognitionResponse:
        """Recognize foods in a raw image request body."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image body"
            )
        outcome = await state_container.recognition_service.recognize(image_bytes)
        return RecognitionResponse(
            status=outcome.status,
            foods=[FoodRecordModel.model_validate(food) for food in outcome.foods],
            error=outcome.error,
        )

    @app.get("/classifier/status")
    async def classifier_status(request: Request) -> ClassifierStatusResponse:
        """Report whether the classifier is loaded."""
        state_container: AppContainer = request.app.state.container
        classifier = state_container.classifier
        error = classifier.error
        return ClassifierStatusResponse(
            state=classifier.state, error=str(error) if error else None
        )

    return app
