"""Photo recognition: a lazily loaded classifier and label resolution."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from protein_tracker.domain.errors import ClassifierUnavailableError
from protein_tracker.domain.recognition import (
    ClassifierState,
    Prediction,
    RecognitionOutcome,
    RecognitionStatus,
)
from protein_tracker.services.label_resolver import resolve_labels

_logger = logging.getLogger(__name__)


class ImageClassifier(Protocol):
    """Interface for image classification backends."""

    async def classify(self, image_bytes: bytes, top_k: int) -> list[Prediction]:
        """Return up to ``top_k`` predictions, most probable first."""


ClassifierLoader = Callable[[], Awaitable[ImageClassifier]]


class LazyClassifier:
    """Classifier that is loaded on first use and shared afterwards.

    Concurrent callers wait on the same load task. A failed load is
    reported through ``state``/``error`` and retried by the next caller.
    """

    def __init__(
        self, loader: ClassifierLoader, load_timeout_seconds: float = 10.0
    ) -> None:
        self._loader = loader
        self._load_timeout_seconds = load_timeout_seconds
        self._classifier: ImageClassifier | None = None
        self._task: asyncio.Task[ImageClassifier] | None = None
        self._state = ClassifierState.UNINITIALIZED
        self._error: BaseException | None = None

    @property
    def state(self) -> ClassifierState:
        """Current lifecycle state."""
        return self._state

    @property
    def error(self) -> BaseException | None:
        """The exception from the last failed load, if any."""
        return self._error

    def start(self) -> "asyncio.Task[ImageClassifier]":
        """Begin loading without waiting, reusing an in-flight load."""
        if self._task is None:
            self._state = ClassifierState.INITIALIZING
            self._error = None
            self._task = asyncio.ensure_future(self._load())
            self._task.add_done_callback(_retrieve_exception)
        return self._task

    async def acquire(self) -> ImageClassifier:
        """Return the loaded classifier, loading it if needed.

        Raises ``ClassifierUnavailableError`` if loading fails or takes longer
        than the configured timeout. A timed-out load keeps running.
        """
        if self._classifier is not None:
            return self._classifier
        task = self.start()
        try:
            return await asyncio.wait_for(
                asyncio.shield(task), timeout=self._load_timeout_seconds
            )
        except TimeoutError as exc:
            raise ClassifierUnavailableError("Classifier is still loading") from exc

    async def _load(self) -> ImageClassifier:
        try:
            classifier = await self._loader()
        except Exception as exc:
            self._state = ClassifierState.FAILED
            self._error = exc
            self._task = None
            _logger.exception("Failed to load image classifier")
            raise ClassifierUnavailableError("Classifier failed to load") from exc
        self._classifier = classifier
        self._state = ClassifierState.READY
        _logger.info("Image classifier loaded")
        return classifier


def _retrieve_exception(task: "asyncio.Task[ImageClassifier]") -> None:
    # Failures are already logged and exposed through LazyClassifier.error.
    if not task.cancelled():
        task.exception()


@dataclass
class RecognitionService:
    """Classifies food photos and resolves labels into food records."""

    classifier: LazyClassifier
    min_confidence: float = 0.3
    max_results: int = 3

    async def recognize(self, image_bytes: bytes) -> RecognitionOutcome:
        """Recognize foods in an image.

        An unusable classifier yields ``unavailable``, distinct from
        ``no_match`` when classification worked but nothing resolved.
        """
        try:
            classifier = await self.classifier.acquire()
            predictions = await classifier.classify(image_bytes, self.max_results)
        except ClassifierUnavailableError as exc:
            _logger.warning("Recognition unavailable: %s", exc)
            return RecognitionOutcome(
                status=RecognitionStatus.UNAVAILABLE, error=str(exc)
            )
        except Exception as exc:
            _logger.exception("Image classification failed")
            return RecognitionOutcome(
                status=RecognitionStatus.UNAVAILABLE,
                error=f"Classification failed: {exc}",
            )

        foods = resolve_labels(
            predictions,
            min_confidence=self.min_confidence,
            max_results=self.max_results,
        )
        if not foods:
            return RecognitionOutcome(status=RecognitionStatus.NO_MATCH)
        return RecognitionOutcome(status=RecognitionStatus.OK, foods=foods)
