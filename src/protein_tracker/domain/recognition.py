"""Models for image classification results."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from protein_tracker.domain.foods import FoodRecord


class Prediction(BaseModel):
    """Single (label, probability) pair produced by the classifier."""

    label: str
    probability: float = Field(ge=0.0, le=1.0)


class ClassifierState(str, Enum):
    """Lifecycle of the lazily loaded classifier."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class RecognitionStatus(str, Enum):
    """Outcome of a recognition request."""

    OK = "ok"
    NO_MATCH = "no_match"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class RecognitionOutcome:
    """Resolved foods for an image, or the reason there are none."""

    status: RecognitionStatus
    foods: list[FoodRecord] = field(default_factory=list)
    error: str | None = None
