"""Canonical food records shared by every resolution path."""

import math
from dataclasses import dataclass
from enum import Enum

DEFAULT_SERVING_SIZE = 100.0
DEFAULT_SERVING_UNIT = "g"
UNKNOWN_PRODUCT_NAME = "Unknown Product"


class FoodSource(str, Enum):
    """Where a food record came from."""

    CURATED = "curated"
    REMOTE = "remote"
    RECOGNIZED = "recognized"


@dataclass(frozen=True)
class FoodRecord:
    """Normalized, immutable nutrient record.

    ``protein_per_100`` is grams of protein per 100 units of ``serving_unit``
    and is the reference quantity for every scaling operation.
    ``confidence`` is only set for recognized records; ``None`` means the
    record has no confidence concept, which is not the same as zero.
    """

    id: str
    name: str
    protein_per_100: float
    protein_per_serving: float
    source: FoodSource
    brand: str = ""
    serving_size: float = DEFAULT_SERVING_SIZE
    serving_unit: str = DEFAULT_SERVING_UNIT
    confidence: int | None = None
    image: str | None = None
    label: str | None = None


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Values too large to scale are returned unchanged.
    """
    scaled = abs(value) * 10
    if not math.isfinite(scaled):
        return value
    rounded = math.floor(scaled + 0.5) / 10
    return math.copysign(rounded, value) if value else 0.0


def to_percent(probability: float) -> int:
    """Convert a probability in [0, 1] to a whole percentage."""
    return int(math.floor(probability * 100 + 0.5))
