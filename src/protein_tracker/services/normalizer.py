"""Conversion of raw Open Food Facts products into food records."""

import math
from collections.abc import Mapping

from protein_tracker.domain.foods import (
    DEFAULT_SERVING_SIZE,
    DEFAULT_SERVING_UNIT,
    UNKNOWN_PRODUCT_NAME,
    FoodRecord,
    FoodSource,
    round1,
)

IDENTITY_KEY = "code"
_PROTEIN_KEYS = ("proteins_100g", "proteins")
_PROTEIN_SERVING_KEY = "proteins_serving"


def normalize_product(raw: Mapping[str, object]) -> FoodRecord:
    """Build a remote food record from a raw product.

    Never raises: missing or malformed fields fall back to defaults, so a
    product without a nutrient map yields ``protein_per_100 == 0``.
    """
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, Mapping):
        nutriments = {}

    protein_per_100 = 0.0
    for key in _PROTEIN_KEYS:
        value = _as_float(nutriments.get(key))
        if value is not None:
            protein_per_100 = max(value, 0.0)
            break

    serving_size = _serving_size(raw, nutriments)
    measured = _as_float(nutriments.get(_PROTEIN_SERVING_KEY))
    if measured is not None and measured >= 0:
        protein_per_serving = measured
    else:
        protein_per_serving = protein_per_100 * serving_size / 100
    if not math.isfinite(protein_per_serving):
        protein_per_serving = 0.0

    code = raw.get(IDENTITY_KEY)
    return FoodRecord(
        id=str(code) if code is not None else "",
        name=_text(raw.get("product_name")) or UNKNOWN_PRODUCT_NAME,
        brand=_text(raw.get("brands")),
        protein_per_100=round1(protein_per_100),
        protein_per_serving=round1(protein_per_serving),
        serving_size=serving_size,
        serving_unit=DEFAULT_SERVING_UNIT,
        source=FoodSource.REMOTE,
        image=_text(raw.get("image_front_small_url")) or None,
    )


def _serving_size(
    raw: Mapping[str, object], nutriments: Mapping[str, object]
) -> float:
    """Pick the declared serving size, defaulting to 100 units."""
    for candidate in (raw.get("serving_quantity"), nutriments.get("serving_size")):
        value = _as_float(candidate)
        if value is not None and value > 0:
            return value
    return DEFAULT_SERVING_SIZE


def _as_float(value: object) -> float | None:
    """Coerce numbers and numeric strings, rejecting everything else."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
