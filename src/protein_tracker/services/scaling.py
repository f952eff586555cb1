"""Serving-size scaling and ledger entry construction."""

import math
from datetime import UTC, date, datetime
from uuid import uuid4

from protein_tracker.domain.errors import InvalidServingSizeError
from protein_tracker.domain.foods import FoodRecord, round1
from protein_tracker.domain.ledger import LedgerEntry, MealType


def scale_protein(record: FoodRecord, serving_size: float) -> float:
    """Return grams of protein in ``serving_size`` units of the record.

    Scales linearly from ``protein_per_100``. ``serving_size`` must be
    positive and in the record's ``serving_unit``; callers validate it.
    """
    return round1(record.protein_per_100 * serving_size / 100)


def build_entry(
    record: FoodRecord,
    *,
    serving_size: float,
    meal: MealType,
    day: date,
    logged_at: datetime | None = None,
) -> LedgerEntry:
    """Pair a resolved record with a chosen serving to form a ledger entry."""
    if not math.isfinite(serving_size) or serving_size <= 0:
        raise InvalidServingSizeError(
            f"Serving size must be a positive number, got {serving_size}"
        )
    return LedgerEntry(
        id=uuid4(),
        day=day,
        meal=meal,
        name=record.name,
        brand=record.brand,
        protein_g=scale_protein(record, serving_size),
        serving_size=serving_size,
        serving_unit=record.serving_unit,
        source=record.source,
        food_id=record.id or None,
        logged_at=logged_at or datetime.now(tz=UTC),
    )
