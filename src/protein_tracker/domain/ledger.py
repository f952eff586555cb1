"""Domain models for the daily protein ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from protein_tracker.domain.foods import FoodSource


class MealType(str, Enum):
    """Meal categories entries are logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class LedgerEntry:
    """A confirmed food entry with its scaled protein amount."""

    id: UUID
    day: date
    meal: MealType
    name: str
    brand: str
    protein_g: float
    serving_size: float
    serving_unit: str
    source: FoodSource
    food_id: str | None
    logged_at: datetime


@dataclass(frozen=True)
class DailyLog:
    """All entries for a calendar day with the goal in effect."""

    day: date
    goal_g: float
    entries: list[LedgerEntry]
    total_protein_g: float

    def entries_for(self, meal: MealType) -> list[LedgerEntry]:
        """Return the entries logged under a meal category."""
        return [entry for entry in self.entries if entry.meal == meal]


@dataclass(frozen=True)
class DailyProgress:
    """Progress of a day's total against the goal."""

    total_protein_g: float
    goal_g: float
    percent: float
    remaining_g: float
    goal_reached: bool


@dataclass(frozen=True)
class DailyTotals:
    """Per-day aggregate used by the history view."""

    day: date
    protein_g: float
    entry_count: int


@dataclass(frozen=True)
class RecentFood:
    """A recently logged food, kept for quick re-logging."""

    name: str
    protein_per_100: float
    serving_size: float
    serving_unit: str
    source: FoodSource
    last_used_at: datetime
